"""Tests for visitor tracking and visitor manager endpoints."""

import pytest
from httpx import AsyncClient

from siteadmin.models.visitor import Visitor

CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@pytest.mark.asyncio
async def test_visit_tracks_new_visitor(client: AsyncClient, admin_auth_headers: dict):
    """Test first visit creates a visitor."""
    response = await client.post(
        "/api/v1/visitor/visit",
        headers={
            "X-Forwarded-For": "203.0.113.99, 10.0.0.1",
            "User-Agent": CHROME_UA,
            "Referer": "https://www.google.com/search?q=site",
        },
    )

    assert response.status_code == 200
    visitor_id = response.json()["visitor_id"]

    response = await client.get(f"/api/v1/visitors/{visitor_id}", headers=admin_auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["ip_address"] == "203.0.113.99"
    assert data["browser"] == "Chrome"
    assert data["os"] == "Windows 10"
    assert data["referer"] == "www.google.com"
    assert data["online"] is True


@pytest.mark.asyncio
async def test_repeat_visit_reuses_visitor(client: AsyncClient):
    headers = {"Client-IP": "203.0.113.100"}

    first = await client.post("/api/v1/visitor/visit", headers=headers)
    second = await client.post("/api/v1/visitor/visit", headers=headers)

    assert first.json()["visitor_id"] == second.json()["visitor_id"]


@pytest.mark.asyncio
async def test_banned_visitor_rejected(
    client: AsyncClient, sample_visitors: list[Visitor], admin_auth_headers: dict
):
    """Test banned visitor gets 403 with the ban reason."""
    response = await client.post(
        "/api/v1/visitor/visit",
        headers={"Client-IP": sample_visitors[2].ip_address},
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "You are banned: spam"

    response = await client.get("/api/v1/logs", headers=admin_auth_headers)
    names = [log["name"] for log in response.json()["logs"]]
    assert "ban-system" in names


@pytest.mark.asyncio
async def test_activity_marks_visitor_online(
    client: AsyncClient, sample_visitors: list[Visitor], admin_auth_headers: dict
):
    offline = sample_visitors[3]

    response = await client.post(
        "/api/v1/visitor/activity",
        headers={"Client-IP": offline.ip_address},
    )
    assert response.status_code == 200
    assert response.json()["visitor_id"] == offline.id

    response = await client.get("/api/v1/visitors/count", headers=admin_auth_headers)
    assert response.json()["online"] == 3


@pytest.mark.asyncio
async def test_activity_unknown_visitor(client: AsyncClient):
    response = await client.post(
        "/api/v1/visitor/activity",
        headers={"Client-IP": "10.200.0.1"},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_visitors(
    client: AsyncClient, sample_visitors: list[Visitor], auth_headers: dict
):
    """Test paginated visitor list."""
    response = await client.get("/api/v1/visitors", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert data["page"] == 1
    assert len(data["visitors"]) == 4
    assert data["online_ids"] == [sample_visitors[0].id, sample_visitors[1].id]
    assert data["banned_count"] == 1
    assert {v["browser"] for v in data["visitors"]} == {"Chrome", "Firefox"}


@pytest.mark.asyncio
async def test_get_visitors_online_sorted(
    client: AsyncClient, sample_visitors: list[Visitor], auth_headers: dict
):
    response = await client.get(
        "/api/v1/visitors",
        params={"filter": "online", "sort": "ip_address", "order": "desc"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [v["ip_address"] for v in data["visitors"]] == ["203.0.113.11", "203.0.113.10"]


@pytest.mark.asyncio
async def test_get_visitors_invalid_sort(client: AsyncClient, auth_headers: dict):
    response = await client.get(
        "/api/v1/visitors",
        params={"sort": "hashed_password"},
        headers=auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_visitors_requires_auth(client: AsyncClient):
    response = await client.get("/api/v1/visitors")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_visitor_counts(
    client: AsyncClient, sample_visitors: list[Visitor], auth_headers: dict
):
    response = await client.get("/api/v1/visitors/count", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"total": 4, "online": 2, "banned": 1}


@pytest.mark.asyncio
async def test_get_visitor_not_found(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/v1/visitors/9999", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_ban_and_unban_visitor(
    client: AsyncClient, sample_visitors: list[Visitor], admin_auth_headers: dict
):
    visitor = sample_visitors[0]

    response = await client.post(
        f"/api/v1/visitors/{visitor.id}/ban",
        json={"reason": "abuse"},
        headers=admin_auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["banned_status"] is True
    assert data["ban_reason"] == "abuse"

    response = await client.post(
        "/api/v1/visitor/visit",
        headers={"Client-IP": visitor.ip_address},
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "You are banned: abuse"

    response = await client.post(
        f"/api/v1/visitors/{visitor.id}/unban",
        headers=admin_auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["banned_status"] is False

    response = await client.post(
        "/api/v1/visitor/visit",
        headers={"Client-IP": visitor.ip_address},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_ban_default_reason(
    client: AsyncClient, sample_visitors: list[Visitor], admin_auth_headers: dict
):
    response = await client.post(
        f"/api/v1/visitors/{sample_visitors[1].id}/ban",
        json={},
        headers=admin_auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["ban_reason"] == "no-reason"


@pytest.mark.asyncio
async def test_ban_unknown_visitor(client: AsyncClient, admin_auth_headers: dict):
    response = await client.post(
        "/api/v1/visitors/9999/ban",
        json={"reason": "spam"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_all_visitors(
    client: AsyncClient, sample_visitors: list[Visitor], admin_auth_headers: dict
):
    response = await client.delete("/api/v1/visitors", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json()["deleted"] == 4

    response = await client.get("/api/v1/visitors/count", headers=admin_auth_headers)
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_visitor_metrics_default_period(
    client: AsyncClient, sample_visitors: list[Visitor], auth_headers: dict
):
    """Test chart data defaults to the last week."""
    response = await client.get("/api/v1/visitors/metrics", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["time_period"] == "last_week"
    assert sum(data["visitors_count"].values()) == 3
    assert data["visitors_country"] == {"CZ": 3, "DE": 1}
    assert data["visitors_browsers"] == {"Chrome": 2, "Firefox": 2}


@pytest.mark.asyncio
async def test_visitor_metrics_last_24_hours(
    client: AsyncClient, sample_visitors: list[Visitor], auth_headers: dict
):
    response = await client.get(
        "/api/v1/visitors/metrics",
        params={"time_period": "last_24_hours"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    counts = response.json()["visitors_count"]
    assert len(counts) == 24
    assert sum(counts.values()) == 2


@pytest.mark.asyncio
async def test_visitor_metrics_all_time(
    client: AsyncClient, sample_visitors: list[Visitor], auth_headers: dict
):
    response = await client.get(
        "/api/v1/visitors/metrics",
        params={"time_period": "all_time"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    counts = response.json()["visitors_count"]
    assert sum(counts.values()) == 4
    assert all(len(key) == 7 and key[4] == "/" for key in counts)


@pytest.mark.asyncio
async def test_visitor_metrics_invalid_period(client: AsyncClient, auth_headers: dict):
    response = await client.get(
        "/api/v1/visitors/metrics",
        params={"time_period": "last_decade"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["Code"] == 400
    assert "last_decade" in response.json()["Message"]
