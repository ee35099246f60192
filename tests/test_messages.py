"""Tests for contact form and inbox endpoints."""

import pytest
from httpx import AsyncClient

from siteadmin.models.visitor import Visitor


def contact_payload(**overrides) -> dict:
    payload = {
        "name": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "message": "Hello, I would like to get in touch.",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_send_message(client: AsyncClient, auth_headers: dict):
    """Test contact message lands in the inbox and tags the visitor."""
    response = await client.post(
        "/api/v1/contact",
        json=contact_payload(),
        headers={"Client-IP": "203.0.113.20"},
    )

    assert response.status_code == 201
    assert response.json()["status"] == "success"

    response = await client.get("/api/v1/inbox", headers=auth_headers)
    data = response.json()
    assert data["total"] == 1
    message = data["messages"][0]
    assert message["email"] == "jane.doe@gmail.com"
    assert message["ip_address"] == "203.0.113.20"
    assert message["status"] == "open"
    assert message["visitor_id"] is not None

    response = await client.get(
        f"/api/v1/visitors/{message['visitor_id']}", headers=auth_headers
    )
    assert response.json()["email"] == "jane.doe@gmail.com"


@pytest.mark.asyncio
async def test_send_message_invalid_email(client: AsyncClient):
    response = await client.post(
        "/api/v1/contact",
        json=contact_payload(email="not-an-email"),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_send_message_too_long(client: AsyncClient):
    response = await client.post(
        "/api/v1/contact",
        json=contact_payload(message="x" * 2001),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_send_message_honeypot(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/contact",
        json=contact_payload(website="http://spam.example"),
    )

    assert response.status_code == 400

    response = await client.get("/api/v1/inbox/count", headers=auth_headers)
    assert response.json() == {"open": 0, "closed": 0}


@pytest.mark.asyncio
async def test_open_message_limit(client: AsyncClient):
    headers = {"Client-IP": "203.0.113.21"}
    for _ in range(5):
        response = await client.post("/api/v1/contact", json=contact_payload(), headers=headers)
        assert response.status_code == 201

    response = await client.post("/api/v1/contact", json=contact_payload(), headers=headers)

    assert response.status_code == 429


@pytest.mark.asyncio
async def test_banned_visitor_cannot_send(
    client: AsyncClient, sample_visitors: list[Visitor]
):
    response = await client.post(
        "/api/v1/contact",
        json=contact_payload(),
        headers={"Client-IP": sample_visitors[2].ip_address},
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_close_message(client: AsyncClient, auth_headers: dict):
    await client.post("/api/v1/contact", json=contact_payload())
    response = await client.get("/api/v1/inbox", headers=auth_headers)
    message_id = response.json()["messages"][0]["id"]

    response = await client.post(f"/api/v1/inbox/{message_id}/close", headers=auth_headers)
    assert response.status_code == 200

    response = await client.get(
        "/api/v1/inbox", params={"status": "closed"}, headers=auth_headers
    )
    assert [m["id"] for m in response.json()["messages"]] == [message_id]

    response = await client.get("/api/v1/inbox/count", headers=auth_headers)
    assert response.json() == {"open": 0, "closed": 1}


@pytest.mark.asyncio
async def test_close_unknown_message(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/inbox/9999/close", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_ban_closes_open_messages(
    client: AsyncClient, admin_auth_headers: dict
):
    headers = {"Client-IP": "203.0.113.22"}
    response = await client.post("/api/v1/contact", json=contact_payload(), headers=headers)
    assert response.status_code == 201

    response = await client.get("/api/v1/inbox", headers=admin_auth_headers)
    visitor_id = response.json()["messages"][0]["visitor_id"]

    response = await client.post(
        f"/api/v1/visitors/{visitor_id}/ban",
        json={"reason": "spam"},
        headers=admin_auth_headers,
    )
    assert response.status_code == 200

    response = await client.get("/api/v1/inbox/count", headers=admin_auth_headers)
    assert response.json() == {"open": 0, "closed": 1}
