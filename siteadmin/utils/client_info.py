"""Client address and referer extraction from incoming requests."""

from dataclasses import dataclass
from urllib.parse import urlparse

from fastapi import Request

UNKNOWN = "Unknown"


def get_client_ip(request: Request) -> str:
    """Get client IP, preferring proxy headers over the socket peer."""
    client_ip = request.headers.get("client-ip")
    if client_ip:
        return client_ip.strip()

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # "client, proxy1, proxy2"
        return forwarded.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent") or UNKNOWN


def referer_host(referer: str | None) -> str:
    """Reduce a referer URL to its host name."""
    if not referer:
        return UNKNOWN
    host = urlparse(referer).hostname
    return host or UNKNOWN


def get_referer(request: Request) -> str:
    return referer_host(request.headers.get("referer"))


def get_host(request: Request) -> str:
    return request.headers.get("host") or request.url.hostname or UNKNOWN


ANTI_LOG_COOKIE = "anti-log-cookie"
ANTI_LOG_MAX_AGE = 365 * 24 * 60 * 60


@dataclass(frozen=True)
class ClientContext:
    """Who is making the current request, as far as audit logging cares."""

    ip_address: str = UNKNOWN
    user_agent: str = UNKNOWN
    referer: str = UNKNOWN
    host: str = UNKNOWN
    anti_log_token: str | None = None

    @classmethod
    def from_request(cls, request: Request) -> "ClientContext":
        return cls(
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
            referer=get_referer(request),
            host=get_host(request),
            anti_log_token=request.cookies.get(ANTI_LOG_COOKIE),
        )


SYSTEM_CONTEXT = ClientContext(ip_address="127.0.0.1", user_agent="system")
