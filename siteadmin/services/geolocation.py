"""IP geolocation lookups for new visitors."""

import ipaddress

import httpx
from loguru import logger

from siteadmin.core.config import Settings, get_settings

UNKNOWN = "Unknown"


class GeoLocator:
    """Resolves an IP address to (city, country) through an HTTP lookup service.

    The service URL contains an ``{ip}`` placeholder and must answer with JSON
    holding ``city`` and ``country`` keys (ipinfo.io style). Lookups are
    skipped when no URL is configured or the address is not public.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.transport = transport

    @staticmethod
    def is_public(ip: str) -> bool:
        try:
            return ipaddress.ip_address(ip).is_global
        except ValueError:
            return False

    async def locate(self, ip: str) -> tuple[str, str]:
        """Get (city, country) for an IP address, ``Unknown`` when not resolvable."""
        url_template = self.settings.geolocation_url
        if not url_template or not self.is_public(ip):
            return UNKNOWN, UNKNOWN

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.geolocation_timeout,
                transport=self.transport,
            ) as client:
                response = await client.get(url_template.replace("{ip}", ip))
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Geolocation lookup failed for {ip}: {e}")
            return UNKNOWN, UNKNOWN

        if not isinstance(data, dict):
            logger.warning(f"Geolocation lookup for {ip} returned unexpected body: {data!r}")
            return UNKNOWN, UNKNOWN

        city = str(data.get("city") or UNKNOWN)
        country = str(data.get("country") or UNKNOWN)
        return city, country
