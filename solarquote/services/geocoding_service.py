"""Google Maps service for property geocoding and satellite imagery."""

from __future__ import annotations

import logging

import httpx

from solarquote.config import get_settings
from solarquote.models import Location

logger = logging.getLogger(__name__)


class MapsNotConfiguredError(RuntimeError):
    """Raised when a Maps call needs an API key that is not configured."""


class GeocodingService:
    """Service for Google Geocoding and Static Maps API interactions."""

    GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
    STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"

    def __init__(
        self,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.timeout = settings.http_timeout_seconds
        self.fallback_lat = settings.fallback_lat
        self.fallback_lng = settings.fallback_lng
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def fallback_location(self, address: str | None = None) -> Location:
        """Mocked location used whenever a real lookup is unavailable."""
        return Location(lat=self.fallback_lat, lng=self.fallback_lng, address=address)

    async def geocode(self, address: str) -> Location:
        """Resolve a typed address to coordinates.

        Falls back to the mocked location when no key is configured, the
        request fails, or the address has no match.
        """
        if not self.api_key:
            logger.info("Maps API key not set, using mock geocode for '%s'", address)
            return self.fallback_location(address)

        params = {"address": address, "key": self.api_key}
        async with self._client() as client:
            try:
                response = await client.get(self.GEOCODE_URL, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                logger.warning("Geocoding API error %d: %s", e.response.status_code, e.response.text)
                return self.fallback_location(address)
            except httpx.HTTPError as e:
                logger.error("Geocoding request failed: %s", e)
                return self.fallback_location(address)

        results = data.get("results", [])
        if data.get("status") != "OK" or not results:
            logger.warning("No geocoding match for '%s' (status=%s)", address, data.get("status"))
            return self.fallback_location(address)

        top = results[0]
        coords = top.get("geometry", {}).get("location", {})
        location = Location(
            lat=coords.get("lat", self.fallback_lat),
            lng=coords.get("lng", self.fallback_lng),
            address=top.get("formatted_address", address),
        )
        logger.info("Geocoded '%s' -> (%.4f, %.4f)", address, location.lat, location.lng)
        return location

    async def get_satellite_image(
        self, lat: float, lng: float, zoom: int = 20, size: str = "640x640"
    ) -> bytes:
        """Fetch satellite imagery from Google Maps Static API."""
        if not self.api_key:
            raise MapsNotConfiguredError("Google Maps API key is not configured")

        params = {
            "center": f"{lat},{lng}",
            "zoom": zoom,
            "size": size,
            "maptype": "satellite",
            "key": self.api_key,
        }
        async with self._client() as client:
            response = await client.get(self.STATIC_MAP_URL, params=params)
            response.raise_for_status()
            return response.content


def get_geocoding_service() -> GeocodingService:
    """FastAPI dependency providing the Maps service."""
    return GeocodingService()
