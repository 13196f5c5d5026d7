"""
Nominatim Geocoding Client
==========================

Forward and reverse geocoding against OpenStreetMap Nominatim. Lookups are
cached because the public instance allows one request per second per client.
"""

import hashlib
import logging
from typing import Dict, List, Optional

import requests
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"
USER_AGENT = "ZadeApp/1.0"
DEFAULT_COUNTRY = "Canada"
CACHE_TTL_SECONDS = 60 * 60 * 24


class GeocodingError(Exception):
    """Raised when the geocoding service cannot be reached or answers garbage."""

    pass


class NominatimClient:
    """
    Thin client over the Nominatim JSON API.

    Configuration (in settings.py):
        NOMINATIM_BASE_URL: Base URL of the Nominatim instance
        NOMINATIM_TIMEOUT: Request timeout in seconds
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or getattr(settings, "NOMINATIM_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = timeout or getattr(settings, "NOMINATIM_TIMEOUT", 10)

    def _get(self, path: str, params: Dict) -> object:
        try:
            response = requests.get(
                f"{self.base_url}/{path}",
                params={"format": "json", "addressdetails": 1, **params},
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise GeocodingError(f"Nominatim request failed: {e}") from e
        except ValueError as e:
            raise GeocodingError("Nominatim returned invalid JSON") from e

    @staticmethod
    def _to_location(item: Dict, latitude: float = None, longitude: float = None) -> Dict:
        address = item.get("address") or {}
        return {
            "location_name": item.get("display_name", ""),
            "city": address.get("city") or address.get("town") or address.get("village") or address.get("suburb"),
            "state": address.get("state"),
            "country": address.get("country") or DEFAULT_COUNTRY,
            "latitude": latitude if latitude is not None else float(item["lat"]),
            "longitude": longitude if longitude is not None else float(item["lon"]),
        }

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[Dict]:
        """
        Resolve coordinates to a place description.

        Returns:
            {location_name, city, state, country, latitude, longitude} or None on failure
        """
        cache_key = f"geocode:reverse:{round(latitude, 5)}:{round(longitude, 5)}"
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            data = self._get("reverse", {"lat": latitude, "lon": longitude})
        except GeocodingError as e:
            logger.error(f"Reverse geocoding error: {e}")
            return None

        if not isinstance(data, dict) or "error" in data:
            logger.warning(f"Reverse geocoding found nothing for ({latitude}, {longitude})")
            return None

        location = self._to_location(data, latitude, longitude)
        cache.set(cache_key, location, CACHE_TTL_SECONDS)
        return location

    def search_location(self, query: str, limit: int = 5) -> List[Dict]:
        """Search Canadian places matching a free-text query. Returns [] on failure."""
        query = (query or "").strip()
        if not query:
            return []

        cache_key = "geocode:search:" + hashlib.sha1(f"{query.lower()}:{limit}".encode()).hexdigest()
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            data = self._get("search", {"q": query, "countrycodes": "ca", "limit": limit})
        except GeocodingError as e:
            logger.error(f"Location search error: {e}")
            return []

        results = []
        for item in data if isinstance(data, list) else []:
            try:
                results.append(self._to_location(item))
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Skipping malformed Nominatim hit: {item!r}")

        cache.set(cache_key, results, CACHE_TTL_SECONDS)
        return results
