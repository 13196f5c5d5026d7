"""
Geocoding Abstraction
=====================

Location search and reverse geocoding used by listing forms and radius search.
"""

from .nominatim_client import GeocodingError, NominatimClient

__all__ = ["GeocodingError", "NominatimClient"]
