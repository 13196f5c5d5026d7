"""
Distance helpers for location-aware listings.

Distances use the haversine formula on a spherical Earth (R = 6371 km).
Listing services call filter_by_radius() after the ORM has applied every
other filter, so radius search works on any backend database.
"""

import math
from typing import Iterable, List, Optional

EARTH_RADIUS_KM = 6371

CANADIAN_CITIES = [
    {"name": "Toronto", "state": "Ontario", "latitude": 43.6532, "longitude": -79.3832},
    {"name": "Vancouver", "state": "British Columbia", "latitude": 49.2827, "longitude": -123.1207},
    {"name": "Montreal", "state": "Quebec", "latitude": 45.5017, "longitude": -73.5673},
    {"name": "Calgary", "state": "Alberta", "latitude": 51.0447, "longitude": -114.0719},
    {"name": "Edmonton", "state": "Alberta", "latitude": 53.5444, "longitude": -113.4909},
    {"name": "Ottawa", "state": "Ontario", "latitude": 45.4215, "longitude": -75.6972},
    {"name": "Winnipeg", "state": "Manitoba", "latitude": 49.8951, "longitude": -97.1384},
    {"name": "Quebec City", "state": "Quebec", "latitude": 46.8139, "longitude": -71.2080},
    {"name": "Hamilton", "state": "Ontario", "latitude": 43.2557, "longitude": -79.8711},
    {"name": "Kitchener", "state": "Ontario", "latitude": 43.4516, "longitude": -80.4925},
]


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = math.sin(d_lat / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _coordinate(item, name: str) -> Optional[float]:
    value = item.get(name) if isinstance(item, dict) else getattr(item, name, None)
    return float(value) if value is not None else None


def filter_by_radius(items: Iterable, center_lat: float, center_lon: float, radius_km: float) -> List:
    """
    Keep items within radius_km of the center point, nearest first.

    Works on model instances and dicts alike. Items without coordinates are
    dropped; survivors get a ``distance`` attribute (or key) in kilometers.
    """
    within = []
    for item in items:
        lat = _coordinate(item, "latitude")
        lon = _coordinate(item, "longitude")
        if lat is None or lon is None:
            continue

        distance = calculate_distance(center_lat, center_lon, lat, lon)
        if distance > radius_km:
            continue

        if isinstance(item, dict):
            item["distance"] = distance
        else:
            item.distance = distance
        within.append(item)

    within.sort(key=lambda i: i["distance"] if isinstance(i, dict) else i.distance)
    return within


def format_distance(km: float) -> str:
    if km < 1:
        return f"{round(km * 1000)}m"
    return f"{km:.1f}km"


def parse_geo_params(params) -> Optional[tuple]:
    """
    Read ``lat``, ``lon`` and ``radius`` from query params.

    Returns (lat, lon, radius_km) or None when any is missing or malformed.
    """
    try:
        lat = float(params.get("lat"))
        lon = float(params.get("lon"))
        radius = float(params.get("radius", 50))
    except (TypeError, ValueError):
        return None
    return lat, lon, radius
