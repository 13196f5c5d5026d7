import pytest

from utils.location import calculate_distance, filter_by_radius, format_distance, parse_geo_params

TORONTO = (43.6532, -79.3832)
HAMILTON = (43.2557, -79.8711)
MONTREAL = (45.5017, -73.5673)


@pytest.mark.unit
class TestDistance:
    def test_known_distances(self):
        assert calculate_distance(*TORONTO, *TORONTO) == 0
        assert 55 < calculate_distance(*TORONTO, *HAMILTON) < 65
        assert 495 < calculate_distance(*TORONTO, *MONTREAL) < 515

    def test_filter_by_radius_sorts_and_annotates(self):
        items = [
            {"name": "montreal", "latitude": MONTREAL[0], "longitude": MONTREAL[1]},
            {"name": "nowhere", "latitude": None, "longitude": None},
            {"name": "hamilton", "latitude": HAMILTON[0], "longitude": HAMILTON[1]},
            {"name": "toronto", "latitude": TORONTO[0], "longitude": TORONTO[1]},
        ]

        nearby = filter_by_radius(items, *TORONTO, radius_km=100)

        assert [i["name"] for i in nearby] == ["toronto", "hamilton"]
        assert nearby[0]["distance"] == 0

    def test_format_distance(self):
        assert format_distance(0.25) == "250m"
        assert format_distance(12.345) == "12.3km"

    def test_parse_geo_params(self):
        assert parse_geo_params({"lat": "43.6", "lon": "-79.3"}) == (43.6, -79.3, 50.0)
        assert parse_geo_params({"lat": "43.6", "lon": "-79.3", "radius": "10"}) == (43.6, -79.3, 10.0)
        assert parse_geo_params({"lat": "north"}) is None
        assert parse_geo_params({}) is None
