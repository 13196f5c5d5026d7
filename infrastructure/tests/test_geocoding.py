from unittest.mock import MagicMock, patch

import requests
from django.test import TestCase

from infrastructure.geocoding import NominatimClient

REVERSE_PAYLOAD = {
    "display_name": "Ste-Catherine, Montreal, Quebec, Canada",
    "lat": "45.5017",
    "lon": "-73.5673",
    "address": {"town": "Montreal", "state": "Quebec", "country": "Canada"},
}


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class NominatimClientTest(TestCase):
    def setUp(self):
        self.client = NominatimClient(base_url="https://geo.test")

    @patch("infrastructure.geocoding.nominatim_client.requests.get")
    def test_reverse_geocode(self, mock_get):
        mock_get.return_value = _response(REVERSE_PAYLOAD)

        location = self.client.reverse_geocode(45.5017, -73.5673)

        self.assertEqual(location["city"], "Montreal")
        self.assertEqual(location["state"], "Quebec")
        self.assertEqual(location["latitude"], 45.5017)
        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "https://geo.test/reverse")
        self.assertEqual(kwargs["headers"]["User-Agent"], "ZadeApp/1.0")
        self.assertEqual(kwargs["params"]["format"], "json")

    @patch("infrastructure.geocoding.nominatim_client.requests.get")
    def test_reverse_geocode_is_cached(self, mock_get):
        mock_get.return_value = _response(REVERSE_PAYLOAD)
        self.client.reverse_geocode(45.5017, -73.5673)
        self.client.reverse_geocode(45.5017, -73.5673)
        self.assertEqual(mock_get.call_count, 1)

    @patch("infrastructure.geocoding.nominatim_client.requests.get")
    def test_city_fallback_and_default_country(self, mock_get):
        mock_get.return_value = _response({"display_name": "Somewhere", "address": {"suburb": "Plateau"}})
        location = self.client.reverse_geocode(45.52, -73.58)
        self.assertEqual(location["city"], "Plateau")
        self.assertEqual(location["country"], "Canada")

    @patch("infrastructure.geocoding.nominatim_client.requests.get")
    def test_reverse_geocode_failure_returns_none(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")
        self.assertIsNone(self.client.reverse_geocode(1.0, 2.0))

    @patch("infrastructure.geocoding.nominatim_client.requests.get")
    def test_search_location(self, mock_get):
        mock_get.return_value = _response([REVERSE_PAYLOAD, {"bad": "hit"}])

        results = self.client.search_location("montreal")

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["longitude"], -73.5673)
        params = mock_get.call_args.kwargs["params"]
        self.assertEqual(params["countrycodes"], "ca")
        self.assertEqual(params["limit"], 5)

    @patch("infrastructure.geocoding.nominatim_client.requests.get")
    def test_search_failure_returns_empty(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        self.assertEqual(self.client.search_location("toronto"), [])

    def test_blank_query_skips_request(self):
        with patch("infrastructure.geocoding.nominatim_client.requests.get") as mock_get:
            self.assertEqual(self.client.search_location("   "), [])
            mock_get.assert_not_called()
