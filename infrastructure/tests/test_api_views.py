from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from infrastructure.container import container
from infrastructure.storage import MediaUploadService
from infrastructure.tests.fakes import InMemoryStorage

LOCATION = {
    "location_name": "Toronto, Ontario, Canada",
    "city": "Toronto",
    "state": "Ontario",
    "country": "Canada",
    "latitude": 43.6532,
    "longitude": -79.3832,
}


class LocationViewsTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_cities(self):
        response = self.client.get("/api/location/cities")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("Toronto", [city["name"] for city in response.data])

    @patch("infrastructure.geocoding.NominatimClient.search_location")
    def test_search(self, mock_search):
        mock_search.return_value = [LOCATION]
        response = self.client.get("/api/location/search", {"q": "toronto"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["city"], "Toronto")
        mock_search.assert_called_once_with("toronto")

    @patch("infrastructure.geocoding.NominatimClient.reverse_geocode")
    def test_reverse(self, mock_reverse):
        mock_reverse.return_value = LOCATION
        response = self.client.get("/api/location/reverse", {"lat": "43.6532", "lon": "-79.3832"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["state"], "Ontario")

    @patch("infrastructure.geocoding.NominatimClient.reverse_geocode")
    def test_reverse_unresolved(self, mock_reverse):
        mock_reverse.return_value = None
        response = self.client.get("/api/location/reverse", {"lat": "0", "lon": "0"})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_reverse_requires_coordinates(self):
        response = self.client.get("/api/location/reverse", {"lat": "abc"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class UploadViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.storage = InMemoryStorage()
        container._services["media_upload_service"] = MediaUploadService(storage=self.storage)

    def test_requires_authentication(self):
        response = self.client.post("/api/uploads/", {"folder": "products"}, format="multipart")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_upload_images(self):
        self.client.force_authenticate(user=self.user)
        files = [
            SimpleUploadedFile("a.png", b"\x89PNGdata", content_type="image/png"),
            SimpleUploadedFile("b.jpg", b"\xff\xd8data", content_type="image/jpeg"),
        ]
        response = self.client.post("/api/uploads/", {"folder": "products", "files": files}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data["urls"]), 2)
        self.assertTrue(response.data["urls"][0].startswith(f"https://media.test/products/{self.user.id}/"))

    def test_rejects_bad_folder(self):
        self.client.force_authenticate(user=self.user)
        upload = SimpleUploadedFile("a.png", b"\x89PNG", content_type="image/png")
        response = self.client.post("/api/uploads/", {"folder": "etc", "files": [upload]}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rejects_non_image(self):
        self.client.force_authenticate(user=self.user)
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        response = self.client.post("/api/uploads/", {"folder": "events", "files": [upload]}, format="multipart")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.storage.objects, {})


class HealthViewsTest(TestCase):
    def test_live(self):
        response = self.client.get("/api/health/live")
        self.assertEqual(response.status_code, 200)

    def test_ready_with_in_memory_bus(self):
        response = self.client.get("/api/health/ready")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["checks"]["event_bus"], True)
