from django.urls import path

from infrastructure.api.views import CityListView, LocationSearchView, ReverseGeocodeView, UploadView
from infrastructure.observability.views import health_live, health_ready

app_name = "infrastructure"

urlpatterns = [
    path("location/search", LocationSearchView.as_view(), name="location-search"),
    path("location/reverse", ReverseGeocodeView.as_view(), name="location-reverse"),
    path("location/cities", CityListView.as_view(), name="location-cities"),
    path("uploads/", UploadView.as_view(), name="uploads"),
    path("health/live", health_live, name="health-live"),
    path("health/ready", health_ready, name="health-ready"),
]
