from django.urls import path

from authentication.api.views import AvatarUploadView, MeView, PublicProfileView, UserSearchView

app_name = "authentication"

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("me/avatar/", AvatarUploadView.as_view(), name="me-avatar"),
    path("users/search/", UserSearchView.as_view(), name="user-search"),
    path("users/<uuid:pk>/", PublicProfileView.as_view(), name="user-profile"),
]
