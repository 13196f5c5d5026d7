from django.urls import path

from .api import views

app_name = "dashboard"

urlpatterns = [
    path("stats/", views.platform_stats, name="stats"),
    path("analytics/", views.platform_analytics, name="analytics"),
    path("users/", views.list_users, name="users"),
    path("users/<uuid:user_id>/", views.delete_user, name="user-delete"),
    path("users/<uuid:user_id>/toggle-admin/", views.toggle_user_admin, name="user-toggle-admin"),
    path("users/<uuid:user_id>/toggle-disabled/", views.toggle_user_disabled, name="user-toggle-disabled"),
    path("listings/<str:entity_type>/", views.list_listings, name="listings"),
    path(
        "listings/<str:entity_type>/<uuid:entity_id>/toggle-active/",
        views.toggle_listing_active,
        name="listing-toggle-active",
    ),
    path("credit-transactions/", views.credit_transactions, name="credit-transactions"),
    path("boosts/", views.boosts, name="boosts"),
]
