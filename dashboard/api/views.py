"""
Admin dashboard endpoints.

Every view requires an authenticated user; AdminDashboardService verifies
admin status against the database and answers 403 otherwise.
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from dashboard.api.serializers import (
    AdminBoostSerializer,
    AdminCreditTransactionSerializer,
    AdminListingSerializer,
    AdminUserSerializer,
    AnalyticsSerializer,
    ListingStateSerializer,
    PlatformStatsSerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer

FORBIDDEN = OpenApiResponse(response=ErrorResponseSerializer, description="Not an administrator")


def _int_param(request, name, default):
    try:
        return int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return None


@extend_schema(
    operation_id="admin_stats",
    summary="Admin: platform totals",
    responses={200: PlatformStatsSerializer, 403: FORBIDDEN},
    tags=["Admin"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def platform_stats(request):
    result = container.admin_dashboard_service().stats(request.user)
    if not result.ok:
        return error_response(result)
    return Response(PlatformStatsSerializer(result.value).data)


@extend_schema(
    operation_id="admin_analytics",
    summary="Admin: daily growth",
    parameters=[
        OpenApiParameter(
            name="days", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, description="Window size (1-90, default 7)"
        )
    ],
    responses={200: AnalyticsSerializer, 400: ErrorResponseSerializer, 403: FORBIDDEN},
    tags=["Admin"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def platform_analytics(request):
    days = _int_param(request, "days", 7)
    if days is None:
        return Response({"detail": "days must be an integer", "code": "invalid_input"}, status=status.HTTP_400_BAD_REQUEST)
    result = container.admin_dashboard_service().analytics(request.user, days=days)
    if not result.ok:
        return error_response(result)
    return Response(AnalyticsSerializer(result.value).data)


@extend_schema(
    operation_id="admin_users",
    summary="Admin: list users",
    parameters=[
        OpenApiParameter(
            name="search", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, description="Email, name or username"
        )
    ],
    responses={200: AdminUserSerializer(many=True), 403: FORBIDDEN},
    tags=["Admin"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def list_users(request):
    result = container.admin_dashboard_service().list_users(request.user, search=request.query_params.get("search", ""))
    if not result.ok:
        return error_response(result)
    return Response(AdminUserSerializer(result.value, many=True).data)


@extend_schema(
    operation_id="admin_user_toggle_admin",
    request=None,
    responses={200: AdminUserSerializer, 403: FORBIDDEN, 404: ErrorResponseSerializer},
    tags=["Admin"],
)
@api_view(["POST"])
@permission_classes([IsAuthenticated])
def toggle_user_admin(request, user_id):
    result = container.admin_dashboard_service().toggle_admin(request.user, user_id)
    if not result.ok:
        return error_response(result)
    return Response(AdminUserSerializer(result.value).data)


@extend_schema(
    operation_id="admin_user_toggle_disabled",
    request=None,
    responses={200: AdminUserSerializer, 403: FORBIDDEN, 404: ErrorResponseSerializer},
    tags=["Admin"],
)
@api_view(["POST"])
@permission_classes([IsAuthenticated])
def toggle_user_disabled(request, user_id):
    result = container.admin_dashboard_service().toggle_disabled(request.user, user_id)
    if not result.ok:
        return error_response(result)
    return Response(AdminUserSerializer(result.value).data)


@extend_schema(
    operation_id="admin_user_delete",
    responses={204: None, 403: FORBIDDEN, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    tags=["Admin"],
)
@api_view(["DELETE"])
@permission_classes([IsAuthenticated])
def delete_user(request, user_id):
    result = container.admin_dashboard_service().delete_user(request.user, user_id)
    if not result.ok:
        return error_response(result)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    operation_id="admin_listings",
    summary="Admin: recent products, jobs or events",
    responses={200: AdminListingSerializer(many=True), 400: ErrorResponseSerializer, 403: FORBIDDEN},
    tags=["Admin"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def list_listings(request, entity_type):
    result = container.admin_dashboard_service().listings(request.user, entity_type)
    if not result.ok:
        return error_response(result)
    return Response(AdminListingSerializer(result.value, many=True).data)


@extend_schema(
    operation_id="admin_listing_toggle_active",
    request=None,
    responses={200: ListingStateSerializer, 403: FORBIDDEN, 404: ErrorResponseSerializer},
    tags=["Admin"],
)
@api_view(["POST"])
@permission_classes([IsAuthenticated])
def toggle_listing_active(request, entity_type, entity_id):
    result = container.admin_dashboard_service().toggle_listing_active(request.user, entity_type, entity_id)
    if not result.ok:
        return error_response(result)
    return Response(ListingStateSerializer(result.value).data)


@extend_schema(
    operation_id="admin_credit_transactions",
    responses={200: AdminCreditTransactionSerializer(many=True), 403: FORBIDDEN},
    tags=["Admin"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def credit_transactions(request):
    result = container.admin_dashboard_service().credit_transactions(request.user)
    if not result.ok:
        return error_response(result)
    return Response(AdminCreditTransactionSerializer(result.value, many=True).data)


@extend_schema(
    operation_id="admin_boosts",
    parameters=[
        OpenApiParameter(
            name="active", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, description="Only running campaigns"
        )
    ],
    responses={200: AdminBoostSerializer(many=True), 403: FORBIDDEN},
    tags=["Admin"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def boosts(request):
    active_only = request.query_params.get("active", "").lower() in ("1", "true", "yes")
    result = container.admin_dashboard_service().boosts(request.user, active_only=active_only)
    if not result.ok:
        return error_response(result)
    return Response(AdminBoostSerializer(result.value, many=True).data)
