from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    AvatarUploadSerializer,
    ProfileUpdateSerializer,
    PublicUserSerializer,
    UserSerializer,
    UserSummarySerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer


def get_account_service():
    return container.account_service()


class MeView(APIView):
    """The caller's own profile."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="account_me",
        summary="Get own profile",
        responses={200: UserSerializer},
        tags=["Accounts"],
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        operation_id="account_me_update",
        summary="Update own profile",
        description="""
        Patch editable profile fields. The admin role cannot be self-assigned.
        """,
        request=ProfileUpdateSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Role not allowed"),
        },
        tags=["Accounts"],
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = get_account_service().update_profile(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data)


class AvatarUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="account_avatar_upload",
        summary="Upload avatar",
        request={"multipart/form-data": AvatarUploadSerializer},
        responses={200: UserSerializer, 400: ErrorResponseSerializer},
        tags=["Accounts"],
    )
    def post(self, request):
        serializer = AvatarUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = get_account_service().set_avatar(request.user, serializer.validated_data["avatar"])
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data)


class PublicProfileView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="account_public_profile",
        summary="View public user profile",
        responses={200: PublicUserSerializer, 404: ErrorResponseSerializer},
        tags=["Accounts"],
    )
    def get(self, request, pk):
        result = get_account_service().get_public_profile(pk)
        if not result.ok:
            return error_response(result)
        return Response(PublicUserSerializer(result.value).data)


class UserSearchView(APIView):
    """Find people to message by name or email."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="account_user_search",
        summary="Search users",
        parameters=[OpenApiParameter("q", str, description="At least 2 characters")],
        responses={200: UserSummarySerializer(many=True)},
        tags=["Accounts"],
    )
    def get(self, request):
        result = get_account_service().search_users(request.user, request.query_params.get("q"))
        if not result.ok:
            return error_response(result)
        return Response(UserSummarySerializer(result.value, many=True).data, status=status.HTTP_200_OK)
