from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from engagement.api.serializers import (
    EntityRefSerializer,
    ReviewListResponseSerializer,
    ReviewSerializer,
    ReviewSubmitSerializer,
    WishlistItemSerializer,
    WishlistStateSerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer

ENTITY_PARAMETERS = [
    OpenApiParameter("entity_type", str, required=True),
    OpenApiParameter("entity_id", str, required=True),
]


class ReviewViewSet(viewsets.ViewSet):
    def get_permissions(self):
        if self.action == "list":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_service(self):
        return container.review_service()

    @extend_schema(
        operation_id="reviews_list",
        summary="Reviews of an entity with rating summary",
        parameters=ENTITY_PARAMETERS,
        responses={200: ReviewListResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Reviews"],
    )
    def list(self, request):
        query = EntityRefSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = self.get_service().list_reviews(
            query.validated_data["entity_type"], query.validated_data["entity_id"]
        )
        if not result.ok:
            return error_response(result)
        data = dict(result.value)
        data["results"] = ReviewSerializer(data["results"], many=True).data
        return Response(data)

    @extend_schema(
        operation_id="reviews_submit",
        summary="Review an entity (a second submission updates the first)",
        request=ReviewSubmitSerializer,
        responses={201: ReviewSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Reviews"],
    )
    def create(self, request):
        serializer = ReviewSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = self.get_service().submit_review(request.user, data["entity_type"], data["entity_id"], data)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reviews_delete",
        responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Reviews"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_review(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class WishlistViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    def get_service(self):
        return container.wishlist_service()

    @extend_schema(
        operation_id="wishlist_list",
        parameters=[OpenApiParameter("entity_type", str)],
        responses={200: WishlistItemSerializer(many=True)},
        tags=["Wishlist"],
    )
    def list(self, request):
        result = self.get_service().list_items(request.user, request.query_params.get("entity_type") or None)
        if not result.ok:
            return error_response(result)
        return Response(WishlistItemSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="wishlist_toggle",
        request=EntityRefSerializer,
        responses={200: WishlistStateSerializer, 404: ErrorResponseSerializer},
        tags=["Wishlist"],
    )
    @action(detail=False, methods=["post"])
    def toggle(self, request):
        serializer = EntityRefSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().toggle(
            request.user, serializer.validated_data["entity_type"], serializer.validated_data["entity_id"]
        )
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="wishlist_check",
        parameters=ENTITY_PARAMETERS,
        responses={200: WishlistStateSerializer},
        tags=["Wishlist"],
    )
    @action(detail=False, methods=["get"])
    def check(self, request):
        query = EntityRefSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = self.get_service().check(
            request.user, query.validated_data["entity_type"], query.validated_data["entity_id"]
        )
        return Response(result.value)

    @extend_schema(operation_id="wishlist_remove", responses={204: None, 404: ErrorResponseSerializer}, tags=["Wishlist"])
    def destroy(self, request, pk=None):
        result = self.get_service().remove(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
