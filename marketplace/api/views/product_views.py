from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import CategorySerializer, ProductSerializer, ProductWriteSerializer
from marketplace.domain.services.product_service import ProductService
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer, PaginatedResponseSerializer, serialize_page

LIST_PARAMETERS = [
    OpenApiParameter("search", str, description="Title, description or category"),
    OpenApiParameter("category", str),
    OpenApiParameter("min_price", float),
    OpenApiParameter("max_price", float),
    OpenApiParameter("city", str),
    OpenApiParameter("lat", float),
    OpenApiParameter("lon", float),
    OpenApiParameter("radius", float, description="Kilometers (default 50)"),
    OpenApiParameter("sort_by", str, enum=["newest", "price_low", "price_high", "boosted", "distance"]),
    OpenApiParameter("page", int),
    OpenApiParameter("page_size", int),
]


class ProductViewSet(viewsets.ViewSet):
    """Public catalog plus seller-side product management."""

    def get_permissions(self):
        if self.action in ("list", "retrieve", "categories"):
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_service(self) -> ProductService:
        return container.product_service()

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="""
        Active products only. Radius search needs `lat` and `lon`; results then carry
        `distance` (km) and `distance_display`.
        """,
        parameters=LIST_PARAMETERS,
        responses={200: PaginatedResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        result = self.get_service().list_products(request.query_params)
        if not result.ok:
            return error_response(result)
        return Response(serialize_page(result.value, ProductSerializer))

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        responses={200: ProductSerializer, 404: ErrorResponseSerializer},
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data)

    @extend_schema(
        operation_id="products_create",
        summary="Create product",
        request=ProductWriteSerializer,
        responses={201: ProductSerializer, 400: ErrorResponseSerializer},
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().create_product(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_update",
        summary="Update product (seller only)",
        request=ProductWriteSerializer,
        responses={
            200: ProductSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the seller"),
            404: ErrorResponseSerializer,
        },
        tags=["Marketplace - Products"],
    )
    def partial_update(self, request, pk=None):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_product(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="products_delete",
        summary="Delete product (seller only)",
        responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="products_mine",
        summary="My products (including inactive)",
        responses={200: ProductSerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def mine(self, request):
        result = self.get_service().my_products(request.user)
        return Response(ProductSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="products_categories",
        summary="Categories with active product counts",
        responses={200: CategorySerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def categories(self, request):
        result = self.get_service().categories()
        return Response(CategorySerializer(result.value, many=True).data)
