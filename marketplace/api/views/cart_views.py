from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import (
    CartItemRequestSerializer,
    CartRemoveRequestSerializer,
    CartSerializer,
    CartUpdateRequestSerializer,
)
from marketplace.domain.services.cart_service import CartService
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> CartService:
        return container.cart_service()

    def _cart_response(self, result):
        if not result.ok:
            return error_response(result)
        return Response(CartSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's shopping cart",
        description="""
        **What it returns:**
        - Cart lines with product details
        - Totals: subtotal, shipping (waived above 50,000), total, item_count
        """,
        responses={200: CartSerializer},
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        return self._cart_response(self.get_service().get_cart(request.user))

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="Quantities merge with an existing line for the same product.",
        request=CartItemRequestSerializer,
        responses={
            200: CartSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Inactive, own product or no stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def add_item(self, request):
        serializer = CartItemRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return self._cart_response(self.get_service().add_item(request.user, data["product_id"], data["quantity"]))

    @extend_schema(
        operation_id="cart_update_item",
        summary="Set item quantity (0 removes it)",
        request=CartUpdateRequestSerializer,
        responses={200: CartSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["patch"])
    def update_item(self, request):
        serializer = CartUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return self._cart_response(self.get_service().update_item(request.user, data["product_id"], data["quantity"]))

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove item from cart",
        request=CartRemoveRequestSerializer,
        responses={200: CartSerializer, 404: ErrorResponseSerializer},
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def remove_item(self, request):
        serializer = CartRemoveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._cart_response(self.get_service().remove_item(request.user, serializer.validated_data["product_id"]))

    @extend_schema(
        operation_id="cart_clear",
        summary="Empty the cart",
        request=None,
        responses={200: CartSerializer},
        tags=["Marketplace - Cart"],
    )
    @action(detail=False, methods=["post"])
    def clear(self, request):
        return self._cart_response(self.get_service().clear_cart(request.user))
