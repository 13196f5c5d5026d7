import logging

from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import (
    CheckoutRequestSerializer,
    CheckoutResponseSerializer,
    ConfirmPaymentRequestSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from utils.http import error_response
from utils.pagination import parse_page_params
from utils.serializers import ErrorResponseSerializer, PaginatedResponseSerializer, serialize_page

logger = logging.getLogger(__name__)


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="orders_list",
        summary="List my orders",
        parameters=[
            OpenApiParameter("role", str, enum=["buyer", "seller"], description="Orders placed (buyer) or received"),
            OpenApiParameter("status", str),
            OpenApiParameter("page", int),
            OpenApiParameter("page_size", int),
        ],
        responses={200: PaginatedResponseSerializer},
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        page, page_size = parse_page_params(request.query_params)
        result = container.order_service().list_orders(
            request.user,
            role=request.query_params.get("role", "buyer"),
            status=request.query_params.get("status"),
            page=page,
            page_size=page_size,
        )
        if not result.ok:
            return error_response(result)
        return Response(serialize_page(result.value, OrderSerializer))

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get order (buyer, seller or admin)",
        responses={200: OrderSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = container.order_service().get_order(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)

    @extend_schema(
        operation_id="orders_checkout",
        summary="Checkout the cart",
        description="""
        Creates one order per cart line and a payment intent for the total.
        Confirm the returned `client_secret` with the payment SDK, then call `confirm_payment`.
        """,
        request=CheckoutRequestSerializer,
        responses={
            201: CheckoutResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Empty cart, bad address or stock"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Payment gateway unavailable"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"])
    def checkout(self, request):
        serializer = CheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.checkout_service().checkout(
            request.user, serializer.validated_data["delivery_address"], serializer.validated_data["notes"]
        )
        if not result.ok:
            return error_response(result)
        return Response(CheckoutResponseSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_confirm_payment",
        summary="Confirm payment for a checkout",
        request=ConfirmPaymentRequestSerializer,
        responses={200: OrderSerializer(many=True), 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["post"])
    def confirm_payment(self, request):
        serializer = ConfirmPaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.checkout_service().confirm_payment(
            request.user, serializer.validated_data["payment_intent_id"]
        )
        if not result.ok:
            return error_response(result)
        return Response(
            {
                "payment_status": result.value["payment_status"],
                "orders": OrderSerializer(result.value["orders"], many=True).data,
            }
        )

    @extend_schema(
        operation_id="orders_update_status",
        summary="Update order status (seller only)",
        request=OrderStatusUpdateSerializer,
        responses={200: OrderSerializer, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer},
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.order_service().update_order_status(
            request.user,
            pk,
            serializer.validated_data["status"],
            tracking_number=serializer.validated_data.get("tracking_number"),
        )
        if not result.ok:
            return error_response(result)
        return Response(OrderSerializer(result.value).data)


@method_decorator(csrf_exempt, name="dispatch")
class PaymentWebhookView(APIView):
    """Gateway webhook. Authenticated by signature, not by user credentials."""

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    @extend_schema(exclude=True)
    def post(self, request):
        signature = request.META.get("HTTP_STRIPE_SIGNATURE", "")
        result = container.checkout_service().handle_webhook(request.body, signature)
        if not result.ok:
            logger.warning(f"Rejected payment webhook: {result.error_detail}")
            return Response({"detail": result.error_detail}, status=status.HTTP_400_BAD_REQUEST)
        return Response(result.value, status=status.HTTP_200_OK)
