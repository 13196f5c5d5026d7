from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from credits.api.serializers import (
    AdminAdjustRequestSerializer,
    BalanceSerializer,
    BoostPlanSerializer,
    BoostPurchaseSerializer,
    BoostRequestSerializer,
    ConfirmPurchaseRequestSerializer,
    ConfirmPurchaseResponseSerializer,
    CreditPackageSerializer,
    CreditTransactionSerializer,
    PurchaseCreditsRequestSerializer,
    PurchaseCreditsResponseSerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer


class CreditViewSet(viewsets.ViewSet):
    """Credit balance, history and purchases."""

    def get_permissions(self):
        if self.action == "packages":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_service(self):
        return container.credit_service()

    @extend_schema(operation_id="credits_balance", responses={200: BalanceSerializer}, tags=["Credits"])
    @action(detail=False, methods=["get"])
    def balance(self, request):
        return Response({"balance": self.get_service().get_balance(request.user).value})

    @extend_schema(
        operation_id="credits_transactions", responses={200: CreditTransactionSerializer(many=True)}, tags=["Credits"]
    )
    @action(detail=False, methods=["get"])
    def transactions(self, request):
        result = self.get_service().list_transactions(request.user)
        return Response(CreditTransactionSerializer(result.value, many=True).data)

    @extend_schema(operation_id="credits_packages", responses={200: CreditPackageSerializer(many=True)}, tags=["Credits"])
    @action(detail=False, methods=["get"])
    def packages(self, request):
        return Response(self.get_service().packages().value)

    @extend_schema(
        operation_id="credits_purchase",
        summary="Start a credit purchase",
        description="""
        Creates a payment intent for the package price. The client confirms it with the
        gateway SDK and then calls /credits/confirm/ (the webhook grants the credits too).
        """,
        request=PurchaseCreditsRequestSerializer,
        responses={
            201: PurchaseCreditsResponseSerializer,
            400: ErrorResponseSerializer,
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Gateway unavailable"),
        },
        tags=["Credits"],
    )
    @action(detail=False, methods=["post"])
    def purchase(self, request):
        serializer = PurchaseCreditsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().purchase_credits(request.user, serializer.validated_data["credits"])
        if not result.ok:
            return error_response(result)
        return Response(result.value, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="credits_confirm",
        request=ConfirmPurchaseRequestSerializer,
        responses={200: ConfirmPurchaseResponseSerializer, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer},
        tags=["Credits"],
    )
    @action(detail=False, methods=["post"])
    def confirm(self, request):
        serializer = ConfirmPurchaseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().confirm_credit_purchase(
            request.user, serializer.validated_data["payment_intent_id"]
        )
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="credits_admin_adjust",
        summary="Adjust a user's balance (admin only)",
        request=AdminAdjustRequestSerializer,
        responses={201: CreditTransactionSerializer, 402: ErrorResponseSerializer, 403: ErrorResponseSerializer},
        tags=["Credits"],
    )
    @action(detail=False, methods=["post"], url_path="admin-adjust")
    def admin_adjust(self, request):
        serializer = AdminAdjustRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = self.get_service().admin_adjust_credits(
            request.user, data["user_id"], data["amount"], data.get("description", "")
        )
        if not result.ok:
            return error_response(result)
        return Response(CreditTransactionSerializer(result.value).data, status=status.HTTP_201_CREATED)


class BoostViewSet(viewsets.ViewSet):
    def get_permissions(self):
        if self.action == "plans":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_service(self):
        return container.boost_service()

    @extend_schema(operation_id="boosts_list", responses={200: BoostPurchaseSerializer(many=True)}, tags=["Boosts"])
    def list(self, request):
        result = self.get_service().list_boosts(request.user)
        return Response(BoostPurchaseSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="boosts_create",
        summary="Boost one of your listings",
        request=BoostRequestSerializer,
        responses={
            201: BoostPurchaseSerializer,
            402: OpenApiResponse(response=ErrorResponseSerializer, description="Insufficient credits"),
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Already boosted"),
        },
        tags=["Boosts"],
    )
    def create(self, request):
        serializer = BoostRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = self.get_service().boost_entity(request.user, data["entity_type"], data["entity_id"], data["plan"])
        if not result.ok:
            return error_response(result)
        return Response(BoostPurchaseSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(operation_id="boosts_plans", responses={200: BoostPlanSerializer(many=True)}, tags=["Boosts"])
    @action(detail=False, methods=["get"])
    def plans(self, request):
        return Response(self.get_service().plans().value)
