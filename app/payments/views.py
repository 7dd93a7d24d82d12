"""
DRF views for payments app.

Endpoints:
    POST /api/v1/payment/create-intent/  - Create a PaymentIntent for an order
    POST /api/v1/payment/confirm/        - Sync payment status from Stripe
    POST /api/v1/payment/refund/         - Refund a PaymentIntent (admin)
    GET  /api/v1/payment/settings/       - All gateway settings (admin)
    POST /api/v1/payment/settings/       - Create/update a gateway setting (admin)
    GET  /api/v1/payment/active/         - Active gateways, publishable keys only
    POST /api/v1/payment/webhook/        - Stripe webhook (payments.webhooks.views)

Security:
    - All endpoints require authentication except webhook
    - Webhook verifies Stripe signature
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.permissions import IsAdmin
from core.responses import api_response
from payments.serializers import (
    ActiveGatewaySerializer,
    ConfirmPaymentSerializer,
    CreateIntentSerializer,
    GatewaySettingSerializer,
    GatewaySettingUpsertSerializer,
    RefundRequestSerializer,
    RefundSerializer,
)
from payments.services import GatewaySettingService, PaymentService


class CreatePaymentIntentView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Create payment intent", request=CreateIntentSerializer, tags=["Payments"])
    def post(self, request):
        serializer = CreateIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        intent = PaymentService.create_intent(
            request.user,
            serializer.validated_data["orderId"],
            serializer.validated_data["amount"],
        )
        return api_response(intent, message="Payment intent created")


class ConfirmPaymentView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Confirm payment", request=ConfirmPaymentSerializer, tags=["Payments"])
    def post(self, request):
        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        status = PaymentService.confirm(serializer.validated_data["paymentIntentId"])
        return api_response({"status": status}, message="Payment confirmed")


class RefundView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        summary="Refund payment",
        request=RefundRequestSerializer,
        responses={200: RefundSerializer},
        tags=["Payments"],
    )
    def post(self, request):
        serializer = RefundRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refund = PaymentService.refund(
            serializer.validated_data["paymentIntentId"],
            amount=serializer.validated_data.get("amount"),
        )
        return api_response(
            {"refund": RefundSerializer(refund).data},
            message="Refund processed successfully",
        )


class GatewaySettingsView(APIView):
    """List or upsert gateway settings (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        summary="List gateway settings",
        responses={200: GatewaySettingSerializer(many=True)},
        tags=["Payments"],
    )
    def get(self, request):
        settings = GatewaySettingService.list_all()
        return api_response(
            GatewaySettingSerializer(settings, many=True).data,
            message="Gateway settings retrieved",
        )

    @extend_schema(
        summary="Create or update gateway setting",
        request=GatewaySettingUpsertSerializer,
        responses={200: GatewaySettingSerializer},
        tags=["Payments"],
    )
    def post(self, request):
        serializer = GatewaySettingUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        setting = GatewaySettingService.upsert(
            serializer.validated_data["gateway"],
            **serializer.to_model_fields(),
        )
        return api_response(GatewaySettingSerializer(setting).data, message="Gateway settings updated")


class ActiveGatewaysView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List active gateways",
        responses={200: ActiveGatewaySerializer(many=True)},
        tags=["Payments"],
    )
    def get(self, request):
        settings = GatewaySettingService.list_active()
        return api_response(
            ActiveGatewaySerializer(settings, many=True).data,
            message="Active gateways retrieved",
        )
