"""
Order views.

Customer:
    POST /api/v1/orders/                  - Place an order
    GET  /api/v1/orders/my-orders/        - Own orders
    GET  /api/v1/orders/{id}/             - Order detail (owner or admin)
    PUT  /api/v1/orders/{id}/pay/         - Mark paid (owner or admin)
    PUT  /api/v1/orders/{id}/cancel/      - Cancel (owner only)

Admin:
    GET  /api/v1/orders/                  - All orders
    PUT  /api/v1/orders/{id}/deliver/     - Mark delivered
    PUT  /api/v1/orders/{id}/status/      - Overwrite status / tracking number
    PUT  /api/v1/shipping/                - Update shipping settings

Public:
    POST /api/v1/orders/track/            - Reduced order view by id
    GET  /api/v1/shipping/                - Shipping settings
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from core.permissions import IsAdmin
from core.responses import api_response
from orders.models import ShippingSetting
from orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
    PayOrderSerializer,
    ShippingSettingSerializer,
    TrackedOrderSerializer,
    TrackOrderSerializer,
)
from orders.services import OrderService

ORDER_UPDATED = "Order updated successfully"


class OrderListCreateView(APIView):
    """Place an order (customer) or list every order (admin)."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    @extend_schema(summary="List all orders", responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request):
        orders = OrderService.list_all()
        return api_response({"orders": OrderSerializer(orders, many=True).data})

    @extend_schema(
        summary="Create order",
        request=CreateOrderSerializer,
        responses={201: OrderSerializer},
        tags=["Orders"],
    )
    def post(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.create_order(user=request.user, **serializer.to_service_kwargs())

        return api_response(
            {"order": OrderSerializer(order).data},
            message="Order created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class MyOrdersView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List my orders", responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request):
        orders = OrderService.list_for_user(request.user)
        return api_response({"orders": OrderSerializer(orders, many=True).data})


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get order", responses={200: OrderSerializer}, tags=["Orders"])
    def get(self, request, order_id):
        order = OrderService.get_for_actor(order_id, request.user)
        return api_response({"order": OrderSerializer(order).data})


class OrderPayView(APIView):
    """Record a payment reference on the order and mark it paid."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Mark order paid",
        request=PayOrderSerializer,
        responses={200: OrderSerializer},
        tags=["Orders"],
    )
    def put(self, request, order_id):
        serializer = PayOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.get_order(order_id)
        order = OrderService.mark_paid(order, request.user, dict(serializer.validated_data))

        return api_response({"order": OrderSerializer(order).data}, message=ORDER_UPDATED)

    patch = put


class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Cancel order", responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, order_id):
        order = OrderService.get_order(order_id)
        order = OrderService.cancel_order(order, request.user)
        return api_response(
            {"order": OrderSerializer(order).data},
            message="Order cancelled successfully",
        )

    patch = put


class OrderDeliverView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(summary="Mark order delivered", responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, order_id):
        order = OrderService.get_order(order_id)
        order = OrderService.mark_delivered(order)
        return api_response({"order": OrderSerializer(order).data}, message=ORDER_UPDATED)

    patch = put


class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        summary="Update order status",
        request=OrderStatusUpdateSerializer,
        responses={200: OrderSerializer},
        tags=["Orders"],
    )
    def put(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.get_order(order_id)
        order = OrderService.update_status(
            order,
            serializer.validated_data["status"],
            tracking_number=serializer.validated_data.get("trackingNumber") or None,
        )
        return api_response({"order": OrderSerializer(order).data}, message=ORDER_UPDATED)

    patch = put


class TrackOrderView(APIView):
    """Public order tracking by full order id."""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Track order",
        request=TrackOrderSerializer,
        responses={200: TrackedOrderSerializer},
        tags=["Orders"],
    )
    def post(self, request):
        serializer = TrackOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.track(serializer.validated_data.get("orderId"))
        return api_response({"order": TrackedOrderSerializer(order).data})


class ShippingSettingView(APIView):
    """Read (public) or update (admin) the active shipping settings."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated(), IsAdmin()]

    @extend_schema(summary="Get shipping settings", responses={200: ShippingSettingSerializer}, tags=["Shipping"])
    def get(self, request):
        setting = ShippingSetting.get_active()
        return api_response(
            {"settings": ShippingSettingSerializer(setting).data},
            message="Shipping settings retrieved successfully",
        )

    @extend_schema(
        summary="Update shipping settings",
        request=ShippingSettingSerializer,
        responses={200: ShippingSettingSerializer},
        tags=["Shipping"],
    )
    def put(self, request):
        setting = ShippingSetting.get_active()
        serializer = ShippingSettingSerializer(setting, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response(
            {"settings": serializer.data},
            message="Shipping settings updated successfully",
        )

    patch = put
