"""
Serializers for orders and shipping settings.

Request serializers accept the camelCase payloads used by the storefront
client (shippingAddress, itemsPrice, ...); response serializers use the
model field names.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem, OrderStatus, PaymentMethod, ShippingSetting
from orders.services import OrderLine, PriceBreakdown

MONEY = {"max_digits": 12, "decimal_places": 2, "min_value": 0}


# =============================================================================
# Request Serializers
# =============================================================================


class OrderItemInputSerializer(serializers.Serializer):
    product = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)
    # Accepted for compatibility; the server-side price snapshot is what's stored
    price = serializers.DecimalField(required=False, **MONEY)


class CreateOrderSerializer(serializers.Serializer):
    """POST /orders/ payload."""

    items = OrderItemInputSerializer(many=True, allow_empty=True)
    shippingAddress = serializers.CharField()
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices)
    itemsPrice = serializers.DecimalField(**MONEY)
    taxPrice = serializers.DecimalField(required=False, **MONEY)
    shippingPrice = serializers.DecimalField(required=False, **MONEY)
    totalPrice = serializers.DecimalField(required=False, **MONEY)

    def to_service_kwargs(self) -> dict:
        data = self.validated_data
        return {
            "items": [
                OrderLine(product_id=item["product"], quantity=item["quantity"])
                for item in data["items"]
            ],
            "shipping_address": data["shippingAddress"],
            "payment_method": data["paymentMethod"],
            "price_breakdown": PriceBreakdown(
                items_price=data["itemsPrice"],
                tax_price=data.get("taxPrice"),
                shipping_price=data.get("shippingPrice"),
                total_price=data.get("totalPrice"),
            ),
        }


class PayOrderSerializer(serializers.Serializer):
    """Provider payment reference stored in Order.payment_result."""

    id = serializers.CharField()
    status = serializers.CharField(required=False, allow_blank=True, default="")
    update_time = serializers.CharField(required=False, allow_blank=True, default="")
    email_address = serializers.EmailField(required=False, allow_blank=True, default="")


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    trackingNumber = serializers.CharField(required=False, allow_blank=True, max_length=64)


class TrackOrderSerializer(serializers.Serializer):
    orderId = serializers.CharField(required=False, allow_blank=True)


# =============================================================================
# Response Serializers
# =============================================================================


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "product", "name", "quantity", "price"]
        read_only_fields = fields


class OrderUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()


class OrderSerializer(serializers.ModelSerializer):
    """Full order representation for owners and admins."""

    user = OrderUserSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user",
            "items",
            "status",
            "payment_method",
            "payment_result",
            "shipping_address",
            "tracking_number",
            "items_price",
            "tax_price",
            "shipping_price",
            "total_price",
            "is_paid",
            "paid_at",
            "is_delivered",
            "delivered_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TrackedOrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["name", "quantity", "price"]
        read_only_fields = fields


class TrackedOrderSerializer(serializers.ModelSerializer):
    """Reduced public view returned by order tracking."""

    items = TrackedOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "created_at",
            "total_price",
            "is_delivered",
            "is_paid",
            "tracking_number",
            "items",
        ]
        read_only_fields = fields


class ShippingSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingSetting
        fields = ["id", "shipping_fee", "free_shipping_threshold", "is_active", "updated_at"]
        read_only_fields = ["id", "is_active", "updated_at"]
