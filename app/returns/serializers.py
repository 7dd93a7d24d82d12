"""
Serializers for return requests.
"""

from rest_framework import serializers

from orders.serializers import OrderUserSerializer
from returns.models import ReturnItem, ReturnRequest, ReturnStatus
from returns.services import ReturnLine


# =============================================================================
# Request Serializers
# =============================================================================


class ReturnItemInputSerializer(serializers.Serializer):
    product = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class CreateReturnSerializer(serializers.Serializer):
    """POST /returns/ payload. Omit items for a full return."""

    orderId = serializers.CharField()
    reason = serializers.CharField()
    items = ReturnItemInputSerializer(many=True, required=False, default=list)

    def to_service_kwargs(self) -> dict:
        data = self.validated_data
        return {
            "order_id": data["orderId"],
            "reason": data["reason"],
            "items": [
                ReturnLine(product_id=item["product"], quantity=item["quantity"])
                for item in data["items"]
            ],
        }


class ReturnStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReturnStatus.choices)
    adminNotes = serializers.CharField(required=False, allow_blank=True)


# =============================================================================
# Response Serializers
# =============================================================================


class ReturnItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReturnItem
        fields = ["id", "product", "name", "quantity", "price"]


class ReturnRequestSerializer(serializers.ModelSerializer):
    user = OrderUserSerializer(read_only=True)
    items = ReturnItemSerializer(many=True, read_only=True)

    class Meta:
        model = ReturnRequest
        fields = [
            "id",
            "user",
            "order",
            "reason",
            "items",
            "total_refund_amount",
            "status",
            "admin_notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
