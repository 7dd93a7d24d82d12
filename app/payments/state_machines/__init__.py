"""
Status enums for payment models.
"""

from payments.state_machines.states import (
    GatewayMode,
    GatewayName,
    PaymentStatus,
    WebhookEventStatus,
)

__all__ = [
    "GatewayMode",
    "GatewayName",
    "PaymentStatus",
    "WebhookEventStatus",
]
