"""
Factory Boy factories for payment test data.

Usage:
    from payments.tests.factories import (
        GatewaySettingFactory,
        PaymentFactory,
        WebhookEventFactory,
    )

    # Active Stripe setting in test mode
    setting = GatewaySettingFactory()

    # Live mode without a live secret
    setting = GatewaySettingFactory(mode=GatewayMode.LIVE)

    # Pending payment for an order
    payment = PaymentFactory(order=order, user=order.user)
"""

from decimal import Decimal

import factory

from authentication.tests.factories import UserFactory
from orders.tests.factories import OrderFactory
from payments.models import GatewaySetting, Payment, WebhookEvent
from payments.state_machines import (
    GatewayMode,
    GatewayName,
    PaymentStatus,
    WebhookEventStatus,
)


class GatewaySettingFactory(factory.django.DjangoModelFactory):
    """Active Stripe gateway in test mode with test keys only."""

    class Meta:
        model = GatewaySetting
        django_get_or_create = ("gateway",)

    gateway = GatewayName.STRIPE
    mode = GatewayMode.TEST
    test_secret_key = "sk_test_123"
    test_publishable_key = "pk_test_123"
    test_webhook_secret = "whsec_test_123"
    is_active = True


class PaymentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Payment

    order = factory.SubFactory(OrderFactory)
    user = factory.LazyAttribute(lambda o: o.order.user)
    payment_intent_id = factory.Sequence(lambda n: f"pi_test_{n:06d}")
    amount = Decimal("110.00")
    currency = "usd"
    status = PaymentStatus.PENDING


class WebhookEventFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating WebhookEvent instances.

    The payload carries a PaymentIntent object whose id is
    payment_intent_id (a factory parameter, not a model field).
    """

    class Meta:
        model = WebhookEvent
        exclude = ("payment_intent_id",)

    payment_intent_id = factory.Sequence(lambda n: f"pi_test_{n:06d}")
    stripe_event_id = factory.Sequence(lambda n: f"evt_test_{n:06d}")
    event_type = "payment_intent.succeeded"
    status = WebhookEventStatus.PENDING
    payload = factory.LazyAttribute(
        lambda o: {
            "id": o.stripe_event_id,
            "type": o.event_type,
            "data": {"object": {"id": o.payment_intent_id, "object": "payment_intent"}},
        }
    )
