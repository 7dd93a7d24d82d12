"""
Factory Boy factories for order models.

Usage:
    from orders.tests.factories import OrderFactory, OrderItemFactory

    order = OrderFactory(user=user)
    OrderItemFactory(order=order, product=product, quantity=2)

    # Order with one line and stock already taken for it
    order = OrderFactory.with_item(product=product, quantity=2)
"""

from decimal import Decimal

import factory
from django.utils import timezone

from authentication.tests.factories import UserFactory
from catalog.tests.factories import ProductFactory
from orders.models import Order, OrderItem, OrderStatus, PaymentMethod, ShippingSetting


class OrderFactory(factory.django.DjangoModelFactory):
    """Processing, unpaid Stripe order with no items."""

    class Meta:
        model = Order
        skip_postgeneration_save = True

    user = factory.SubFactory(UserFactory)
    status = OrderStatus.PROCESSING
    payment_method = PaymentMethod.STRIPE
    shipping_address = factory.Faker("address")
    items_price = Decimal("100.00")
    tax_price = Decimal("10.00")
    shipping_price = Decimal("0.00")
    total_price = Decimal("110.00")

    class Params:
        delivered = factory.Trait(
            status=OrderStatus.DELIVERED,
            is_paid=True,
            is_delivered=True,
            delivered_at=factory.LazyFunction(timezone.now),
        )
        paid = factory.Trait(
            is_paid=True,
            payment_result=factory.LazyFunction(
                lambda: {"id": "pi_test_123", "status": "succeeded"}
            ),
        )

    @classmethod
    def with_item(cls, product=None, quantity=1, **kwargs):
        """
        Create an order holding a single line for product.

        The product's stock is decremented as checkout would have done.
        """
        product = product or ProductFactory()
        items_price = product.price * quantity
        order = cls(
            items_price=items_price,
            tax_price=Decimal("0.00"),
            shipping_price=Decimal("0.00"),
            total_price=items_price,
            **kwargs,
        )
        OrderItemFactory(order=order, product=product, quantity=quantity)
        product.stock -= quantity
        product.save(update_fields=["stock"])
        return order


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    name = factory.LazyAttribute(lambda o: o.product.name if o.product else "Deleted product")
    quantity = 1
    price = factory.LazyAttribute(lambda o: o.product.price if o.product else Decimal("10.00"))


class ShippingSettingFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ShippingSetting

    shipping_fee = Decimal("15.00")
    free_shipping_threshold = Decimal("100.00")
    is_active = True
