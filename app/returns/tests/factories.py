"""
Factory Boy factories for return requests.

Usage:
    from returns.tests.factories import ReturnRequestFactory

    return_request = ReturnRequestFactory.for_order(order)
"""

from decimal import Decimal

import factory

from orders.tests.factories import OrderFactory
from returns.models import ReturnItem, ReturnRequest, ReturnStatus


class ReturnRequestFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ReturnRequest
        skip_postgeneration_save = True

    order = factory.SubFactory(OrderFactory, delivered=True)
    user = factory.LazyAttribute(lambda o: o.order.user)
    reason = factory.Faker("sentence")
    total_refund_amount = Decimal("0.00")
    status = ReturnStatus.PROCESSING

    @classmethod
    def for_order(cls, order, **kwargs):
        """Full return of order: every order item, refund = order total."""
        return_request = cls(order=order, total_refund_amount=order.total_price, **kwargs)
        for order_item in order.items.all():
            ReturnItemFactory(
                return_request=return_request,
                product=order_item.product,
                name=order_item.name,
                quantity=order_item.quantity,
                price=order_item.price,
            )
        return return_request


class ReturnItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ReturnItem

    return_request = factory.SubFactory(ReturnRequestFactory)
    product = None
    name = factory.Faker("word")
    quantity = 1
    price = Decimal("10.00")
