"""
Factory Boy factories for catalog models.

Usage:
    from catalog.tests.factories import ProductFactory

    product = ProductFactory(price=Decimal("25.00"), stock=5)
"""

from decimal import Decimal

import factory

from catalog.models import Category, Product


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category
        django_get_or_create = ("name",)

    name = factory.Sequence(lambda n: f"Category {n}")
    description = ""


class ProductFactory(factory.django.DjangoModelFactory):
    """Product with 10 units in stock at 50.00 by default."""

    class Meta:
        model = Product
        skip_postgeneration_save = True

    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("sentence")
    price = Decimal("50.00")
    stock = 10
    category = factory.SubFactory(CategoryFactory)
    brand = "Acme"
