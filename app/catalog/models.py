"""
Catalog models.

This module defines:
- Category: Product grouping, optionally nested under a parent
- Product: Sellable item carrying price, stock and review aggregates

Related files:
    - services.py: StockLedger (stock mutations), ProductService
    - filters.py: ProductFilter for list endpoints

Stock invariant:
    Product.stock never goes negative. All stock changes go through
    StockLedger, which uses conditional F() updates so concurrent orders
    cannot oversell. A database check constraint backs this up.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin, SlugMixin
from core.models import BaseModel


class Category(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Product category.

    Fields:
        name: Unique display name (matched case-insensitively by filters)
        description: Optional description
        parent: Optional parent category
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text="Unique category name",
    )
    description = models.TextField(
        blank=True,
        help_text="Optional category description",
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="children",
        help_text="Parent category, if nested",
    )

    class Meta:
        verbose_name = "category"
        verbose_name_plural = "categories"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Product(ObjectIdPrimaryKeyMixin, SlugMixin, BaseModel):
    """
    Sellable product.

    Fields:
        name: Display name (slug is derived from it)
        description: Long description
        price: Current unit price; orders and carts snapshot it
        stock: Units available; never negative
        category: Owning category
        brand: Optional brand name
        image_url: Primary image URL (uploads are handled elsewhere)
        discount: Display discount percentage (0-100)
        featured: Whether the product is highlighted on listings
        ratings: Average review rating (recomputed by ReviewService)
        num_reviews: Number of reviews (recomputed by ReviewService)
        created_by: Admin who created the product

    Usage:
        product = Product.objects.create(
            name="Trail Runner",
            description="Lightweight trail shoe",
            price=Decimal("89.99"),
            stock=10,
            category=category,
        )
        product.slug  # "trail-runner"
    """

    name = models.CharField(
        max_length=100,
        help_text="Product display name",
    )
    description = models.TextField(
        max_length=2000,
        help_text="Product description",
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Current unit price",
    )
    stock = models.PositiveIntegerField(
        default=0,
        help_text="Units available for sale",
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
        help_text="Category this product belongs to",
    )
    brand = models.CharField(
        max_length=100,
        blank=True,
        help_text="Brand name",
    )
    image_url = models.URLField(
        max_length=500,
        blank=True,
        help_text="Primary product image URL",
    )
    discount = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        help_text="Display discount percentage",
    )
    featured = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether the product is featured",
    )
    ratings = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Average review rating",
    )
    num_reviews = models.PositiveIntegerField(
        default=0,
        help_text="Number of reviews",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_products",
        help_text="Admin who created this product",
    )

    class Meta:
        verbose_name = "product"
        verbose_name_plural = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "-created_at"]),
            models.Index(fields=["price"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="product_stock_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def get_slug_source(self) -> str:
        return self.name
