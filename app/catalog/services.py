"""
Catalog services.

StockLedger:
    The only code path that changes Product.stock. Reservations are a
    single conditional UPDATE:

        UPDATE product SET stock = stock - q WHERE id = ? AND stock >= q

    Zero matched rows means the product is missing or short on stock; the
    ledger re-reads the row to tell the two apart. Callers run these inside
    their own transaction so a later failure rolls every change back.

ProductService:
    Lookup by id or slug, used by the product detail and review endpoints.

Usage:
    from catalog.services import StockLedger

    with transaction.atomic():
        product = StockLedger.reserve(product_id, 2)
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import F

from catalog.exceptions import InsufficientStockError
from catalog.models import Product
from core.exceptions import NotFoundError
from core.helpers import is_valid_object_id
from core.services import BaseService

if TYPE_CHECKING:
    from django.db.models import QuerySet


class StockLedger(BaseService):
    """Atomic stock mutations for products."""

    @classmethod
    def reserve(cls, product_id: str, quantity: int) -> Product:
        """
        Decrement stock by quantity if enough units are available.

        Args:
            product_id: Product primary key
            quantity: Units to reserve (positive)

        Returns:
            The product, refreshed after the decrement

        Raises:
            NotFoundError: Product does not exist
            InsufficientStockError: stock < quantity
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        updated = Product.objects.filter(pk=product_id, stock__gte=quantity).update(
            stock=F("stock") - quantity
        )
        if updated:
            product = Product.objects.get(pk=product_id)
            cls.get_logger().info(
                "Stock reserved",
                extra={
                    "product_id": product_id,
                    "quantity": quantity,
                    "remaining": product.stock,
                },
            )
            return product

        product = Product.objects.filter(pk=product_id).only("name", "stock").first()
        if product is None:
            raise NotFoundError(
                f"Product not found: {product_id}",
                error_code="PRODUCT_NOT_FOUND",
            )
        raise InsufficientStockError(product.name, product.stock, quantity)

    @classmethod
    def release(cls, product_id: str | None, quantity: int) -> bool:
        """
        Return units to stock.

        Products that were deleted since the reservation are skipped.

        Returns:
            True if a product row was updated
        """
        if product_id is None or quantity <= 0:
            return False

        updated = Product.objects.filter(pk=product_id).update(
            stock=F("stock") + quantity
        )
        if not updated:
            cls.get_logger().warning(
                "Stock release skipped for missing product",
                extra={"product_id": product_id, "quantity": quantity},
            )
            return False

        cls.get_logger().info(
            "Stock released",
            extra={"product_id": product_id, "quantity": quantity},
        )
        return True


class ProductService(BaseService):
    """Product lookups."""

    @classmethod
    def queryset(cls) -> QuerySet[Product]:
        return Product.objects.select_related("category")

    @classmethod
    def get_by_id_or_slug(cls, identifier: str) -> Product:
        """
        Resolve a product from a 24-hex id or a slug.

        Raises:
            NotFoundError: No matching product
        """
        lookup = {"pk": identifier.lower()} if is_valid_object_id(identifier) else {"slug": identifier}
        product = cls.queryset().filter(**lookup).first()
        if product is None:
            raise NotFoundError("Product not found", error_code="PRODUCT_NOT_FOUND")
        return product

    @classmethod
    def find_by_id_or_slug(cls, identifier: str) -> Product | None:
        """Like get_by_id_or_slug but returns None when nothing matches."""
        try:
            return cls.get_by_id_or_slug(identifier)
        except NotFoundError:
            return None
