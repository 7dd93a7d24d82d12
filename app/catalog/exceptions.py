"""
Catalog exceptions.

Exception Hierarchy:
    ValidationError (core)
    └── InsufficientStockError - Requested quantity exceeds stock (400)
"""

from __future__ import annotations

from core.exceptions import ValidationError


class InsufficientStockError(ValidationError):
    """Raised when a reservation asks for more units than are in stock."""

    default_error_code = "INSUFFICIENT_STOCK"

    def __init__(self, product_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for product: {product_name}. Available: {available}",
            details={"available": available, "requested": requested},
        )
        self.available = available
        self.requested = requested
