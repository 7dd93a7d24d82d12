"""
Tests for StockLedger reservations and releases.
"""

import pytest

from catalog.exceptions import InsufficientStockError
from catalog.services import StockLedger
from catalog.tests.factories import ProductFactory
from core.exceptions import NotFoundError
from core.helpers import generate_object_id


@pytest.mark.django_db
class TestStockLedgerReserve:
    """Tests for StockLedger.reserve()."""

    def test_reserve_decrements_stock(self):
        """Reserving Q units from S leaves S - Q."""
        product = ProductFactory(stock=5)

        result = StockLedger.reserve(product.id, 3)

        assert result.stock == 2
        product.refresh_from_db()
        assert product.stock == 2

    def test_reserve_exact_stock_leaves_zero(self):
        """Stock can reach exactly zero."""
        product = ProductFactory(stock=3)

        StockLedger.reserve(product.id, 3)

        product.refresh_from_db()
        assert product.stock == 0

    def test_reserve_more_than_available_raises(self):
        """Over-reservation fails and leaves stock untouched."""
        product = ProductFactory(name="Widget", stock=2)

        with pytest.raises(InsufficientStockError) as exc_info:
            StockLedger.reserve(product.id, 3)

        assert exc_info.value.message == "Insufficient stock for product: Widget. Available: 2"
        assert exc_info.value.status_code == 400
        product.refresh_from_db()
        assert product.stock == 2

    def test_second_reservation_cannot_oversell(self):
        """Stock 5, reserve 3 then 3: the second fails, stock stays 2."""
        product = ProductFactory(stock=5)

        StockLedger.reserve(product.id, 3)
        with pytest.raises(InsufficientStockError):
            StockLedger.reserve(product.id, 3)

        product.refresh_from_db()
        assert product.stock == 2

    def test_reserve_unknown_product_raises_not_found(self):
        """Missing products raise a 404 error naming the id."""
        missing_id = generate_object_id()

        with pytest.raises(NotFoundError) as exc_info:
            StockLedger.reserve(missing_id, 1)

        assert exc_info.value.message == f"Product not found: {missing_id}"

    def test_reserve_rejects_non_positive_quantity(self):
        product = ProductFactory(stock=5)

        with pytest.raises(ValueError):
            StockLedger.reserve(product.id, 0)


@pytest.mark.django_db
class TestStockLedgerRelease:
    """Tests for StockLedger.release()."""

    def test_release_increments_stock(self):
        product = ProductFactory(stock=2)

        assert StockLedger.release(product.id, 3) is True

        product.refresh_from_db()
        assert product.stock == 5

    def test_release_skips_missing_product(self):
        """Deleted products are skipped without error."""
        assert StockLedger.release(generate_object_id(), 3) is False

    def test_release_skips_null_product(self):
        """Order items whose product was deleted carry product_id=None."""
        assert StockLedger.release(None, 3) is False
