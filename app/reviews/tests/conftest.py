"""
Fixtures for review tests.
"""

import pytest

from catalog.tests.factories import ProductFactory


@pytest.fixture
def product(db):
    return ProductFactory(name="Trail Runner")
