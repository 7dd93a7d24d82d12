"""
Catalog Application - Products, categories and stock.

Models (import from catalog.models):
    - Category: Product grouping with optional parent
    - Product: Sellable item with price, stock and rating aggregates

Services (import from catalog.services):
    - StockLedger: Atomic stock reservation and release
    - ProductService: Product lookup by id or slug
"""
