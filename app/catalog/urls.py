"""
URL configuration for the catalog app.

URL structure:
    /api/v1/products/                       - List (public) / create (admin)
    /api/v1/products/categories/            - List (public) / create (admin)
    /api/v1/products/categories/{id}/       - Update / delete (admin)
    /api/v1/products/{id-or-slug}/          - Detail (public) / update / delete (admin)
"""

from django.urls import path

from catalog.views import (
    CategoryDetailView,
    CategoryListView,
    ProductDetailView,
    ProductListView,
)

app_name = "catalog"

urlpatterns = [
    path("", ProductListView.as_view(), name="product-list"),
    # Specific routes before the id-or-slug catch-all
    path("categories/", CategoryListView.as_view(), name="category-list"),
    path(
        "categories/<str:category_id>/",
        CategoryDetailView.as_view(),
        name="category-detail",
    ),
    path("<str:identifier>/", ProductDetailView.as_view(), name="product-detail"),
]
