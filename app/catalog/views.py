"""
Catalog views.

Public:
    GET  /api/v1/products/                      - Paginated, filterable list
    GET  /api/v1/products/{id-or-slug}/         - Product detail
    GET  /api/v1/products/categories/           - Category list

Admin:
    POST   /api/v1/products/                    - Create product
    PUT    /api/v1/products/{id}/               - Update product
    DELETE /api/v1/products/{id}/               - Delete product
    POST   /api/v1/products/categories/         - Create category
    PUT    /api/v1/products/categories/{id}/    - Update category
    DELETE /api/v1/products/categories/{id}/    - Delete category
"""

import logging

from django.db.models import ProtectedError
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from catalog.filters import ProductFilter
from catalog.models import Category, Product
from catalog.serializers import (
    CategorySerializer,
    ProductSerializer,
    ProductWriteSerializer,
)
from catalog.services import ProductService
from core.exceptions import ConflictError, NotFoundError
from core.pagination import EnvelopePagination
from core.permissions import IsAdmin
from core.responses import api_response
from core.validators import validate_object_id

logger = logging.getLogger(__name__)


class AdminWritePermissionMixin:
    """Reads are public; writes require an admin."""

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [AllowAny()]
        return [IsAuthenticated(), IsAdmin()]


# =============================================================================
# Products
# =============================================================================


class ProductListView(AdminWritePermissionMixin, GenericAPIView):
    """List products (public) or create one (admin)."""

    serializer_class = ProductSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    pagination_class = EnvelopePagination
    results_key = "products"

    def get_queryset(self):
        return ProductService.queryset()

    @extend_schema(summary="List products", tags=["Products"])
    def get(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = ProductSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(
        summary="Create product",
        request=ProductWriteSerializer,
        responses={201: ProductSerializer},
        tags=["Products"],
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.save(created_by=request.user)

        logger.info("Product created", extra={"product_id": product.id})

        return api_response(
            {"product": serializer.data},
            message="Product created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class ProductDetailView(AdminWritePermissionMixin, APIView):
    """Retrieve (public, id or slug), update or delete (admin, id) a product."""

    @extend_schema(summary="Get product", responses={200: ProductSerializer}, tags=["Products"])
    def get(self, request, identifier):
        product = ProductService.get_by_id_or_slug(identifier)
        return api_response({"product": ProductSerializer(product).data})

    @extend_schema(
        summary="Update product",
        request=ProductWriteSerializer,
        responses={200: ProductSerializer},
        tags=["Products"],
    )
    def put(self, request, identifier):
        product = self._get_by_id(identifier)
        serializer = ProductWriteSerializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response(
            {"product": serializer.data},
            message="Product updated successfully",
        )

    patch = put

    @extend_schema(summary="Delete product", tags=["Products"])
    def delete(self, request, identifier):
        product = self._get_by_id(identifier)
        product.delete()

        logger.info("Product deleted", extra={"product_id": identifier})

        return api_response(None, message="Product deleted successfully")

    @staticmethod
    def _get_by_id(identifier):
        product_id = validate_object_id(identifier, "Invalid product ID format")
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            raise NotFoundError("Product not found", error_code="PRODUCT_NOT_FOUND")
        return product


# =============================================================================
# Categories
# =============================================================================


class CategoryListView(AdminWritePermissionMixin, APIView):
    """List categories (public) or create one (admin)."""

    @extend_schema(summary="List categories", responses={200: CategorySerializer(many=True)}, tags=["Products"])
    def get(self, request):
        categories = Category.objects.select_related("parent")
        return api_response({"categories": CategorySerializer(categories, many=True).data})

    @extend_schema(summary="Create category", request=CategorySerializer, tags=["Products"])
    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response(
            {"category": serializer.data},
            message="Category created",
            status_code=status.HTTP_201_CREATED,
        )


class CategoryDetailView(AdminWritePermissionMixin, APIView):
    """Update or delete a category (admin)."""

    @extend_schema(summary="Update category", request=CategorySerializer, tags=["Products"])
    def put(self, request, category_id):
        category = self._get(category_id)
        serializer = CategorySerializer(category, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response({"category": serializer.data}, message="Category updated")

    patch = put

    @extend_schema(summary="Delete category", tags=["Products"])
    def delete(self, request, category_id):
        category = self._get(category_id)
        try:
            category.delete()
        except ProtectedError as e:
            raise ConflictError(
                "Category still has products",
                error_code="CATEGORY_IN_USE",
            ) from e
        return api_response(None, message="Category deleted")

    @staticmethod
    def _get(category_id):
        category_id = validate_object_id(category_id, "Invalid category ID format")
        category = Category.objects.filter(pk=category_id).first()
        if category is None:
            raise NotFoundError("Category not found", error_code="CATEGORY_NOT_FOUND")
        return category
