"""
Django admin configuration for catalog models.
"""

from django.contrib import admin

from catalog.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "parent", "created_at")
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "stock", "featured", "ratings", "created_at")
    list_filter = ("featured", "category")
    search_fields = ("name", "slug", "brand")
    readonly_fields = ("id", "slug", "ratings", "num_reviews", "created_at", "updated_at")
