"""
Serializers for catalog models.

Read serializers expose the category as {id, name}; write serializers take
a category id and are used by admin endpoints only.
"""

from rest_framework import serializers

from catalog.models import Category, Product


class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]


class CategorySerializer(serializers.ModelSerializer):
    """Category read/write serializer."""

    parent = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Category
        fields = ["id", "name", "description", "parent", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class ProductSerializer(serializers.ModelSerializer):
    """Product representation returned by the public endpoints."""

    category = CategorySummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "stock",
            "category",
            "brand",
            "image_url",
            "discount",
            "featured",
            "ratings",
            "num_reviews",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    """Admin create/update payload."""

    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all())

    class Meta:
        model = Product
        fields = [
            "name",
            "description",
            "price",
            "stock",
            "category",
            "brand",
            "image_url",
            "discount",
            "featured",
        ]

    def to_representation(self, instance):
        return ProductSerializer(instance, context=self.context).data
