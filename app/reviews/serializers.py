"""
Serializers for product reviews.
"""

from rest_framework import serializers

from reviews.models import Review


class CreateReviewSerializer(serializers.Serializer):
    product = serializers.CharField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(max_length=1000)


class UpdateReviewSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(max_length=1000, required=False, allow_blank=True)


class ReviewUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class ReviewProductSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    image_url = serializers.CharField()


class ReviewSerializer(serializers.ModelSerializer):
    user = ReviewUserSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ["id", "user", "product", "rating", "comment", "created_at", "updated_at"]
        read_only_fields = fields


class AdminReviewSerializer(ReviewSerializer):
    """Admin listing: expands the product."""

    product = ReviewProductSerializer(read_only=True)
