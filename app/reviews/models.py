"""
Review model.

A user reviews a product at most once. Product.ratings and
Product.num_reviews are derived from the review rows and recomputed by
ReviewService after every create, update and delete.
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel


class Review(ObjectIdPrimaryKeyMixin, BaseModel):
    """
    Product review.

    Fields:
        user: Reviewer
        product: Reviewed product
        rating: Whole stars, 1-5
        comment: Review text
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reviews",
        help_text="Reviewer",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.CASCADE,
        related_name="reviews",
        help_text="Reviewed product",
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Rating from 1 to 5",
    )
    comment = models.TextField(
        max_length=1000,
        help_text="Review text",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "review"
        verbose_name_plural = "reviews"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"],
                name="review_one_per_user_product",
            ),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name="review_rating_range",
            ),
        ]

    def __str__(self) -> str:
        return f"Review {self.id} of {self.product_id} ({self.rating})"
