"""
Review service.

ReviewService owns review writes and keeps the product's rating aggregates
in step with them:

    ratings      Mean rating of the product's reviews (0 when none)
    num_reviews  Number of reviews

Usage:
    from reviews.services import ReviewService

    review = ReviewService.create_review(user, product_id, rating=4, comment="Solid")
    ReviewService.update_review(user, review.id, rating=5)
    ReviewService.delete_review(user, review.id)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from django.db import IntegrityError
from django.db.models import Avg, Count, QuerySet

from catalog.models import Product
from catalog.services import ProductService
from core.exceptions import NotFoundError, PermissionDeniedError
from core.services import BaseService
from core.validators import validate_object_id
from reviews.exceptions import AlreadyReviewedError
from reviews.models import Review

if TYPE_CHECKING:
    from authentication.models import User


class ReviewService(BaseService):
    """Product reviews and rating aggregation."""

    @classmethod
    def get_review(cls, review_id: str) -> Review:
        review_id = validate_object_id(review_id, "Invalid review ID format")
        review = Review.objects.select_related("user", "product").filter(pk=review_id).first()
        if review is None:
            raise NotFoundError("Review not found", error_code="REVIEW_NOT_FOUND")
        return review

    @classmethod
    def list_for_product(cls, identifier: str) -> QuerySet[Review]:
        """
        Reviews of a product given its id or slug, newest first.

        An unknown product yields an empty queryset rather than a 404.
        """
        product = ProductService.find_by_id_or_slug(identifier)
        if product is None:
            return Review.objects.none()
        return Review.objects.filter(product=product).select_related("user")

    @classmethod
    def list_all(cls) -> QuerySet[Review]:
        return Review.objects.select_related("user", "product")

    @classmethod
    def create_review(cls, user: User, product_id: str, rating: int, comment: str) -> Review:
        """
        Add the user's review of a product.

        Raises:
            NotFoundError: Unknown product
            AlreadyReviewedError: The user already reviewed this product
        """
        product = ProductService.get_by_id_or_slug(product_id)

        if Review.objects.filter(user=user, product=product).exists():
            raise AlreadyReviewedError()

        try:
            with cls.atomic():
                review = Review.objects.create(
                    user=user, product=product, rating=rating, comment=comment
                )
                cls._recompute_product_rating(product.pk)
        except IntegrityError as e:
            # Lost a race with a concurrent review by the same user
            raise AlreadyReviewedError() from e

        cls.get_logger().info(
            "Review created",
            extra={"review_id": review.id, "product_id": product.pk, "user_id": user.pk},
        )
        return review

    @classmethod
    def update_review(
        cls,
        actor: User,
        review_id: str,
        rating: int | None = None,
        comment: str | None = None,
    ) -> Review:
        """
        Edit a review. Only its author may do so; blank fields are left as is.

        Raises:
            NotFoundError: Unknown review
            PermissionDeniedError: Actor is not the author
        """
        review = cls.get_review(review_id)
        if review.user_id != actor.pk:
            raise PermissionDeniedError("Access forbidden", error_code="NOT_REVIEW_OWNER")

        review.rating = rating or review.rating
        review.comment = comment or review.comment

        with cls.atomic():
            review.save(update_fields=["rating", "comment", "updated_at"])
            cls._recompute_product_rating(review.product_id)

        return review

    @classmethod
    def delete_review(cls, actor: User, review_id: str) -> None:
        """
        Delete a review (author or admin).

        Raises:
            NotFoundError: Unknown review
            PermissionDeniedError: Actor is neither author nor admin
        """
        review = cls.get_review(review_id)
        if review.user_id != actor.pk and not actor.is_admin:
            raise PermissionDeniedError("Access forbidden", error_code="NOT_REVIEW_OWNER")

        product_id = review.product_id
        with cls.atomic():
            review.delete()
            cls._recompute_product_rating(product_id)

        cls.get_logger().info(
            "Review deleted",
            extra={"review_id": review_id, "product_id": product_id, "actor_id": actor.pk},
        )

    @classmethod
    def _recompute_product_rating(cls, product_id: str) -> None:
        stats = Review.objects.filter(product_id=product_id).aggregate(
            average=Avg("rating"), count=Count("id")
        )
        average = Decimal(str(stats["average"] or 0)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        Product.objects.filter(pk=product_id).update(
            ratings=average, num_reviews=stats["count"]
        )
