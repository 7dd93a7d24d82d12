"""
Reviews app: one review per user and product, with rating aggregates kept on
the product.

Usage:
    from reviews.services import ReviewService

    review = ReviewService.create_review(user, product_id, rating=5, comment="Great")
"""
