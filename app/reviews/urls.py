"""
URL configuration for the reviews app.

URL structure:
    /api/v1/reviews/                         - Create / list all (admin)
    /api/v1/reviews/product/{id-or-slug}/    - Product reviews (public)
    /api/v1/reviews/{id}/                    - Update / delete
"""

from django.urls import path

from reviews.views import ProductReviewsView, ReviewDetailView, ReviewListCreateView

app_name = "reviews"

urlpatterns = [
    path("", ReviewListCreateView.as_view(), name="list"),
    path("product/<str:product_id>/", ProductReviewsView.as_view(), name="product"),
    path("<str:review_id>/", ReviewDetailView.as_view(), name="detail"),
]
