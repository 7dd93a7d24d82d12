"""
Review views.

Public:
    GET    /api/v1/reviews/product/{id-or-slug}/  - Reviews of a product

Authenticated:
    POST   /api/v1/reviews/                       - Add a review
    PUT    /api/v1/reviews/{id}/                  - Edit own review
    DELETE /api/v1/reviews/{id}/                  - Delete own review (or any, admin)

Admin:
    GET    /api/v1/reviews/                       - All reviews
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from core.permissions import IsAdmin
from core.responses import api_response
from reviews.serializers import (
    AdminReviewSerializer,
    CreateReviewSerializer,
    ReviewSerializer,
    UpdateReviewSerializer,
)
from reviews.services import ReviewService


class ReviewListCreateView(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        summary="List all reviews",
        responses={200: AdminReviewSerializer(many=True)},
        tags=["Reviews"],
    )
    def get(self, request):
        reviews = ReviewService.list_all()
        return api_response({"reviews": AdminReviewSerializer(reviews, many=True).data})

    @extend_schema(
        summary="Create review",
        request=CreateReviewSerializer,
        responses={201: ReviewSerializer},
        tags=["Reviews"],
    )
    def post(self, request):
        serializer = CreateReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = ReviewService.create_review(
            request.user,
            serializer.validated_data["product"],
            rating=serializer.validated_data["rating"],
            comment=serializer.validated_data["comment"],
        )
        return api_response(
            {"review": ReviewSerializer(review).data},
            message="Review added successfully",
            status_code=status.HTTP_201_CREATED,
        )


class ReviewDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Update review",
        request=UpdateReviewSerializer,
        responses={200: ReviewSerializer},
        tags=["Reviews"],
    )
    def put(self, request, review_id):
        serializer = UpdateReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = ReviewService.update_review(request.user, review_id, **serializer.validated_data)
        return api_response(
            {"review": ReviewSerializer(review).data},
            message="Review updated successfully",
        )

    patch = put

    @extend_schema(summary="Delete review", tags=["Reviews"])
    def delete(self, request, review_id):
        ReviewService.delete_review(request.user, review_id)
        return api_response(None, message="Review deleted successfully")


class ProductReviewsView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="List reviews of a product",
        responses={200: ReviewSerializer(many=True)},
        tags=["Reviews"],
    )
    def get(self, request, product_id):
        reviews = ReviewService.list_for_product(product_id)
        return api_response({"reviews": ReviewSerializer(reviews, many=True).data})
