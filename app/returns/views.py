"""
Return request views.

Customer:
    POST /api/v1/returns/               - File a return request
    GET  /api/v1/returns/my-returns/    - Own return requests

Admin:
    GET  /api/v1/returns/               - All return requests
    PUT  /api/v1/returns/{id}/status/   - Move a return through the workflow
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.permissions import IsAdmin
from core.responses import api_response
from returns.serializers import (
    CreateReturnSerializer,
    ReturnRequestSerializer,
    ReturnStatusUpdateSerializer,
)
from returns.services import ReturnService


class ReturnListCreateView(APIView):
    """File a return (customer) or list every return (admin)."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    @extend_schema(
        summary="List all return requests",
        responses={200: ReturnRequestSerializer(many=True)},
        tags=["Returns"],
    )
    def get(self, request):
        returns = ReturnService.list_all()
        return api_response({"returns": ReturnRequestSerializer(returns, many=True).data})

    @extend_schema(
        summary="Create return request",
        request=CreateReturnSerializer,
        responses={201: ReturnRequestSerializer},
        tags=["Returns"],
    )
    def post(self, request):
        serializer = CreateReturnSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return_request = ReturnService.create_return(request.user, **serializer.to_service_kwargs())

        return api_response(
            {"returnRequest": ReturnRequestSerializer(return_request).data},
            message="Return request submitted successfully",
            status_code=status.HTTP_201_CREATED,
        )


class MyReturnsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List my return requests",
        responses={200: ReturnRequestSerializer(many=True)},
        tags=["Returns"],
    )
    def get(self, request):
        returns = ReturnService.list_for_user(request.user)
        return api_response({"returns": ReturnRequestSerializer(returns, many=True).data})


class ReturnStatusView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        summary="Update return status",
        request=ReturnStatusUpdateSerializer,
        responses={200: ReturnRequestSerializer},
        tags=["Returns"],
    )
    def put(self, request, return_id):
        serializer = ReturnStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return_request = ReturnService.update_status(
            return_id,
            serializer.validated_data["status"],
            admin_notes=serializer.validated_data.get("adminNotes"),
        )
        return api_response(
            {"returnRequest": ReturnRequestSerializer(return_request).data},
            message="Return status updated successfully",
        )

    patch = put
