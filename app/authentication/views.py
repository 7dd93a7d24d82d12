"""
Authentication and account views.

This module provides API views for:
- Registration (email/password) and email verification
- Login, logout (refresh token blacklist) and token refresh
- Password reset by email and password change
- Current user profile, saved addresses and wishlist
- Admin user listing

Related files:
    - serializers.py: Request/response serialization
    - services.py: AuthService, AddressService, WishlistService
    - urls.py: /api/v1/auth/ routing
    - user_urls.py: /api/v1/users/ routing

All responses use the {statusCode, data, message} envelope.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenRefreshView as BaseTokenRefreshView

from authentication.serializers import (
    AddressSerializer,
    ChangePasswordSerializer,
    ForgotPasswordSerializer,
    LoginSerializer,
    LogoutSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    TokenSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from authentication.services import AddressService, AuthService, WishlistService
from catalog.serializers import ProductSerializer
from core.exceptions import ValidationError
from core.permissions import IsAdmin
from core.responses import api_response


class RegisterView(APIView):
    """
    Register a new customer account.

    POST /api/v1/auth/register/
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register",
        request=RegisterSerializer,
        responses={201: UserSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return api_response(
            {"userId": user.id, "email": user.email},
            message="User registered successfully",
            status_code=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    Exchange email/password for an access/refresh token pair.

    POST /api/v1/auth/login/
    """

    permission_classes = [AllowAny]

    @extend_schema(summary="Login", request=LoginSerializer, tags=["Auth"])
    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        return api_response(serializer.validated_data, message="Login successful")


class TokenRefreshView(BaseTokenRefreshView):
    """
    Rotate a refresh token.

    POST /api/v1/auth/token/refresh/  {"refresh": "..."}
    """

    @extend_schema(summary="Refresh access token", tags=["Auth"])
    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        return api_response(
            {
                "accessToken": response.data["access"],
                "refreshToken": response.data.get("refresh"),
            }
        )


class MeView(APIView):
    """
    Current user profile.

    GET: Retrieve the authenticated user
    PUT/PATCH: Update name/phone
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get current user", responses={200: UserSerializer}, tags=["Auth"])
    def get(self, request):
        return api_response({"user": UserSerializer(request.user).data})

    @extend_schema(
        summary="Update current user",
        request=UserUpdateSerializer,
        responses={200: UserSerializer},
        tags=["Auth"],
    )
    def put(self, request):
        serializer = UserUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = AuthService.update_profile(request.user, **serializer.validated_data)
        return api_response(
            {"user": UserSerializer(user).data},
            message="Profile updated successfully",
        )

    patch = put


class LogoutView(APIView):
    """
    Blacklist the caller's refresh token.

    POST /api/v1/auth/logout/  {"refresh": "..."}
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Logout", request=LogoutSerializer, tags=["Auth"])
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AuthService.logout(request.user, serializer.validated_data["refresh"])
        return api_response(None, message="Logged out successfully")


class VerifyEmailView(APIView):
    """
    Consume an email verification token.

    GET  /api/v1/auth/verify-email/?token=...
    POST /api/v1/auth/verify-email/  {"token": "..."}
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Verify email (link)",
        parameters=[OpenApiParameter("token", str, required=True)],
        tags=["Auth"],
    )
    def get(self, request):
        token = request.query_params.get("token")
        if not token:
            raise ValidationError("Invalid verification token", error_code="INVALID_TOKEN")
        return self._verify(token)

    @extend_schema(summary="Verify email", request=TokenSerializer, tags=["Auth"])
    def post(self, request):
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._verify(serializer.validated_data["token"])

    def _verify(self, token):
        user = AuthService.verify_email(token)
        return api_response(
            {"user": UserSerializer(user).data},
            message="Email verified successfully",
        )


class ResendVerificationView(APIView):
    """POST /api/v1/auth/resend-verification/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Resend verification email", request=None, tags=["Auth"])
    def post(self, request):
        AuthService.resend_verification(request.user)
        return api_response(None, message="Verification email sent")


class ForgotPasswordView(APIView):
    """
    Request a password reset email.

    The response is the same whether or not the address has an account.
    """

    permission_classes = [AllowAny]

    @extend_schema(summary="Forgot password", request=ForgotPasswordSerializer, tags=["Auth"])
    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AuthService.request_password_reset(serializer.validated_data["email"])
        return api_response(
            None,
            message="If an account exists for this email, a reset link has been sent",
        )


class ResetPasswordView(APIView):
    """POST /api/v1/auth/reset-password/  {"token": "...", "password": "..."}"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Reset password", request=ResetPasswordSerializer, tags=["Auth"])
    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AuthService.reset_password(
            serializer.validated_data["token"],
            serializer.validated_data["password"],
        )
        return api_response(None, message="Password reset successfully")


# =============================================================================
# /api/v1/users/
# =============================================================================


class UserListView(APIView):
    """GET /api/v1/users/ (admin)"""

    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        summary="List users",
        responses={200: UserSerializer(many=True)},
        tags=["Users"],
    )
    def get(self, request):
        users = AuthService.list_users()
        return api_response({"users": UserSerializer(users, many=True).data})


class ChangePasswordView(APIView):
    """PUT /api/v1/users/change-password/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Change password", request=ChangePasswordSerializer, tags=["Users"])
    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AuthService.change_password(
            request.user,
            serializer.validated_data["currentPassword"],
            serializer.validated_data["newPassword"],
        )
        return api_response(None, message="Password updated successfully")

    patch = put


class AddressListView(APIView):
    """
    Saved addresses of the current user.

    GET: List (default first)
    POST: Add; the first address, or one sent with isDefault, becomes the default
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List addresses",
        responses={200: AddressSerializer(many=True)},
        tags=["Users"],
    )
    def get(self, request):
        addresses = AddressService.list_for_user(request.user)
        return api_response({"addresses": AddressSerializer(addresses, many=True).data})

    @extend_schema(
        summary="Add address",
        request=AddressSerializer,
        responses={201: AddressSerializer},
        tags=["Users"],
    )
    def post(self, request):
        serializer = AddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = AddressService.create(request.user, **serializer.validated_data)
        return api_response(
            {"address": AddressSerializer(address).data},
            message="Address added successfully",
            status_code=status.HTTP_201_CREATED,
        )


class AddressDetailView(APIView):
    """PUT/PATCH/DELETE /api/v1/users/addresses/{id}/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Update address",
        request=AddressSerializer,
        responses={200: AddressSerializer},
        tags=["Users"],
    )
    def put(self, request, address_id):
        serializer = AddressSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        address = AddressService.update(request.user, address_id, **serializer.validated_data)
        return api_response(
            {"address": AddressSerializer(address).data},
            message="Address updated successfully",
        )

    patch = put

    @extend_schema(summary="Delete address", tags=["Users"])
    def delete(self, request, address_id):
        AddressService.delete(request.user, address_id)
        return api_response(None, message="Address deleted successfully")


class WishlistView(APIView):
    """GET /api/v1/users/wishlist/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get wishlist",
        responses={200: ProductSerializer(many=True)},
        tags=["Users"],
    )
    def get(self, request):
        products = WishlistService.list_for_user(request.user)
        return api_response({"wishlist": ProductSerializer(products, many=True).data})


class WishlistToggleView(APIView):
    """POST /api/v1/users/wishlist/{id-or-slug}/ adds or removes the product."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Toggle wishlist product", request=None, tags=["Users"])
    def post(self, request, identifier):
        added = WishlistService.toggle(request.user, identifier)
        return api_response(
            {"inWishlist": added},
            message="Added to wishlist" if added else "Removed from wishlist",
        )
