"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/              - Create a customer account
    /api/v1/auth/login/                 - Email/password login (JWT pair)
    /api/v1/auth/logout/                - Blacklist a refresh token
    /api/v1/auth/token/refresh/         - Rotate refresh token
    /api/v1/auth/me/                    - Current user (GET/PUT/PATCH)
    /api/v1/auth/verify-email/          - Consume verification token (GET ?token= or POST)
    /api/v1/auth/resend-verification/   - Send a new verification email
    /api/v1/auth/forgot-password/       - Email a password reset link
    /api/v1/auth/reset-password/        - Set a new password from a reset token
"""

from django.urls import path

from authentication.views import (
    ForgotPasswordView,
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    ResendVerificationView,
    ResetPasswordView,
    TokenRefreshView,
    VerifyEmailView,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("me/", MeView.as_view(), name="me"),
    path("verify-email/", VerifyEmailView.as_view(), name="verify-email"),
    path("resend-verification/", ResendVerificationView.as_view(), name="resend-verification"),
    path("forgot-password/", ForgotPasswordView.as_view(), name="forgot-password"),
    path("reset-password/", ResetPasswordView.as_view(), name="reset-password"),
]
