"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - Create account, emails verification link
        login/                     - Email/password login
        logout/                    - Blacklist refresh token
        token/refresh/             - Refresh access token
        me/                        - Current user
        verify-email/              - Email verification
        forgot-password/           - Password reset email
        reset-password/            - Password reset
    /api/v1/users/                 - Accounts (admin list, profile, password,
                                     addresses, wishlist)
    /api/v1/products/              - Catalog (products, categories)
    /api/v1/cart/                  - Shopping cart
    /api/v1/orders/                - Checkout and order lifecycle
        my-orders/                 - Own orders
        track/                     - Public order tracking (POST)
        {id}/                      - Order detail
        {id}/pay/                  - Mark paid
        {id}/cancel/               - Cancel and restore stock
        {id}/deliver/              - Mark delivered (admin)
        {id}/status/               - Set status (admin)
    /api/v1/shipping/              - Shipping settings
    /api/v1/payment/               - Stripe payments
        create-intent/             - Create PaymentIntent
        confirm/                   - Confirm PaymentIntent status
        refund/                    - Refund (admin)
        settings/                  - Gateway settings (admin)
        active/                    - Active gateways (publishable keys)
        webhook/                   - Stripe webhook endpoint (POST)
    /api/v1/returns/               - Return requests
        my-returns/                - Own returns
        {id}/status/               - Return workflow (admin)
    /api/v1/reviews/               - Product reviews
        product/{id-or-slug}/      - Reviews of a product
        {id}/                      - Update / delete

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("users/", include("authentication.user_urls")),
    path("products/", include("catalog.urls")),
    path("cart/", include("cart.urls")),
    path("orders/", include("orders.urls")),
    path("shipping/", include("orders.shipping_urls")),
    path("payment/", include("payments.urls")),
    path("returns/", include("returns.urls")),
    path("reviews/", include("reviews.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Storefront Admin"
admin.site.site_title = "Storefront Admin"
admin.site.index_title = "Store administration"
