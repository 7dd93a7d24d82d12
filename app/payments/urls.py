"""
URL configuration for the payments app.

All routes are prefixed with /api/v1/payment/ when included in the main URLconf.

Usage:
    # In config/urls.py
    api_v1_patterns = [
        path("payment/", include("payments.urls")),
    ]
"""

from django.urls import path

from payments.views import (
    ActiveGatewaysView,
    ConfirmPaymentView,
    CreatePaymentIntentView,
    GatewaySettingsView,
    RefundView,
)
from payments.webhooks.views import stripe_webhook

app_name = "payments"

urlpatterns = [
    path("create-intent/", CreatePaymentIntentView.as_view(), name="create-intent"),
    path("confirm/", ConfirmPaymentView.as_view(), name="confirm"),
    path("refund/", RefundView.as_view(), name="refund"),
    path("settings/", GatewaySettingsView.as_view(), name="settings"),
    path("active/", ActiveGatewaysView.as_view(), name="active"),
    # Webhook endpoint
    path("webhook/", stripe_webhook, name="webhook"),
]
