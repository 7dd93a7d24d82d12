"""
URL configuration for shipping settings.

URL structure:
    /api/v1/shipping/    - Get (public) / update (admin)
"""

from django.urls import path

from orders.views import ShippingSettingView

app_name = "shipping"

urlpatterns = [
    path("", ShippingSettingView.as_view(), name="settings"),
]
