"""
URL configuration for the returns app.

URL structure:
    /api/v1/returns/                 - Create (customer) / list all (admin)
    /api/v1/returns/my-returns/      - Own returns
    /api/v1/returns/{id}/status/     - Update status (admin)
"""

from django.urls import path

from returns.views import MyReturnsView, ReturnListCreateView, ReturnStatusView

app_name = "returns"

urlpatterns = [
    path("", ReturnListCreateView.as_view(), name="list"),
    path("my-returns/", MyReturnsView.as_view(), name="my-returns"),
    path("<str:return_id>/status/", ReturnStatusView.as_view(), name="status"),
]
