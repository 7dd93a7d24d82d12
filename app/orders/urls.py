"""
URL configuration for the orders app.

URL structure:
    /api/v1/orders/                  - Create (customer) / list all (admin)
    /api/v1/orders/my-orders/        - Own orders
    /api/v1/orders/track/            - Public tracking
    /api/v1/orders/{id}/             - Detail
    /api/v1/orders/{id}/pay/         - Mark paid
    /api/v1/orders/{id}/cancel/      - Cancel
    /api/v1/orders/{id}/deliver/     - Mark delivered (admin)
    /api/v1/orders/{id}/status/      - Update status (admin)
"""

from django.urls import path

from orders.views import (
    MyOrdersView,
    OrderCancelView,
    OrderDeliverView,
    OrderDetailView,
    OrderListCreateView,
    OrderPayView,
    OrderStatusView,
    TrackOrderView,
)

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="list"),
    path("my-orders/", MyOrdersView.as_view(), name="my-orders"),
    path("track/", TrackOrderView.as_view(), name="track"),
    path("<str:order_id>/", OrderDetailView.as_view(), name="detail"),
    path("<str:order_id>/pay/", OrderPayView.as_view(), name="pay"),
    path("<str:order_id>/cancel/", OrderCancelView.as_view(), name="cancel"),
    path("<str:order_id>/deliver/", OrderDeliverView.as_view(), name="deliver"),
    path("<str:order_id>/status/", OrderStatusView.as_view(), name="status"),
]
