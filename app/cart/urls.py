"""
URL configuration for the cart app.
"""

from django.urls import path

from cart.views import CartAddView, CartItemView, CartView

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("add/", CartAddView.as_view(), name="add"),
    path("<str:item_id>/", CartItemView.as_view(), name="item"),
]
