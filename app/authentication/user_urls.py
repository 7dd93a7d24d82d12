"""
URL configuration for account management.

URL structure:
    /api/v1/users/                          - All users (admin)
    /api/v1/users/profile/                  - Current user (GET/PUT/PATCH)
    /api/v1/users/change-password/          - Change password
    /api/v1/users/addresses/                - List / add saved addresses
    /api/v1/users/addresses/{id}/           - Update / delete an address
    /api/v1/users/wishlist/                 - Wishlist products
    /api/v1/users/wishlist/{id-or-slug}/    - Toggle a product (POST)
"""

from django.urls import path

from authentication.views import (
    AddressDetailView,
    AddressListView,
    ChangePasswordView,
    MeView,
    UserListView,
    WishlistToggleView,
    WishlistView,
)

app_name = "users"

urlpatterns = [
    path("", UserListView.as_view(), name="list"),
    path("profile/", MeView.as_view(), name="profile"),
    path("change-password/", ChangePasswordView.as_view(), name="change-password"),
    path("addresses/", AddressListView.as_view(), name="addresses"),
    path("addresses/<str:address_id>/", AddressDetailView.as_view(), name="address-detail"),
    path("wishlist/", WishlistView.as_view(), name="wishlist"),
    path("wishlist/<str:identifier>/", WishlistToggleView.as_view(), name="wishlist-toggle"),
]
