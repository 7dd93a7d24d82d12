"""
Cart views.

    GET    /api/v1/cart/            - Current user's cart (created if absent)
    POST   /api/v1/cart/add/        - Add {productId, quantity}
    PUT    /api/v1/cart/{itemId}/   - Set {quantity}
    DELETE /api/v1/cart/{itemId}/   - Remove a line
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from cart.models import Cart
from cart.serializers import (
    AddToCartSerializer,
    CartSerializer,
    UpdateCartItemSerializer,
)
from cart.services import CartService
from core.responses import api_response


def _cart_payload(cart):
    cart = Cart.objects.prefetch_related("items__product__category").get(pk=cart.pk)
    return {"cart": CartSerializer(cart).data}


class CartView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get cart", responses={200: CartSerializer}, tags=["Cart"])
    def get(self, request):
        cart = CartService.get_or_create(request.user)
        return api_response(_cart_payload(cart))


class CartAddView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Add to cart", request=AddToCartSerializer, tags=["Cart"])
    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = CartService.add_item(
            request.user,
            serializer.validated_data["productId"],
            serializer.validated_data["quantity"],
        )
        return api_response(_cart_payload(cart), message="Item added to cart")


class CartItemView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Update cart item", request=UpdateCartItemSerializer, tags=["Cart"])
    def put(self, request, item_id):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = CartService.update_item(
            request.user, item_id, serializer.validated_data["quantity"]
        )
        return api_response(_cart_payload(cart), message="Cart updated successfully")

    patch = put

    @extend_schema(summary="Remove cart item", tags=["Cart"])
    def delete(self, request, item_id):
        cart = CartService.remove_item(request.user, item_id)
        return api_response(_cart_payload(cart), message="Item removed from cart")
