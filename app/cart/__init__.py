"""
Cart Application - Per-user shopping cart.

Models (import from cart.models):
    - Cart: One per user, with a recomputed total
    - CartItem: Product line with a price snapshot

Services (import from cart.services):
    - CartService: get/add/update/remove with total recomputation
"""
