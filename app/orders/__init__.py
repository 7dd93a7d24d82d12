"""
Orders Application - Checkout and order lifecycle.

Models (import from orders.models):
    - Order: Order with status state machine and payment/delivery flags
    - OrderItem: Line item with name and price snapshot
    - ShippingSetting: Shipping fee and free-shipping threshold

Services (import from orders.services):
    - OrderService: create, pay, cancel, status update, deliver, track

Helpers (import from orders.pricing):
    - calculate_tax, calculate_shipping_price, generate_tracking_number
"""
