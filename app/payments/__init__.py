"""
Payments app for Stripe integration.

This app handles:
- Gateway settings (test/live credentials, active flag)
- PaymentIntent creation and confirmation
- Refunds (admin and return workflow)
- Webhook event handling

Related apps:
    - orders: Orders are marked paid from payment_intent.succeeded
    - returns: Refunded returns call PaymentService.refund

Usage:
    from payments.services import PaymentService

    intent = PaymentService.create_intent(user, order_id, amount)
    PaymentService.handle_webhook(request.body, signature)
"""
