"""
Payment admin configuration.

Registers gateway settings, payments and webhook events with the
Django admin. Payment state changes should be made through the service
layer, not admin.
"""

from django.contrib import admin

from payments.models import GatewaySetting, Payment, WebhookEvent


@admin.register(GatewaySetting)
class GatewaySettingAdmin(admin.ModelAdmin):
    list_display = ["gateway", "mode", "is_active", "updated_at"]
    list_filter = ["gateway", "mode", "is_active"]
    readonly_fields = ["id", "created_at", "updated_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "gateway", "mode", "is_active"),
            },
        ),
        (
            "Test Keys",
            {
                "fields": ("test_secret_key", "test_publishable_key", "test_webhook_secret"),
                "classes": ("collapse",),
            },
        ),
        (
            "Live Keys",
            {
                "fields": ("live_secret_key", "live_publishable_key", "live_webhook_secret"),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin configuration for Payment.

    Provides visibility into PaymentIntents created for orders.
    """

    list_display = ["id", "order", "user", "amount_display", "status", "created_at"]
    list_filter = ["status", "currency", "created_at"]
    search_fields = ["id", "payment_intent_id", "user__email", "order__id"]
    readonly_fields = [
        "id",
        "user",
        "order",
        "payment_intent_id",
        "amount",
        "currency",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    def amount_display(self, obj: Payment) -> str:
        return f"{obj.amount} {obj.currency.upper()}"

    amount_display.short_description = "Amount"


@admin.register(WebhookEvent)
class WebhookEventAdmin(admin.ModelAdmin):
    """
    Admin configuration for WebhookEvent.

    Provides visibility into webhook processing status.
    Webhook events are immutable once received.
    """

    list_display = [
        "id",
        "stripe_event_id",
        "event_type",
        "status",
        "processed_at",
        "created_at",
    ]
    list_filter = ["status", "event_type", "created_at"]
    search_fields = ["id", "stripe_event_id", "event_type"]
    readonly_fields = [
        "id",
        "created_at",
        "updated_at",
        "stripe_event_id",
        "event_type",
        "payload",
        "processed_at",
    ]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "stripe_event_id", "event_type", "status"),
            },
        ),
        (
            "Processing",
            {
                "fields": ("processed_at",),
            },
        ),
        (
            "Error Info",
            {
                "fields": ("error_message",),
                "classes": ("collapse",),
            },
        ),
        (
            "Payload",
            {
                "fields": ("payload",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )
