from django.contrib import admin

from orders.models import Order, OrderItem, ShippingSetting


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "name", "quantity", "price")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "status", "total_price", "is_paid", "is_delivered", "created_at")
    list_filter = ("status", "payment_method", "is_paid", "is_delivered")
    search_fields = ("id", "user__email", "tracking_number")
    readonly_fields = ("status", "payment_result", "paid_at", "delivered_at", "created_at", "updated_at")
    inlines = [OrderItemInline]


@admin.register(ShippingSetting)
class ShippingSettingAdmin(admin.ModelAdmin):
    list_display = ("shipping_fee", "free_shipping_threshold", "is_active", "updated_at")
