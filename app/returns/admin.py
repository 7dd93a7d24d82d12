from django.contrib import admin

from returns.models import ReturnItem, ReturnRequest


class ReturnItemInline(admin.TabularInline):
    model = ReturnItem
    extra = 0
    readonly_fields = ("product", "name", "quantity", "price")


@admin.register(ReturnRequest)
class ReturnRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "user", "status", "total_refund_amount", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "order__id", "user__email")
    # Status changes go through ReturnService (stock restore, Stripe refund)
    readonly_fields = ("status", "total_refund_amount", "created_at", "updated_at")
    inlines = [ReturnItemInline]
