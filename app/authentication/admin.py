from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from authentication.models import Address, EmailVerificationToken, User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("email", "name", "role", "email_verified", "is_active", "date_joined")
    list_filter = ("role", "email_verified", "is_active", "is_staff")
    search_fields = ("email", "name", "phone")
    ordering = ("-date_joined",)
    readonly_fields = ("date_joined", "last_login")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Contact", {"fields": ("name", "phone")}),
        ("Access", {"fields": ("role", "email_verified", "is_active", "is_staff", "is_superuser", "groups")}),
        ("Activity", {"fields": ("date_joined", "last_login")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "name", "role", "password1", "password2")}),
    )


@admin.register(EmailVerificationToken)
class EmailVerificationTokenAdmin(admin.ModelAdmin):
    list_display = ("user", "token_type", "expires_at", "used_at", "created_at")
    list_filter = ("token_type",)
    search_fields = ("user__email",)
    readonly_fields = ("token", "created_at")
    raw_id_fields = ("user",)


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("full_name", "user", "city", "country", "is_default")
    list_filter = ("country", "is_default")
    search_fields = ("full_name", "user__email", "city", "postal_code")
    raw_id_fields = ("user",)
