"""
Storefront accounts.

Customers sign in with email and password. Admin capabilities (order
fulfilment, returns, gateway and shipping settings) follow from role, or
from superuser status for accounts created with createsuperuser.

    User                    Account, wishlist of products
    EmailVerificationToken  Single-use emailed token (verify email, reset password)
    Address                 Saved shipping address; at most one default per user
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone

from authentication.managers import UserManager
from core.model_mixins import ObjectIdPrimaryKeyMixin
from core.models import BaseModel


class User(AbstractBaseUser, PermissionsMixin):
    """
    Account keyed by email.

        user = User.objects.create_user(email="jane@example.com", password="pw", name="Jane")
        staff = User.objects.create_superuser(email="ops@example.com", password="pw")
    """

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True, db_index=True, max_length=254)
    name = models.CharField(max_length=150, blank=True, help_text="Shown on orders and reviews")
    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
        db_index=True,
    )
    email_verified = models.BooleanField(default=False)
    wishlist = models.ManyToManyField(
        "catalog.Product",
        blank=True,
        related_name="wishlisted_by",
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False, help_text="Django admin site access")

    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(" ")[0] if self.name else self.email.split("@")[0]


class EmailVerificationToken(BaseModel):
    """
    Token sent by email for address verification or password reset.

    Valid while unused and unexpired; consuming it sets used_at.
    """

    class TokenType(models.TextChoices):
        EMAIL_VERIFICATION = "email_verification", "Email Verification"
        PASSWORD_RESET = "password_reset", "Password Reset"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="verification_tokens",
    )
    token = models.CharField(max_length=64, unique=True, db_index=True)
    token_type = models.CharField(max_length=20, choices=TokenType.choices)
    expires_at = models.DateTimeField(db_index=True)
    used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "token_type", "used_at"]),
        ]

    def __str__(self):
        return f"{self.get_token_type_display()} for {self.user}"

    @property
    def is_valid(self) -> bool:
        return self.used_at is None and self.expires_at > timezone.now()


class Address(ObjectIdPrimaryKeyMixin, BaseModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="addresses",
    )
    full_name = models.CharField(max_length=150)
    phone_number = models.CharField(max_length=32)
    street_address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100)
    is_default = models.BooleanField(default=False)

    class Meta:
        ordering = ["-is_default", "-created_at"]
        verbose_name_plural = "addresses"
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_default=True),
                name="one_default_address_per_user",
            ),
        ]

    def __str__(self):
        return f"{self.full_name}, {self.street_address}, {self.city}"
