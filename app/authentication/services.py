"""
Account services.

AuthService owns everything that changes an account after registration
checks pass: emailed tokens (email verification, password reset), logout,
password changes, saved addresses and the product wishlist.

Emails go out through toolkit.services.notifications.Notifier after the
transaction commits; a failed email never fails the request.

Token rules:
    - A token is usable once and only before expires_at
    - Requesting a password reset never reveals whether the email exists
    - A successful reset invalidates the user's other reset tokens and
      blacklists every refresh token issued to them
"""

from __future__ import annotations

from datetime import timedelta

from django.db.models import QuerySet
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import Address, EmailVerificationToken, User
from catalog.models import Product
from catalog.services import ProductService
from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.helpers import generate_token
from core.services import BaseService
from core.validators import validate_object_id
from toolkit.services.notifications import Notifier

INVALID_TOKEN_MESSAGE = "Invalid or expired token"
MIN_PASSWORD_LENGTH = 6


class AuthService(BaseService):
    """Registration side effects, tokens, logout and passwords."""

    EMAIL_VERIFICATION_EXPIRY_HOURS = 24
    PASSWORD_RESET_EXPIRY_HOURS = 1

    # =========================================================================
    # Registration and email verification
    # =========================================================================

    @classmethod
    def register(cls, email: str, password: str, name: str, phone: str = "") -> User:
        """Create a customer account and email it a verification link."""
        with cls.atomic():
            user = User.objects.create_user(email=email, password=password, name=name, phone=phone)
            cls._send_verification(user)

        cls.get_logger().info("User registered", extra={"user_id": user.id})
        return user

    @classmethod
    def resend_verification(cls, user: User) -> None:
        if user.email_verified:
            raise ValidationError("Email already verified", error_code="EMAIL_ALREADY_VERIFIED")

        with cls.atomic():
            # Older links stop working once a new one is sent
            user.verification_tokens.filter(
                token_type=EmailVerificationToken.TokenType.EMAIL_VERIFICATION,
                used_at__isnull=True,
            ).update(used_at=timezone.now())
            cls._send_verification(user)

    @classmethod
    def verify_email(cls, token: str) -> User:
        """
        Mark the token's user as verified.

        Raises:
            ValidationError: Unknown, used or expired token
        """
        with cls.atomic():
            token_obj = cls._consume(token, EmailVerificationToken.TokenType.EMAIL_VERIFICATION)
            user = token_obj.user
            user.email_verified = True
            user.save(update_fields=["email_verified", "updated_at"])

        cls.get_logger().info("Email verified", extra={"user_id": user.id})
        return user

    # =========================================================================
    # Sessions and passwords
    # =========================================================================

    @classmethod
    def logout(cls, user: User, refresh: str) -> None:
        """
        Blacklist a refresh token so it can no longer be rotated.

        Access tokens already issued stay valid until they expire.

        Raises:
            ValidationError: Malformed, expired or already blacklisted token
            PermissionDeniedError: Token belongs to another account
        """
        try:
            token = RefreshToken(refresh)
        except TokenError:
            raise ValidationError("Invalid refresh token", error_code="INVALID_REFRESH_TOKEN") from None

        if str(token.get("user_id")) != str(user.pk):
            raise PermissionDeniedError("Token does not belong to this user")

        token.blacklist()
        cls.get_logger().info("User logged out", extra={"user_id": user.id})

    @classmethod
    def request_password_reset(cls, email: str) -> None:
        """Email a reset link if an active account uses this address."""
        user = User.objects.filter(email__iexact=email.strip(), is_active=True).first()
        if user is None:
            cls.get_logger().debug("Password reset requested for unknown email")
            return

        with cls.atomic():
            token_obj = cls._issue(user, EmailVerificationToken.TokenType.PASSWORD_RESET)
            cls.on_commit(lambda: Notifier.password_reset(user, token_obj.token))

        cls.get_logger().info("Password reset requested", extra={"user_id": user.id})

    @classmethod
    def reset_password(cls, token: str, new_password: str) -> User:
        """
        Set a new password from an emailed reset token.

        Raises:
            ValidationError: Unknown, used or expired token, or weak password
        """
        with cls.atomic():
            token_obj = cls._consume(token, EmailVerificationToken.TokenType.PASSWORD_RESET)
            user = token_obj.user
            cls._set_password(user, new_password)

            user.verification_tokens.filter(
                token_type=EmailVerificationToken.TokenType.PASSWORD_RESET,
                used_at__isnull=True,
            ).update(used_at=timezone.now())
            cls._blacklist_all(user)

        cls.get_logger().info("Password reset", extra={"user_id": user.id})
        return user

    @classmethod
    def change_password(cls, user: User, current_password: str, new_password: str) -> None:
        if not user.check_password(current_password):
            raise ValidationError("Current password is incorrect", error_code="INVALID_PASSWORD")

        cls._set_password(user, new_password)
        cls.get_logger().info("Password changed", extra={"user_id": user.id})

    # =========================================================================
    # Profile
    # =========================================================================

    @classmethod
    def update_profile(cls, user: User, **fields) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        user.save(update_fields=[*fields, "updated_at"])
        return user

    @classmethod
    def list_users(cls) -> QuerySet[User]:
        return User.objects.all()

    # =========================================================================
    # Internals
    # =========================================================================

    @classmethod
    def _send_verification(cls, user: User) -> None:
        token_obj = cls._issue(user, EmailVerificationToken.TokenType.EMAIL_VERIFICATION)
        cls.on_commit(lambda: Notifier.email_verification(user, token_obj.token))

    @classmethod
    def _issue(cls, user: User, token_type: str) -> EmailVerificationToken:
        hours = (
            cls.PASSWORD_RESET_EXPIRY_HOURS
            if token_type == EmailVerificationToken.TokenType.PASSWORD_RESET
            else cls.EMAIL_VERIFICATION_EXPIRY_HOURS
        )
        return EmailVerificationToken.objects.create(
            user=user,
            token=generate_token(),
            token_type=token_type,
            expires_at=timezone.now() + timedelta(hours=hours),
        )

    @classmethod
    def _consume(cls, token: str, token_type: str) -> EmailVerificationToken:
        token_obj = (
            EmailVerificationToken.objects.select_for_update()
            .select_related("user")
            .filter(
                token=token,
                token_type=token_type,
                used_at__isnull=True,
                expires_at__gt=timezone.now(),
            )
            .first()
        )
        if token_obj is None:
            raise ValidationError(INVALID_TOKEN_MESSAGE, error_code="INVALID_TOKEN")

        token_obj.used_at = timezone.now()
        token_obj.save(update_fields=["used_at", "updated_at"])
        return token_obj

    @classmethod
    def _set_password(cls, user: User, password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                error_code="WEAK_PASSWORD",
            )

        user.set_password(password)
        user.save(update_fields=["password", "updated_at"])

    @classmethod
    def _blacklist_all(cls, user: User) -> None:
        for outstanding in OutstandingToken.objects.filter(user=user):
            BlacklistedToken.objects.get_or_create(token=outstanding)


class AddressService(BaseService):
    """Saved shipping addresses. A user has at most one default."""

    @classmethod
    def list_for_user(cls, user: User) -> QuerySet[Address]:
        return user.addresses.all()

    @classmethod
    def get_for_user(cls, user: User, address_id: str) -> Address:
        address_id = validate_object_id(address_id, "Invalid address ID format")
        address = user.addresses.filter(pk=address_id).first()
        if address is None:
            raise NotFoundError("Address not found", error_code="ADDRESS_NOT_FOUND")
        return address

    @classmethod
    def create(cls, user: User, **fields) -> Address:
        with cls.atomic():
            # First address becomes the default
            if not user.addresses.exists():
                fields["is_default"] = True
            if fields.get("is_default"):
                cls._clear_default(user)
            address = Address.objects.create(user=user, **fields)

        cls.get_logger().info("Address added", extra={"user_id": user.id, "address_id": address.id})
        return address

    @classmethod
    def update(cls, user: User, address_id: str, **fields) -> Address:
        with cls.atomic():
            address = cls.get_for_user(user, address_id)
            if fields.get("is_default"):
                cls._clear_default(user, exclude=address.pk)
            for name, value in fields.items():
                setattr(address, name, value)
            address.save()
        return address

    @classmethod
    def delete(cls, user: User, address_id: str) -> None:
        address = cls.get_for_user(user, address_id)
        address.delete()
        cls.get_logger().info("Address removed", extra={"user_id": user.id, "address_id": address_id})

    @classmethod
    def _clear_default(cls, user: User, exclude: str | None = None) -> None:
        defaults = user.addresses.filter(is_default=True)
        if exclude is not None:
            defaults = defaults.exclude(pk=exclude)
        defaults.update(is_default=False)


class WishlistService(BaseService):
    @classmethod
    def list_for_user(cls, user: User) -> QuerySet[Product]:
        return user.wishlist.select_related("category")

    @classmethod
    def toggle(cls, user: User, identifier: str) -> bool:
        """
        Add the product if absent, remove it if present.

        Returns:
            True when the product is now on the wishlist
        """
        product = ProductService.get_by_id_or_slug(identifier)
        if user.wishlist.filter(pk=product.pk).exists():
            user.wishlist.remove(product)
            return False
        user.wishlist.add(product)
        return True
