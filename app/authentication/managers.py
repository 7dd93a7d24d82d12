"""
User manager for email-based accounts.

Emails are stored lowercased so login lookups are case-insensitive.
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager creating customers and admins.

    Usage:
        customer = User.objects.create_user(email="buyer@example.com", password="...")
        admin = User.objects.create_superuser(email="ops@example.com", password="...")
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create a customer account.

        Raises:
            ValueError: No email given
        """
        if not email:
            raise ValueError("Email is required")

        extra_fields.setdefault("role", self.model.Role.CUSTOMER)
        user = self.model(email=self.normalize_email(email).lower(), **extra_fields)
        # Accounts created without a password cannot log in until one is set
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create an admin that can also sign in to the Django admin site."""
        extra_fields.update(is_staff=True, is_superuser=True, role=self.model.Role.ADMIN)
        return self.create_user(email, password, **extra_fields)
