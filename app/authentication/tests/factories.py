"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory, AdminFactory

    user = UserFactory()
    admin = AdminFactory()
    address = AddressFactory(user=user, is_default=True)
    token = EmailVerificationTokenFactory(user=user)
    inactive = UserFactory(is_active=False)
"""

from datetime import timedelta

import factory
from django.utils import timezone

from authentication.models import Address, EmailVerificationToken, User
from core.helpers import generate_token


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for customer users.

    Password defaults to "TestPass123!".
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Faker("name")
    role = User.Role.CUSTOMER
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )


class AdminFactory(UserFactory):
    """Factory for storefront admins (role=admin, not superuser)."""

    email = factory.Sequence(lambda n: f"admin{n}@example.com")
    role = User.Role.ADMIN


class EmailVerificationTokenFactory(factory.django.DjangoModelFactory):
    """Unused email verification token valid for 24 hours."""

    class Meta:
        model = EmailVerificationToken

    user = factory.SubFactory(UserFactory)
    token = factory.LazyFunction(generate_token)
    token_type = EmailVerificationToken.TokenType.EMAIL_VERIFICATION
    expires_at = factory.LazyFunction(lambda: timezone.now() + timedelta(hours=24))

    class Params:
        password_reset = factory.Trait(
            token_type=EmailVerificationToken.TokenType.PASSWORD_RESET,
            expires_at=factory.LazyFunction(lambda: timezone.now() + timedelta(hours=1)),
        )
        expired = factory.Trait(
            expires_at=factory.LazyFunction(lambda: timezone.now() - timedelta(minutes=1)),
        )


class AddressFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Address

    user = factory.SubFactory(UserFactory)
    full_name = factory.Faker("name")
    phone_number = "555-0100"
    street_address = factory.Sequence(lambda n: f"{n} Main St")
    city = "Springfield"
    state = "IL"
    postal_code = "62701"
    country = "US"
    is_default = False
