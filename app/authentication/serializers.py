"""
Serializers for authentication.

This module provides DRF serializers for:
- User model (read operations)
- Registration (create user)
- Login (email/password → JWT pair)
- Logout, password reset and email verification requests
- Saved addresses

Related files:
    - models.py: User model
    - views.py: Views that use these serializers

Security:
    - Password fields are write-only
    - role is read-only; admins are created via the admin site or createsuperuser
"""

from django.contrib.auth import authenticate
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import Address, User
from authentication.services import MIN_PASSWORD_LENGTH, AuthService


class UserSerializer(serializers.ModelSerializer):
    """Serializer for User model (read operations)."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone",
            "role",
            "email_verified",
            "date_joined",
        ]
        read_only_fields = fields


class UserUpdateSerializer(serializers.ModelSerializer):
    """Partial update of the current user's own profile fields."""

    class Meta:
        model = User
        fields = ["name", "phone"]


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    Handles email/password registration. New accounts always get the
    customer role.
    """

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
        help_text="Password must be at least 6 characters.",
    )
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_email(self, value):
        """Validate that email is not already in use."""
        email = value.lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("User already exists")
        return email

    def create(self, validated_data):
        return AuthService.register(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data["name"],
            phone=validated_data.get("phone", ""),
        )


class LoginSerializer(serializers.Serializer):
    """
    Authenticate with email/password and issue a JWT pair.

    validated_data after is_valid():
        {"accessToken", "refreshToken", "user"}
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            email=attrs["email"].lower().strip(),
            password=attrs["password"],
        )
        if user is None:
            raise AuthenticationFailed("Invalid credentials")

        refresh = RefreshToken.for_user(user)
        return {
            "accessToken": str(refresh.access_token),
            "refreshToken": str(refresh),
            "user": UserSerializer(user).data,
        }


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class TokenSerializer(serializers.Serializer):
    """Emailed token, posted back by the frontend link handler."""

    token = serializers.CharField(max_length=64)


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=64)
    password = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
    )


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(write_only=True, style={"input_type": "password"})
    newPassword = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
    )


class AddressSerializer(serializers.ModelSerializer):
    """Saved address in the client's camelCase shape."""

    fullName = serializers.CharField(source="full_name", max_length=150)
    phoneNumber = serializers.CharField(source="phone_number", max_length=32)
    streetAddress = serializers.CharField(source="street_address", max_length=255)
    postalCode = serializers.CharField(source="postal_code", max_length=20)
    isDefault = serializers.BooleanField(source="is_default", required=False, default=False)

    class Meta:
        model = Address
        fields = [
            "id",
            "fullName",
            "phoneNumber",
            "streetAddress",
            "city",
            "state",
            "postalCode",
            "country",
            "isDefault",
        ]
        read_only_fields = ["id"]
        extra_kwargs = {"state": {"required": False, "allow_blank": True}}
