"""
Authentication application.

Email-based customer and admin accounts with JWT access (simplejwt).

Key components:
    - User: Custom user keyed by email, with a customer/admin role
    - Views: register, login, token refresh, current user

Usage:
    from authentication.models import User

    user.is_admin  # True for role=admin or superusers
"""
