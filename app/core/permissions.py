"""
Shared DRF permission classes.

Usage:
    from core.permissions import IsAdmin

    class AllOrdersView(APIView):
        permission_classes = [IsAuthenticated, IsAdmin]
"""

from rest_framework.permissions import BasePermission


class IsAdmin(BasePermission):
    """Allow access only to users whose ``is_admin`` property is true."""

    message = "Access forbidden"

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated and getattr(user, "is_admin", False)
        )
