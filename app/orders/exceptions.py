"""
Order exceptions.

Exception Hierarchy:
    ConflictError (core)
    └── InvalidStateTransitionError - Transition not allowed from current status (400)
"""

from __future__ import annotations

from core.exceptions import ConflictError


class InvalidStateTransitionError(ConflictError):
    """Raised when a status change is not allowed from the current status."""

    default_error_code = "INVALID_STATE_TRANSITION"
