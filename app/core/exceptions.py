"""
Domain errors raised by services.

Each class carries the HTTP status it maps to, and
core.exception_handlers.api_exception_handler renders any of them as
{"statusCode": ..., "message": ..., "errorCode": ...}.

    BaseApplicationError          500
        ValidationError           400
            InvalidObjectIdError  400
        NotFoundError             404
        PermissionDeniedError     403
        ConflictError             400

    raise NotFoundError("Order not found", error_code="ORDER_NOT_FOUND")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Root of the domain error hierarchy.

    message is shown to the client as-is. error_code defaults to the class's
    default_error_code; details is included in the response when non-empty.
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "statusCode": self.status_code,
            "message": self.message,
            "errorCode": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, error_code={self.error_code!r})"


class ValidationError(BaseApplicationError):
    """Rejected input or a failed business rule such as insufficient stock."""

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class InvalidObjectIdError(ValidationError):
    """Identifier is not 24 hex characters; raised before any lookup."""

    default_error_code: str = "INVALID_OBJECT_ID"


class NotFoundError(BaseApplicationError):
    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class PermissionDeniedError(BaseApplicationError):
    """
    The actor is authenticated but may not act on the resource.

    Missing or invalid tokens never get here; DRF answers those with 401.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class ConflictError(BaseApplicationError):
    """The resource's current state forbids the operation, e.g. paying a cancelled order."""

    default_error_code: str = "CONFLICT"
    status_code: int = 400

