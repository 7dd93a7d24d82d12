"""
Review exceptions.

Exception Hierarchy:
    ValidationError (core)
    └── AlreadyReviewedError - User already reviewed the product (400)
"""

from core.exceptions import ValidationError


class AlreadyReviewedError(ValidationError):
    default_error_code = "ALREADY_REVIEWED"

    def __init__(self, message: str = "Product already reviewed", **kwargs):
        super().__init__(message, **kwargs)
