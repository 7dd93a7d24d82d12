"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks shared by the storefront apps. Nothing
here knows about orders, payments or products.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - ObjectIdPrimaryKeyMixin: 24-character hex primary key
    - SlugMixin: Auto-generated URL slugs

Services (import from core.services):
    - BaseService: Base class for service layer (logger, atomic, on_commit)
    - ServiceResult: Result wrapper for inspect-and-continue outcomes

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and HTTP status
    - ValidationError / InvalidObjectIdError: 400
    - NotFoundError: 404
    - PermissionDeniedError: 403
    - ConflictError: 400 (invalid state transitions)

API Layer:
    - core.exception_handlers.api_exception_handler: error envelope
    - core.responses.api_response: success envelope
    - core.pagination.EnvelopePagination: paginated success envelope
    - core.permissions.IsAdmin: admin-only access

Helpers (import from core.helpers / core.validators):
    - generate_object_id, is_valid_object_id, validate_object_id
    - to_minor_units, quantize_money
"""
