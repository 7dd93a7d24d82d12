"""
Shared plumbing for the service classes in each app.

Services hold the business rules; views only parse input and shape output.
Rule violations are raised as core.exceptions errors and reach the client
through the API exception handler. ServiceResult is for outcomes the caller
inspects and carries on from, such as a webhook handler that could not use
its payload.

    class ReturnService(BaseService):
        @classmethod
        def update_status(cls, actor, return_id, new_status, admin_notes=None):
            with cls.atomic():
                ...
            cls.get_logger().info("Return updated", extra={"return_id": return_id})
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of an operation that reports failure instead of raising."""

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ServiceResult[T]:
        return cls(success=False, error=error, error_code=error_code)

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Stateless base for services; every operation is a classmethod.

    Each subclass logs under "<module>.<ClassName>" so a single service can
    be filtered in the log configuration.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the block in one database transaction.

        Stock reservations made inside are rolled back if a later step
        raises, e.g. when the order insert fails after StockLedger.reserve.
        """
        with transaction.atomic():
            yield

    @classmethod
    def on_commit(cls, func) -> None:
        """Defer func until the surrounding transaction commits."""
        transaction.on_commit(func)
