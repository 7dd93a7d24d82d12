"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Object identifier generation and validation (24-char hex ids)
- Random tokens for emailed links
- Money conversion to minor currency units

These utilities are pure infrastructure - they have no knowledge
of domain concepts like orders, payments, or business logic.

Usage:
    from core.helpers import generate_object_id, is_valid_object_id, to_minor_units

    object_id = generate_object_id()      # "6650f1c2a9b4e3d2c1b0a998"
    is_valid_object_id(object_id)         # True
    to_minor_units(Decimal("19.995"))     # 2000
"""

from __future__ import annotations

import re
import secrets
import time
from decimal import ROUND_HALF_UP, Decimal

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")

_CENT = Decimal("0.01")


def generate_object_id() -> str:
    """
    Generate a 24-character hexadecimal identifier.

    The first 8 characters encode the creation time in seconds, the
    remaining 16 are random, so ids sort roughly by creation time.

    Returns:
        Lowercase 24-character hex string
    """
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def generate_token() -> str:
    """64-character hex token for emailed links (verification, password reset)."""
    return secrets.token_hex(32)


def is_valid_object_id(value: object) -> bool:
    """
    Check whether a value is a well-formed 24-character hex identifier.

    Args:
        value: Candidate identifier (any type)

    Returns:
        True if value is a string of exactly 24 hex characters
    """
    return isinstance(value, str) and _OBJECT_ID_RE.fullmatch(value) is not None


def quantize_money(amount: Decimal | float | int | str) -> Decimal:
    """Round an amount to cents using half-up rounding."""
    return Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal | float | int | str) -> int:
    """
    Convert a major-unit amount to integer minor units (cents).

    Rounds half-up to the nearest cent.

    Args:
        amount: Amount in major units (e.g. dollars)

    Returns:
        Integer amount in minor units

    Example:
        to_minor_units("10.50")   # 1050
        to_minor_units(19.999)    # 2000
    """
    return int(
        (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )
