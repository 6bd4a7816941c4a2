"""Signing – canonical serialization of signed-URL parameters.

The server recomputes the signature from the query string it receives, so
every rule here is part of the wire contract: booleans are lower-case
``true``/``false``, numbers are plain positional decimals, keys are sorted,
nothing is URL-encoded before signing. NaN and infinities are refused.
"""
from __future__ import annotations

import math
from datetime import UTC, datetime
from decimal import Decimal
from typing import Mapping, Union

Scalar = Union[str, int, float, bool, Decimal]
Expiry = Union[datetime, int, float]


def canonical_value(value: Scalar) -> str:
    """Return the one string form *value* is signed as."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeError(f"Cannot sign non-finite number {value!r}")
        if value.is_integer():
            return str(int(value))
        # repr() is the shortest round-tripping form; Decimal drops the exponent
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise TypeError(f"Cannot sign non-finite number {value!r}")
        if value == value.to_integral_value():
            return str(int(value))
        return format(value.normalize(), "f")
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot sign parameter of type {type(value).__name__}")


def canonical_query(parameters: Mapping[str, Scalar | None]) -> str:
    """Sorted ``key=value`` pairs joined by ``&``; ``None`` values are omitted."""
    present = {k: canonical_value(v) for k, v in parameters.items() if v is not None}
    return "&".join(f"{key}={present[key]}" for key in sorted(present))


def expires_epoch(expires_at: Expiry) -> int:
    """Whole Unix seconds for an expiry instant (naive datetimes are UTC)."""
    if isinstance(expires_at, datetime):
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return math.floor(expires_at.timestamp())
    if isinstance(expires_at, bool):
        raise TypeError("expires_at must be a datetime or epoch seconds")
    return math.floor(expires_at)


def signing_message(parameters: Mapping[str, Scalar | None], expires_at: Expiry) -> str:
    """The exact string fed to HMAC: canonical query plus ``&expires=<n>``."""
    return f"{canonical_query(parameters)}&expires={expires_epoch(expires_at)}"


__all__ = [
    "Expiry",
    "Scalar",
    "canonical_query",
    "canonical_value",
    "expires_epoch",
    "signing_message",
]
