"""
core/serialization.py
---------------------
Normalize database-shaped values into JSON-safe Python values.

Big integer columns come back as arbitrary-precision `int` (or `Decimal` on
some drivers). Values inside the IEEE-754 safe range are kept as `int`;
anything larger is converted to the nearest `float`. Input must be acyclic.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel

MAX_SAFE_INTEGER = 2**53 - 1


def _normalize_int(value: int) -> int | float:
    if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
        return value
    return float(value)


def normalize(value: Any) -> Any:
    """Recursively convert big integers and decimals inside `value`."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return _normalize_int(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return _normalize_int(int(value))
        return float(value)
    if isinstance(value, BaseModel):
        return normalize(value.model_dump())
    if isinstance(value, (list, tuple)):
        return [normalize(item) for item in value]
    if isinstance(value, dict):
        return {key: normalize(item) for key, item in value.items()}
    return value
