"""Serialization boundary helpers shared by all resources.

Stored currency values are ``Decimal``; callers always receive plain
numbers.  ``to_number`` is the single conversion point and ``NumberField``
applies it to serializer output.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Union

from rest_framework import serializers

Number = Union[int, float]


def to_number(value: Any) -> Number:
    """Convert a stored numeric value (Decimal, str, int, float) to a number.

    ``None`` maps to ``0``.  Integers are returned unchanged.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a number.")


class NumberField(serializers.Field):
    """Read-only field rendering decimals as JSON numbers."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("read_only", True)
        super().__init__(**kwargs)

    def to_representation(self, value: Any) -> Number:
        return to_number(value)
