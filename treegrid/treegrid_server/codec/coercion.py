"""
Shared coercion policy from wire values to typed cell values.

Both wire formats first classify their input into a WireValue (a shape
plus the raw Python payload) and then call coerce_for_column. The policy
table lives here and nowhere else:

    Column type | Accepted shape | Result
    ------------|----------------|-------------------------------------------
    STRING      | TEXT           | text
    BOOL        | BOOLEAN        | boolean
    NUMBER      | NUMBER         | integer if whole (and fits int64), else real
    CURRENCY    | NUMBER         | always real
    any         | NULL           | null

Invariants:
    - NULL is accepted by every column type
    - MISSING (no value supplied at all) is an error, never null
    - CURRENCY never yields an integer, even for whole amounts
    - Every integer produced fits a signed 64-bit protobuf field
    - Only finite numbers are stored; inf and nan are a type mismatch

How to change safely:
    - New wire formats add a classifier, never a second policy
    - Changing a rule changes both protocols at once; update both codec tests
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..store.errors import MissingValueError, TypeMismatchError
from ..store.model import ColumnDef, ColumnType
from ..store.values import NULL, Value

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class WireShape(Enum):
    """Protocol-neutral classification of an incoming wire value."""

    NULL = "null"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OTHER = "other"
    MISSING = "missing"


@dataclass(frozen=True)
class WireValue:
    """A classified wire value.

    Attributes:
        shape: What the wire format says the value is
        data: Raw payload (str, int, float, bool or None)
    """

    shape: WireShape
    data: Any = None


MISSING = WireValue(WireShape.MISSING)


def coerce_for_column(wire: WireValue, column: ColumnDef) -> Value:
    """Turn a classified wire value into a cell value for a column.

    Args:
        wire: Classified wire value
        column: Target column definition

    Returns:
        The typed Value to store

    Raises:
        MissingValueError: If no value was supplied
        TypeMismatchError: If the shape does not fit the column type
    """
    if wire.shape == WireShape.MISSING:
        raise MissingValueError(details={"column_id": column.id})
    if wire.shape == WireShape.NULL:
        return NULL

    if column.type == ColumnType.STRING:
        if wire.shape == WireShape.TEXT:
            return Value.text(wire.data)
        raise TypeMismatchError("string", column.id)

    if column.type == ColumnType.BOOL:
        if wire.shape == WireShape.BOOLEAN:
            return Value.boolean(wire.data)
        raise TypeMismatchError("boolean", column.id)

    if column.type in (ColumnType.NUMBER, ColumnType.CURRENCY):
        if wire.shape == WireShape.NUMBER:
            return _coerce_number(wire.data, column)
        raise TypeMismatchError("numeric", column.id)

    raise ValueError(f"Unsupported column type: {column.type!r}")


def _coerce_number(number: Any, column: ColumnDef) -> Value:
    try:
        real = float(number)
    except OverflowError:
        raise TypeMismatchError("numeric", column.id)
    # Non-finite numbers are never stored
    if not math.isfinite(real):
        raise TypeMismatchError("numeric", column.id)

    if column.type == ColumnType.CURRENCY:
        return Value.real(real)

    if isinstance(number, int):
        if INT64_MIN <= number <= INT64_MAX:
            return Value.integer(number)
        return Value.real(real)

    if real.is_integer() and INT64_MIN <= real <= INT64_MAX:
        return Value.integer(int(real))
    return Value.real(real)
