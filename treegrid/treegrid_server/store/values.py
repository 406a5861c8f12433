"""
Cell value model for TreeGrid.

A cell holds exactly one of five kinds of content:
- TEXT: a string
- INTEGER: a whole number
- REAL: a floating-point number
- BOOLEAN: true/false
- NULL: absent content

Invariants:
    - The kind set is closed; every consumer branches on all five kinds
    - Values are immutable and compare by (kind, data), so integer 42
      and real 42.0 are different values
    - bool is never accepted where an integer or real is expected

How to change safely:
    - Adding a kind means adding a branch to every encoder and decoder
      (codec/json_codec.py, codec/proto_codec.py, sdk client)
    - Never relax the payload type checks in Value.__post_init__

Example:
    >>> Value.integer(42) == Value.real(42.0)
    False
    >>> Value.from_python(None).is_null
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

CellData = Union[str, int, float, bool, None]


class ValueKind(Enum):
    """Discriminant of a cell value."""

    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class Value:
    """One cell's content.

    Attributes:
        kind: Which variant the value holds
        data: The Python payload matching kind (None for NULL)
    """

    kind: ValueKind
    data: CellData = None

    def __post_init__(self) -> None:
        """Check the payload against the kind."""
        if self.kind == ValueKind.TEXT:
            ok = isinstance(self.data, str)
        elif self.kind == ValueKind.INTEGER:
            ok = isinstance(self.data, int) and not isinstance(self.data, bool)
        elif self.kind == ValueKind.REAL:
            ok = isinstance(self.data, float)
        elif self.kind == ValueKind.BOOLEAN:
            ok = isinstance(self.data, bool)
        elif self.kind == ValueKind.NULL:
            ok = self.data is None
        else:
            raise ValueError(f"Unknown value kind: {self.kind!r}")

        if not ok:
            raise ValueError(
                f"{self.kind.value} value cannot hold {type(self.data).__name__}"
            )

    @classmethod
    def text(cls, data: str) -> Value:
        return cls(ValueKind.TEXT, data)

    @classmethod
    def integer(cls, data: int) -> Value:
        return cls(ValueKind.INTEGER, data)

    @classmethod
    def real(cls, data: float) -> Value:
        # Accept ints so callers can write Value.real(500000)
        if isinstance(data, int) and not isinstance(data, bool):
            data = float(data)
        return cls(ValueKind.REAL, data)

    @classmethod
    def boolean(cls, data: bool) -> Value:
        return cls(ValueKind.BOOLEAN, data)

    @classmethod
    def null(cls) -> Value:
        return NULL

    @classmethod
    def from_python(cls, obj: CellData) -> Value:
        """Wrap a plain Python scalar, inferring the kind from its type.

        Args:
            obj: None, bool, int, float or str

        Returns:
            The matching Value

        Raises:
            TypeError: If obj is not one of the supported scalar types
        """
        if obj is None:
            return NULL
        # bool first: bool is a subclass of int
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.real(obj)
        if isinstance(obj, str):
            return cls.text(obj)
        raise TypeError(f"Unsupported cell value type: {type(obj).__name__}")

    @property
    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL

    def to_python(self) -> CellData:
        """Return the plain Python payload."""
        return self.data

    def __repr__(self) -> str:
        if self.kind == ValueKind.NULL:
            return "Value.null()"
        return f"Value.{self.kind.value}({self.data!r})"


NULL = Value(ValueKind.NULL)
