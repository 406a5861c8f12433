"""
Unit tests for the shared coercion policy.

Tests cover:
- Accepted shape per column type
- Whole-number handling for Number and Currency
- Null acceptance and missing-value rejection
- Type mismatch messages
"""

import pytest

from treegrid.treegrid_server.codec.coercion import (
    INT64_MAX,
    INT64_MIN,
    MISSING,
    WireShape,
    WireValue,
    coerce_for_column,
)
from treegrid.treegrid_server.store.errors import MissingValueError, TypeMismatchError
from treegrid.treegrid_server.store.model import column
from treegrid.treegrid_server.store.values import NULL, Value, ValueKind

STRING = column("s", "S", "string")
NUMBER = column("n", "N", "number")
CURRENCY = column("c", "C", "currency")
BOOL = column("b", "B", "bool")


def text(s):
    return WireValue(WireShape.TEXT, s)


def number(n):
    return WireValue(WireShape.NUMBER, n)


def boolean(b):
    return WireValue(WireShape.BOOLEAN, b)


class TestAcceptedShapes:
    """Each column type accepts exactly one non-null shape."""

    @pytest.mark.parametrize("wire,col,expected", [
        (text("Ivanov"), STRING, Value.text("Ivanov")),
        (text(""), STRING, Value.text("")),
        (boolean(True), BOOL, Value.boolean(True)),
        (boolean(False), BOOL, Value.boolean(False)),
        (number(45), NUMBER, Value.integer(45)),
        (number(1.5), NUMBER, Value.real(1.5)),
        (number(600000), CURRENCY, Value.real(600000.0)),
        (number(19.99), CURRENCY, Value.real(19.99)),
    ])
    def test_accepted(self, wire, col, expected):
        assert coerce_for_column(wire, col) == expected

    @pytest.mark.parametrize("wire,col,expected", [
        (number(1), STRING, "string"),
        (boolean(True), STRING, "string"),
        (text("true"), BOOL, "boolean"),
        (number(1), BOOL, "boolean"),
        (text("42"), NUMBER, "numeric"),
        (boolean(True), NUMBER, "numeric"),
        (boolean(False), CURRENCY, "numeric"),
        (WireValue(WireShape.OTHER, [1]), NUMBER, "numeric"),
        (WireValue(WireShape.OTHER, {"a": 1}), STRING, "string"),
    ])
    def test_mismatch(self, wire, col, expected):
        with pytest.raises(TypeMismatchError) as exc_info:
            coerce_for_column(wire, col)
        assert exc_info.value.message == f"Expected {expected} value"
        assert exc_info.value.code == "TYPE_MISMATCH"


class TestWholeNumbers:
    """Number narrows whole values; Currency never does."""

    def test_whole_float_on_number_is_integer(self):
        v = coerce_for_column(number(42.0), NUMBER)
        assert v == Value.integer(42)
        assert v.kind == ValueKind.INTEGER

    def test_whole_float_on_currency_is_real(self):
        v = coerce_for_column(number(42.0), CURRENCY)
        assert v == Value.real(42.0)

    def test_int_on_currency_is_real(self):
        assert coerce_for_column(number(7), CURRENCY).kind == ValueKind.REAL

    def test_int64_bounds_stay_integer(self):
        assert coerce_for_column(number(INT64_MAX), NUMBER) == Value.integer(INT64_MAX)
        assert coerce_for_column(number(INT64_MIN), NUMBER) == Value.integer(INT64_MIN)

    def test_int_beyond_int64_becomes_real(self):
        v = coerce_for_column(number(INT64_MAX + 1), NUMBER)
        assert v.kind == ValueKind.REAL

    def test_huge_whole_float_stays_real(self):
        v = coerce_for_column(number(1e30), NUMBER)
        assert v == Value.real(1e30)

    @pytest.mark.parametrize("col", [NUMBER, CURRENCY])
    @pytest.mark.parametrize("raw", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rejected(self, raw, col):
        """Infinity and NaN are never stored."""
        with pytest.raises(TypeMismatchError, match="Expected numeric value"):
            coerce_for_column(number(raw), col)

    def test_int_too_large_for_float_on_number_is_mismatch(self):
        with pytest.raises(TypeMismatchError):
            coerce_for_column(number(10**400), NUMBER)

    def test_int_too_large_for_float_is_mismatch(self):
        with pytest.raises(TypeMismatchError, match="Expected numeric value"):
            coerce_for_column(number(10**400), CURRENCY)


class TestNullAndMissing:
    """Null is accepted everywhere; missing never is."""

    @pytest.mark.parametrize("col", [STRING, NUMBER, CURRENCY, BOOL])
    def test_null_accepted(self, col):
        assert coerce_for_column(WireValue(WireShape.NULL), col) is NULL

    @pytest.mark.parametrize("col", [STRING, NUMBER, CURRENCY, BOOL])
    def test_missing_rejected(self, col):
        with pytest.raises(MissingValueError) as exc_info:
            coerce_for_column(MISSING, col)
        assert exc_info.value.message == "Value is missing"
        assert exc_info.value.code == "MISSING_VALUE"
