"""
Protobuf wire codec for TreeGrid.

Translates between tables.proto messages and the store model. The tagged
Value message maps one-to-one onto the cell value kinds:

    string_value -> TEXT      int_value  -> INTEGER
    double_value -> REAL      bool_value -> BOOLEAN
    null_value   -> NULL      (unset)    -> MISSING, an error

Invariants:
    - An unset Value oneof is MissingValue, never null
    - is_editable is derived at every encode (editable and not primary)
    - Row messages carry id/parent_id and also the key columns in cells,
      so one record is complete without the schema
"""

from __future__ import annotations

from typing import Any, Dict

from google.protobuf import struct_pb2

from ..proto import tables_pb2 as pb
from ..store.model import ColumnDef, ColumnType, Row, Table
from ..store.values import Value, ValueKind
from .coercion import MISSING, WireShape, WireValue, coerce_for_column

_COLUMN_TYPES: Dict[ColumnType, int] = {
    ColumnType.STRING: pb.COLUMN_TYPE_STRING,
    ColumnType.NUMBER: pb.COLUMN_TYPE_NUMBER,
    ColumnType.CURRENCY: pb.COLUMN_TYPE_CURRENCY,
    ColumnType.BOOL: pb.COLUMN_TYPE_BOOL,
}


def classify_proto(message: Any) -> WireValue:
    """Classify a tables.Value message by its set oneof member."""
    kind = message.WhichOneof("kind")
    if kind is None:
        return MISSING
    if kind == "null_value":
        return WireValue(WireShape.NULL)
    if kind == "string_value":
        return WireValue(WireShape.TEXT, message.string_value)
    if kind == "bool_value":
        return WireValue(WireShape.BOOLEAN, message.bool_value)
    if kind == "int_value":
        return WireValue(WireShape.NUMBER, message.int_value)
    if kind == "double_value":
        return WireValue(WireShape.NUMBER, message.double_value)
    return WireValue(WireShape.OTHER, getattr(message, kind))


def decode_proto_value(message: Any, column: ColumnDef) -> Value:
    """Decode a tables.Value for a column.

    Raises:
        MissingValueError: If no oneof member is set
        TypeMismatchError: If the value does not fit the column type
    """
    return coerce_for_column(classify_proto(message), column)


def encode_proto_value(value: Value, out: Any = None) -> Any:
    """Encode a cell value into a tables.Value (filled in place if given)."""
    message = out if out is not None else pb.Value()
    if value.kind == ValueKind.TEXT:
        message.string_value = value.data
    elif value.kind == ValueKind.INTEGER:
        message.int_value = value.data
    elif value.kind == ValueKind.REAL:
        message.double_value = value.data
    elif value.kind == ValueKind.BOOLEAN:
        message.bool_value = value.data
    elif value.kind == ValueKind.NULL:
        message.null_value = struct_pb2.NULL_VALUE
    else:
        raise ValueError(f"Unknown value kind: {value.kind!r}")
    return message


def column_type_to_proto(column_type: ColumnType) -> int:
    return _COLUMN_TYPES[column_type]


def column_type_from_proto(number: int) -> ColumnType:
    for column_type, proto_number in _COLUMN_TYPES.items():
        if proto_number == number:
            return column_type
    raise ValueError(f"Unknown proto column type: {number}")


def fill_proto_column(column: ColumnDef, out: Any) -> Any:
    out.id = column.id
    out.title = column.title
    out.type = column_type_to_proto(column.type)
    out.width = column.width
    out.is_tree = column.is_tree
    out.is_pinned = column.is_pinned
    out.is_editable = column.effective_editable
    out.is_primary = column.is_primary
    return out


def fill_proto_schema(table: Table, out: Any) -> Any:
    """Fill a tables.TableSchema from a table."""
    out.table_id = table.id
    out.name = table.name
    out.primary_key = table.primary_key
    out.parent_key = table.parent_key
    for column in table.schema:
        fill_proto_column(column, out.columns.add())
    return out


def fill_proto_row(table: Table, row: Row, out: Any) -> Any:
    """Fill a tables.Row; id/parent_id win over stored key cells."""
    out.id = row.id
    if row.parent_id is not None:
        out.parent_id = row.parent_id

    for column_id, value in row.cells.items():
        encode_proto_value(value, out.cells[column_id])

    encode_proto_value(Value.text(row.id), out.cells[table.primary_key])
    if table.has_tree:
        encode_proto_value(Value.from_python(row.parent_id), out.cells[table.parent_key])
    return out


def fill_proto_rows(table: Table, out: Any) -> Any:
    """Append every row of a table to a repeated tables.Row field."""
    for row in table.rows:
        fill_proto_row(table, row, out.add())
    return out
