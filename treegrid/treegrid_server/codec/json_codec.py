"""
JSON wire codec for TreeGrid.

Translates between JSON-compatible Python objects (as produced by
json.loads / consumed by json.dumps) and the store model.

Wire shapes:
    Table list:  [{"id": "employees", "name": "HR"}, ...]
    Schema:      {"tableId", "name", "primaryKey", "parentKey", "columns": [
                     {"id", "title", "type", "width", "isTreeColumn",
                      "isPinned", "isEditable", "isPrimary"}, ...]}
    Rows:        [{<primaryKey>: "1", <parentKey>: null, <column>: value, ...}, ...]
    Update body: {"row_id": str, "column_id": str, "value": any} (strict JSON)

Invariants:
    - JSON booleans are never treated as numbers
    - isEditable is derived at every encode (editable and not primary)
    - Row records always carry the primary key and, for tree tables, the
      parent key (explicit null for roots)
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Tuple

from ..store.errors import InvalidRequestError
from ..store.model import ColumnDef, Row, Table
from ..store.values import Value, ValueKind
from .coercion import WireShape, WireValue, coerce_for_column


def classify_json(raw: Any) -> WireValue:
    """Classify a decoded JSON value."""
    if raw is None:
        return WireValue(WireShape.NULL)
    # bool first: bool is a subclass of int
    if isinstance(raw, bool):
        return WireValue(WireShape.BOOLEAN, raw)
    if isinstance(raw, (int, float)):
        return WireValue(WireShape.NUMBER, raw)
    if isinstance(raw, str):
        return WireValue(WireShape.TEXT, raw)
    return WireValue(WireShape.OTHER, raw)


def decode_json_value(raw: Any, column: ColumnDef) -> Value:
    """Decode a JSON value for a column.

    Raises:
        TypeMismatchError: If the value does not fit the column type
    """
    return coerce_for_column(classify_json(raw), column)


def encode_json_value(value: Value) -> Any:
    """Encode a cell value as a JSON-compatible scalar."""
    if value.kind in (ValueKind.TEXT, ValueKind.INTEGER, ValueKind.REAL, ValueKind.BOOLEAN):
        return value.data
    if value.kind == ValueKind.NULL:
        return None
    raise ValueError(f"Unknown value kind: {value.kind!r}")


def encode_json_table_list(tables: List[Tuple[str, str]]) -> List[Dict[str, str]]:
    return [{"id": table_id, "name": name} for table_id, name in tables]


def encode_json_column(column: ColumnDef) -> Dict[str, Any]:
    return {
        "id": column.id,
        "title": column.title,
        "type": column.type.value,
        "width": column.width,
        "isTreeColumn": column.is_tree,
        "isPinned": column.is_pinned,
        "isEditable": column.effective_editable,
        "isPrimary": column.is_primary,
    }


def encode_json_schema(table: Table) -> Dict[str, Any]:
    return {
        "tableId": table.id,
        "name": table.name,
        "primaryKey": table.primary_key,
        "parentKey": table.parent_key,
        "columns": [encode_json_column(col) for col in table.schema],
    }


def encode_json_row(table: Table, row: Row) -> Dict[str, Any]:
    """Encode one row as a self-describing record.

    The row's id and parent_id win over stored cells for the key columns.
    """
    record: Dict[str, Any] = {table.primary_key: row.id}
    if table.has_tree:
        record[table.parent_key] = row.parent_id

    for column_id, value in row.cells.items():
        if column_id in record:
            continue
        record[column_id] = encode_json_value(value)
    return record


def encode_json_rows(table: Table) -> List[Dict[str, Any]]:
    return [encode_json_row(table, row) for row in table.rows]


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-JSON token {token}")


def parse_json_body(text: str) -> Any:
    """Parse a request body as strict JSON.

    NaN, Infinity and -Infinity are not JSON and are refused, unlike in
    json.loads defaults.

    Raises:
        InvalidRequestError: If the text is not valid JSON
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidRequestError("invalid json")


def parse_update_body(body: Any) -> Tuple[str, str, Any]:
    """Validate the shape of an update request body.

    Args:
        body: Decoded JSON body

    Returns:
        Tuple of (row_id, column_id, raw_value); raw_value may be None

    Raises:
        InvalidRequestError: If the body is not an object, a key is missing,
            or row_id/column_id are not strings
    """
    if not isinstance(body, Mapping):
        raise InvalidRequestError("request body must be a JSON object")

    if "row_id" not in body or "column_id" not in body or "value" not in body:
        raise InvalidRequestError("row_id, column_id and value are required")

    row_id = body["row_id"]
    column_id = body["column_id"]
    if not isinstance(row_id, str) or not isinstance(column_id, str):
        raise InvalidRequestError("row_id and column_id must be strings")

    return row_id, column_id, body["value"]
