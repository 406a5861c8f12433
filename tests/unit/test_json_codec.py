"""
Unit tests for the JSON codec.

Tests cover:
- Classification of decoded JSON values
- Schema and row encoding
- Update body validation
- Round trips through json.dumps/json.loads
"""

import json

import pytest

from treegrid.treegrid_server.codec.coercion import WireShape
from treegrid.treegrid_server.codec.json_codec import (
    classify_json,
    decode_json_value,
    encode_json_row,
    encode_json_rows,
    encode_json_schema,
    encode_json_table_list,
    encode_json_value,
    parse_json_body,
    parse_update_body,
)
from treegrid.treegrid_server.store.errors import InvalidRequestError, TypeMismatchError
from treegrid.treegrid_server.store.model import Row, Table, column
from treegrid.treegrid_server.store.seed import employees_table, seed_tables
from treegrid.treegrid_server.store.values import NULL, Value


class TestClassifyJson:
    """Tests for classify_json."""

    @pytest.mark.parametrize("raw,shape", [
        (None, WireShape.NULL),
        (True, WireShape.BOOLEAN),
        (0, WireShape.NUMBER),
        (2.5, WireShape.NUMBER),
        ("x", WireShape.TEXT),
        ([1], WireShape.OTHER),
        ({"a": 1}, WireShape.OTHER),
    ])
    def test_shapes(self, raw, shape):
        assert classify_json(raw).shape == shape

    def test_bool_is_not_numeric(self):
        """JSON true never satisfies a number column."""
        with pytest.raises(TypeMismatchError, match="Expected numeric value"):
            decode_json_value(True, column("qty", "Qty", "number"))


class TestEncodeJson:
    """Tests for schema and row encoding."""

    def test_encode_values(self):
        assert encode_json_value(Value.text("a")) == "a"
        assert encode_json_value(Value.integer(3)) == 3
        assert encode_json_value(Value.real(3)) == 3.0
        assert encode_json_value(Value.boolean(False)) is False
        assert encode_json_value(NULL) is None

    def test_table_list(self):
        assert encode_json_table_list([("employees", "HR")]) == [{"id": "employees", "name": "HR"}]

    def test_schema(self):
        schema = encode_json_schema(employees_table())
        assert schema["tableId"] == "employees"
        assert schema["name"] == "HR"
        assert schema["primaryKey"] == "id"
        assert schema["parentKey"] == "pid"
        assert [c["id"] for c in schema["columns"]] == [
            "id", "pid", "name", "position", "salary", "active",
        ]
        first = schema["columns"][0]
        assert first == {
            "id": "id",
            "title": "ID",
            "type": "string",
            "width": 120,
            "isTreeColumn": True,
            "isPinned": True,
            "isEditable": False,
            "isPrimary": True,
        }
        salary = schema["columns"][4]
        assert salary["type"] == "currency"
        assert salary["isEditable"] is True

    def test_schema_derives_is_editable(self):
        table = Table(
            id="t",
            name="T",
            primary_key="id",
            schema=(column("id", "ID", "string", primary=True, editable=True),),
        )
        assert encode_json_schema(table)["columns"][0]["isEditable"] is False

    def test_flat_table_parent_key_empty(self):
        table = Table(
            id="t",
            name="T",
            primary_key="id",
            schema=(column("id", "ID", "string", primary=True),),
            rows=[Row("a")],
        )
        assert encode_json_schema(table)["parentKey"] == ""
        assert encode_json_rows(table) == [{"id": "a"}]

    def test_root_row_has_null_parent(self):
        record = encode_json_row(employees_table(), employees_table().find_row("1"))
        assert record["id"] == "1"
        assert record["pid"] is None
        assert record["salary"] == 500000.0
        assert list(record)[:2] == ["id", "pid"]

    def test_child_row_has_parent(self):
        table = employees_table()
        assert encode_json_row(table, table.find_row("3"))["pid"] == "2"

    def test_row_id_wins_over_stored_cell(self):
        table = Table(
            id="t",
            name="T",
            primary_key="id",
            schema=(column("id", "ID", "string", primary=True),),
            rows=[Row("a", cells={"id": Value.text("stale")})],
        )
        assert encode_json_rows(table) == [{"id": "a"}]


class TestParseJsonBody:
    """Tests for parse_json_body."""

    def test_valid_body(self):
        assert parse_json_body('{"row_id": "1", "column_id": "salary", "value": 1.5}') == {
            "row_id": "1", "column_id": "salary", "value": 1.5,
        }

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_json_constants_refused(self, token):
        text = '{"row_id": "1", "column_id": "salary", "value": ' + token + "}"
        with pytest.raises(InvalidRequestError, match="invalid json") as exc_info:
            parse_json_body(text)
        assert exc_info.value.code == "INVALID_REQUEST_SHAPE"

    def test_malformed_text(self):
        with pytest.raises(InvalidRequestError, match="invalid json"):
            parse_json_body("{not json")

    def test_overflowing_number_is_type_mismatch(self):
        """1e999 is valid JSON but decodes to a non-finite float."""
        body = parse_json_body('{"value": 1e999}')
        with pytest.raises(TypeMismatchError, match="Expected numeric value"):
            decode_json_value(body["value"], column("salary", "Salary", "currency"))


class TestParseUpdateBody:
    """Tests for parse_update_body."""

    def test_valid_body(self):
        assert parse_update_body({"row_id": "1", "column_id": "salary", "value": 1}) == (
            "1", "salary", 1,
        )

    def test_null_value_is_present(self):
        assert parse_update_body({"row_id": "1", "column_id": "c", "value": None})[2] is None

    @pytest.mark.parametrize("body", [
        {"column_id": "c", "value": 1},
        {"row_id": "1", "value": 1},
        {"row_id": "1", "column_id": "c"},
        {},
    ])
    def test_missing_keys(self, body):
        with pytest.raises(InvalidRequestError, match="row_id, column_id and value are required"):
            parse_update_body(body)

    @pytest.mark.parametrize("body", [[1, 2], "text", 3, None])
    def test_not_an_object(self, body):
        with pytest.raises(InvalidRequestError, match="request body must be a JSON object"):
            parse_update_body(body)

    def test_ids_must_be_strings(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            parse_update_body({"row_id": 1, "column_id": "c", "value": 1})
        assert exc_info.value.code == "INVALID_REQUEST_SHAPE"


class TestJsonRoundTrip:
    """Encoded rows decode back to the stored values."""

    @pytest.mark.parametrize("table", seed_tables(), ids=lambda t: t.id)
    def test_rows_round_trip(self, table):
        records = json.loads(json.dumps(encode_json_rows(table)))
        for row, record in zip(table.rows, records):
            for col in table.schema:
                decoded = decode_json_value(record.get(col.id), col)
                if col.id == table.primary_key:
                    assert decoded == Value.text(row.id)
                elif col.id == table.parent_key:
                    assert decoded == Value.from_python(row.parent_id)
                else:
                    assert decoded == row.get(col.id)
