"""
Unit tests for the table model.

Tests cover:
- ColumnDef creation and validation
- Effective editability of primary columns
- Table validation of keys, rows and cells
- Snapshot copies
"""

import pytest

from treegrid.treegrid_server.store.model import ColumnType, Row, Table, column
from treegrid.treegrid_server.store.seed import employees_table, inventory_table, seed_tables
from treegrid.treegrid_server.store.values import NULL, Value


def _flat_table(**overrides):
    params = dict(
        id="t",
        name="T",
        primary_key="id",
        schema=(
            column("id", "ID", "string", primary=True, editable=False),
            column("n", "N", "number"),
        ),
        rows=[Row.from_python("a", None, {"id": "a", "n": 1})],
    )
    params.update(overrides)
    return Table(**params)


class TestColumnDef:
    """Tests for ColumnDef."""

    def test_create_column(self):
        """Column factory maps flags and parses the type."""
        col = column("salary", "Salary", "currency", 120)
        assert col.type == ColumnType.CURRENCY
        assert col.width == 120
        assert col.is_editable is True
        assert col.is_primary is False

    def test_invalid_type_raises(self):
        with pytest.raises(ValueError, match="Invalid column type 'date'"):
            column("d", "Date", "date")

    def test_empty_id_raises(self):
        with pytest.raises(ValueError, match="Column id cannot be empty"):
            column("", "X", "string")

    def test_negative_width_raises(self):
        with pytest.raises(ValueError, match="width must be >= 0"):
            column("x", "X", "string", -1)

    def test_primary_never_effectively_editable(self):
        """A primary column with a stored editable flag still reads as read-only."""
        col = column("id", "ID", "string", primary=True, editable=True)
        assert col.is_editable is True
        assert col.effective_editable is False

    def test_plain_column_effective_editable_follows_flag(self):
        assert column("a", "A", "string").effective_editable is True
        assert column("a", "A", "string", editable=False).effective_editable is False


class TestTableValidation:
    """Tests for Table construction checks."""

    def test_valid_flat_table(self):
        table = _flat_table()
        assert table.has_tree is False
        assert table.find_column("n").type == ColumnType.NUMBER
        assert table.find_column("missing") is None

    def test_duplicate_column_raises(self):
        with pytest.raises(ValueError, match="Duplicate column id 'id'"):
            _flat_table(schema=(
                column("id", "ID", "string", primary=True),
                column("id", "Again", "string"),
            ))

    def test_unknown_primary_key_raises(self):
        with pytest.raises(ValueError, match="primary_key 'sku'"):
            _flat_table(primary_key="sku")

    def test_non_string_primary_key_raises(self):
        with pytest.raises(ValueError, match="must be a string column"):
            _flat_table(primary_key="n")

    def test_unknown_parent_key_raises(self):
        with pytest.raises(ValueError, match="parent_key 'pid'"):
            _flat_table(parent_key="pid")

    def test_duplicate_row_raises(self):
        with pytest.raises(ValueError, match="Duplicate row id 'a'"):
            _flat_table(rows=[Row("a"), Row("a")])

    def test_unknown_cell_raises(self):
        with pytest.raises(ValueError, match="unknown columns"):
            _flat_table(rows=[Row.from_python("a", None, {"zzz": 1})])


class TestRowsAndSnapshots:
    """Tests for row lookup and Table.copy."""

    def test_missing_cell_reads_null(self):
        row = Row("a")
        assert row.get("anything") is NULL

    def test_find_row(self):
        table = _flat_table()
        assert table.find_row("a").get("n") == Value.integer(1)
        assert table.find_row("b") is None

    def test_copy_is_independent(self):
        """Mutating a snapshot leaves the original untouched."""
        table = _flat_table()
        snapshot = table.copy()
        snapshot.find_row("a").cells["n"] = Value.integer(99)
        assert table.find_row("a").get("n") == Value.integer(1)
        assert snapshot.schema is table.schema


class TestSeedTables:
    """Tests for the built-in seed data."""

    def test_listing_order(self):
        assert [(t.id, t.name) for t in seed_tables()] == [
            ("employees", "HR"),
            ("inventory", "Warehouse"),
        ]

    def test_employees_hierarchy(self):
        table = employees_table()
        assert table.primary_key == "id"
        assert table.parent_key == "pid"
        assert table.find_row("1").parent_id is None
        assert table.find_row("2").parent_id == "1"
        assert table.find_row("1").get("salary") == Value.real(500000.0)

    def test_inventory_rows_keyed_by_sku(self):
        table = inventory_table()
        assert table.find_row("CPU-INT-9").parent_id == "ELEC-001"
        assert table.find_row("CPU-INT-9").get("qty") == Value.integer(45)

    def test_parents_exist(self):
        """Every parent_id refers to a row of the same table."""
        for table in seed_tables():
            ids = {row.id for row in table.rows}
            for row in table.rows:
                assert row.parent_id is None or row.parent_id in ids

    def test_primary_columns_read_only(self):
        for table in seed_tables():
            pk = table.find_column(table.primary_key)
            assert pk.is_primary
            assert not pk.effective_editable

    def test_each_call_returns_fresh_tables(self):
        first, second = employees_table(), employees_table()
        first.find_row("1").cells["name"] = Value.text("changed")
        assert second.find_row("1").get("name") == Value.text("Ivanov I.I.")
