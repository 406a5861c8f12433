"""
Table data model for TreeGrid.

This module defines the schema and data containers:
- ColumnType: Declared type of a column
- ColumnDef: Static metadata for one column
- Row: One record keyed by its primary identifier
- Table: Ordered schema plus ordered rows

Invariants:
    - Column ids are unique within a table; column order is display order
    - primary_key names a String column; parent_key is empty or names a String column
    - Row ids are unique within a table
    - Every cell key names a column of the owning table
    - A primary column is never editable, whatever its stored is_editable flag

How to change safely:
    - Never cache effective_editable; derive it from the stored flags
    - Rows are looked up through Table.find_row; keep the index in sync
      if row insertion is ever added

Example:
    >>> employees = Table(
    ...     id="employees",
    ...     name="HR",
    ...     primary_key="id",
    ...     schema=(
    ...         column("id", "ID", "string", primary=True, editable=False),
    ...         column("salary", "Salary", "currency"),
    ...     ),
    ...     rows=[Row.from_python("1", None, {"id": "1", "salary": 500000.0})],
    ... )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .values import NULL, Value


class ColumnType(Enum):
    """Declared type of a column."""

    STRING = "string"
    NUMBER = "number"
    CURRENCY = "currency"
    BOOL = "bool"

    @classmethod
    def from_str(cls, value: str) -> ColumnType:
        """Convert string representation to ColumnType.

        Raises:
            ValueError: If value is not a valid column type
        """
        for kind in cls:
            if kind.value == value:
                return kind
        valid = [k.value for k in cls]
        raise ValueError(f"Invalid column type '{value}'. Valid types: {valid}")


@dataclass(frozen=True)
class ColumnDef:
    """Definition of a single column.

    Attributes:
        id: Identifier, unique within the table
        title: Display title
        type: Declared value type
        width: Display width in pixels
        is_tree: Whether the tree expander is drawn in this column
        is_pinned: Whether the column stays visible on horizontal scroll
        is_editable: Stored editable flag (see effective_editable)
        is_primary: Whether this column holds the row's primary key
    """

    id: str
    title: str
    type: ColumnType
    width: int = 120
    is_tree: bool = False
    is_pinned: bool = False
    is_editable: bool = True
    is_primary: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Column id cannot be empty")
        if not isinstance(self.type, ColumnType):
            raise ValueError(f"Column '{self.id}' has invalid type {self.type!r}")
        if self.width < 0:
            raise ValueError(f"Column '{self.id}' width must be >= 0, got {self.width}")

    @property
    def effective_editable(self) -> bool:
        """Editable flag as exposed to clients: primary columns never are."""
        return self.is_editable and not self.is_primary


def column(
    id: str,
    title: str,
    type: str,
    width: int = 120,
    *,
    tree: bool = False,
    pinned: bool = False,
    editable: bool = True,
    primary: bool = False,
) -> ColumnDef:
    """Convenience factory for ColumnDef.

    Args:
        id: Column identifier
        title: Display title
        type: Type name ("string", "number", "currency", "bool")
        width: Display width
        tree: Tree column flag
        pinned: Pinned flag
        editable: Stored editable flag
        primary: Primary key flag

    Returns:
        ColumnDef instance
    """
    return ColumnDef(
        id=id,
        title=title,
        type=ColumnType.from_str(type),
        width=width,
        is_tree=tree,
        is_pinned=pinned,
        is_editable=editable,
        is_primary=primary,
    )


@dataclass
class Row:
    """One data record.

    Attributes:
        id: Primary key value (authoritative for lookup)
        parent_id: Primary key of the parent row, None for roots
        cells: Column id to Value; missing entries read as null
    """

    id: str
    parent_id: Optional[str] = None
    cells: Dict[str, Value] = field(default_factory=dict)

    @classmethod
    def from_python(
        cls,
        id: str,
        parent_id: Optional[str],
        cells: Mapping[str, Any],
    ) -> Row:
        """Build a row from plain Python cell values."""
        return cls(
            id=id,
            parent_id=parent_id,
            cells={key: Value.from_python(val) for key, val in cells.items()},
        )

    def get(self, column_id: str) -> Value:
        return self.cells.get(column_id, NULL)

    def copy(self) -> Row:
        return Row(id=self.id, parent_id=self.parent_id, cells=dict(self.cells))


@dataclass
class Table:
    """A named schema plus its rows.

    Attributes:
        id: External handle, unique within the store
        name: Display name
        primary_key: Id of the primary key column
        parent_key: Id of the parent reference column, "" for flat tables
        schema: Ordered column definitions
        rows: Ordered rows
    """

    id: str
    name: str
    primary_key: str
    schema: Tuple[ColumnDef, ...]
    rows: List[Row] = field(default_factory=list)
    parent_key: str = ""
    _columns: Dict[str, ColumnDef] = field(init=False, repr=False, compare=False)
    _row_index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the table and build lookup indexes."""
        self.schema = tuple(self.schema)
        if not self.id:
            raise ValueError("Table id cannot be empty")

        self._columns = {}
        for col in self.schema:
            if col.id in self._columns:
                raise ValueError(f"Duplicate column id '{col.id}' in table '{self.id}'")
            self._columns[col.id] = col

        self._check_key_column("primary_key", self.primary_key)
        if self.parent_key:
            self._check_key_column("parent_key", self.parent_key)

        self._row_index = {}
        for position, row in enumerate(self.rows):
            if row.id in self._row_index:
                raise ValueError(f"Duplicate row id '{row.id}' in table '{self.id}'")
            unknown = set(row.cells) - set(self._columns)
            if unknown:
                raise ValueError(
                    f"Row '{row.id}' in table '{self.id}' has unknown columns: {sorted(unknown)}"
                )
            self._row_index[row.id] = position

    def _check_key_column(self, attr: str, column_id: str) -> None:
        col = self._columns.get(column_id)
        if col is None:
            raise ValueError(
                f"{attr} '{column_id}' of table '{self.id}' is not a column of its schema"
            )
        if col.type != ColumnType.STRING:
            raise ValueError(
                f"{attr} '{column_id}' of table '{self.id}' must be a string column"
            )

    @property
    def has_tree(self) -> bool:
        return bool(self.parent_key)

    def find_column(self, column_id: str) -> Optional[ColumnDef]:
        return self._columns.get(column_id)

    def find_row(self, row_id: str) -> Optional[Row]:
        position = self._row_index.get(row_id)
        if position is None:
            return None
        return self.rows[position]

    def copy(self) -> Table:
        """Snapshot of the table; rows and cell maps are copied, columns shared."""
        return replace(self, rows=[row.copy() for row in self.rows])
