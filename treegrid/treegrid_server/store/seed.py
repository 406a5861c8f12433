"""
Built-in seed tables.

Two demo tables populate the store at startup:
- employees ("HR"): an org chart, parent key "pid"
- inventory ("Warehouse"): categories and items, parent key "parent_sku"
"""

from __future__ import annotations

from typing import List

from .model import Row, Table, column


def employees_table() -> Table:
    return Table(
        id="employees",
        name="HR",
        primary_key="id",
        parent_key="pid",
        schema=(
            column("id", "ID", "string", 120, tree=True, pinned=True, editable=False, primary=True),
            column("pid", "Parent ID", "string", 120, editable=False),
            column("name", "Name", "string", 260, tree=True),
            column("position", "Position", "string", 200),
            column("salary", "Salary", "currency", 120),
            column("active", "Active", "bool", 80),
        ),
        rows=[
            Row.from_python("1", None, {
                "id": "1", "name": "Ivanov I.I.", "position": "CEO",
                "salary": 500000.0, "active": True,
            }),
            Row.from_python("2", "1", {
                "id": "2", "name": "Petrov P.P.", "position": "CTO",
                "salary": 400000.0, "active": True,
            }),
            Row.from_python("3", "2", {
                "id": "3", "name": "Sidorov S.S.", "position": "Senior Engineer",
                "salary": 300000.0, "active": True,
            }),
            Row.from_python("4", "2", {
                "id": "4", "name": "Kuznetsov K.K.", "position": "Junior Engineer",
                "salary": 80000.0, "active": False,
            }),
            Row.from_python("5", None, {
                "id": "5", "name": "Accounting", "position": "Department",
                "salary": 0.0, "active": True,
            }),
            Row.from_python("6", "5", {
                "id": "6", "name": "Smirnova A.A.", "position": "Chief Accountant",
                "salary": 250000.0, "active": True,
            }),
        ],
    )


def inventory_table() -> Table:
    return Table(
        id="inventory",
        name="Warehouse",
        primary_key="sku",
        parent_key="parent_sku",
        schema=(
            column("sku", "SKU", "string", 160, tree=True, pinned=True, editable=False, primary=True),
            column("parent_sku", "Parent SKU", "string", 160, editable=False),
            column("item_name", "Item", "string", 300),
            column("qty", "Quantity", "number", 100),
            column("price", "Unit price", "currency", 120),
            column("zone", "Zone", "string", 80),
        ),
        rows=[
            Row.from_python("ELEC-001", None, {
                "sku": "ELEC-001", "item_name": "Electronics",
                "qty": 0, "price": 0.0, "zone": "A",
            }),
            Row.from_python("CPU-INT-9", "ELEC-001", {
                "sku": "CPU-INT-9", "item_name": "Intel Core i9",
                "qty": 45, "price": 500.0, "zone": "A1",
            }),
            Row.from_python("GPU-NV-40", "ELEC-001", {
                "sku": "GPU-NV-40", "item_name": "Nvidia RTX 4090",
                "qty": 12, "price": 1800.0, "zone": "A2",
            }),
            Row.from_python("FURN-001", None, {
                "sku": "FURN-001", "item_name": "Furniture",
                "qty": 0, "price": 0.0, "zone": "B",
            }),
            Row.from_python("CH-OFF-B", "FURN-001", {
                "sku": "CH-OFF-B", "item_name": "Office Chair",
                "qty": 150, "price": 120.0, "zone": "B5",
            }),
        ],
    )


def seed_tables() -> List[Table]:
    """Fresh copies of every seed table, in listing order."""
    return [employees_table(), inventory_table()]
