"""
TreeGrid Server - schema-described tabular data served over JSON/HTTP and gRPC.

This package implements a small in-memory table server built on:
- Tables with an ordered, typed column schema (tree/pinned/editable/primary flags)
- Rows keyed by a primary identifier with an optional parent for tree display
- One typed cell value model shared by both wire protocols
- A single update operation that enforces read-only and primary-key invariants

Architecture:
    ┌─────────────┐     ┌──────────────┐
    │ HTTP client │────▶│ aiohttp app  │──┐
    └─────────────┘     └──────────────┘  │   ┌──────────────┐   ┌───────────┐
                                          ├──▶│ TableService │──▶│ DataStore │
    ┌─────────────┐     ┌──────────────┐  │   └──────────────┘   └───────────┘
    │ gRPC client │────▶│ grpc.aio     │──┘          │
    └─────────────┘     └──────────────┘             ▼
                                              codec (json / proto)
                                                     │
                                                     ▼
                                           coercion (shared policy)

Invariants:
    - Cell values are validated against the column type before any mutation
    - Primary key columns are never editable, on any path
    - Both protocols decode through the same coercion policy
    - The store is mutated only through DataStore.update_cell

How to change safely:
    - New column types need a coercion rule, a JSON name and a proto enum value
    - proto/tables.proto is the single wire contract for gRPC
    - HTTP endpoints should match gRPC semantics
"""

from ._version import __version__

__all__ = ["__version__"]
