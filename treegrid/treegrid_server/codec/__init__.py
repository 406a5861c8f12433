"""
Wire codecs for TreeGrid.

- coercion: the single wire-value -> cell-value policy
- json_codec: JSON/HTTP representation
- proto_codec: protobuf/gRPC representation

Invariants:
    - Both codecs decode through coercion.coerce_for_column
    - Encoders branch on every ValueKind
"""

from .coercion import MISSING, WireShape, WireValue, coerce_for_column
from .json_codec import (
    decode_json_value,
    encode_json_rows,
    encode_json_schema,
    encode_json_table_list,
    encode_json_value,
    parse_json_body,
    parse_update_body,
)
from .proto_codec import (
    decode_proto_value,
    encode_proto_value,
    fill_proto_rows,
    fill_proto_schema,
)

__all__ = [
    # Policy
    "WireShape",
    "WireValue",
    "MISSING",
    "coerce_for_column",
    # JSON
    "decode_json_value",
    "encode_json_value",
    "encode_json_schema",
    "encode_json_rows",
    "encode_json_table_list",
    "parse_json_body",
    "parse_update_body",
    # Protobuf
    "decode_proto_value",
    "encode_proto_value",
    "fill_proto_schema",
    "fill_proto_rows",
]
