"""Field-descriptor mapping from domain records to wire structures."""

from stamps_client.mapping.engine import (
    FieldDescriptor,
    carry,
    collection,
    each,
    each_wrapped,
    iso_date,
    nested,
    to_wire,
    wrap,
)
from stamps_client.mapping.wire import WireStructure, freeze

__all__ = [
    "FieldDescriptor",
    "WireStructure",
    "carry",
    "collection",
    "each",
    "each_wrapped",
    "freeze",
    "iso_date",
    "nested",
    "to_wire",
    "wrap",
]
