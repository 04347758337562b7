"""Schema model exports."""

from .schema_encoding import OUTPUT_FORMATS, SchemaEncodingError, encode_schema
from .schema_nodes import (
    DEFINITIONS_PREFIX,
    SCHEMA_VERSION,
    Schema,
    TypeNode,
    reference_node,
)

__all__ = [
    "DEFINITIONS_PREFIX",
    "OUTPUT_FORMATS",
    "SCHEMA_VERSION",
    "Schema",
    "SchemaEncodingError",
    "TypeNode",
    "encode_schema",
    "reference_node",
]
