"""Schema document serialization."""

from __future__ import annotations

import json

import yaml

from .schema_nodes import Schema

OUTPUT_FORMATS = ("json", "yaml")


class SchemaEncodingError(Exception):
    """Raised when a schema document cannot be serialized."""


def encode_schema(schema: Schema, output_format: str = "json") -> str:
    """Serialize a schema document, keeping property declaration order."""
    document = schema.to_dict()
    if output_format == "json":
        try:
            return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as exc:
            raise SchemaEncodingError(f"Schema is not JSON serializable: {exc}") from exc
    if output_format == "yaml":
        try:
            return yaml.safe_dump(
                document, sort_keys=False, allow_unicode=True, default_flow_style=False
            )
        except yaml.YAMLError as exc:
            raise SchemaEncodingError(f"Schema is not YAML serializable: {exc}") from exc
    raise SchemaEncodingError(
        f"Unsupported output format: {output_format} (expected one of {', '.join(OUTPUT_FORMATS)})"
    )
