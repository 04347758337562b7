"""Reflects dataclass and TypedDict types into JSON Schema documents."""

import logging

from .reflection import ReflectionError, Reflector
from .schema_model import Schema, SchemaEncodingError, TypeNode, encode_schema
from .tag_parsing import DirectiveError, field_tags, schema_field

logging.getLogger(__name__).addHandler(logging.NullHandler())


def reflect(value, **options) -> Schema:
    """Reflect ``value`` with a one-off :class:`Reflector` built from ``options``."""
    return Reflector(**options).reflect(value)


__all__ = [
    "DirectiveError",
    "ReflectionError",
    "Reflector",
    "Schema",
    "SchemaEncodingError",
    "TypeNode",
    "encode_schema",
    "field_tags",
    "reflect",
    "schema_field",
]
