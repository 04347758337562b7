"""Reflection exports."""

from .definition_registry import DefinitionRegistry, definition_name
from .field_descriptors import (
    FieldDescriptor,
    FieldOptions,
    is_record_type,
    record_fields,
    strip_annotated,
    unwrap_optional,
)
from .reflection_errors import ReflectionError, type_label
from .reflector import Reflector
from .type_walker import TypeMapper, TypeWalker

__all__ = [
    "DefinitionRegistry",
    "FieldDescriptor",
    "FieldOptions",
    "ReflectionError",
    "Reflector",
    "TypeMapper",
    "TypeWalker",
    "definition_name",
    "is_record_type",
    "record_fields",
    "strip_annotated",
    "type_label",
    "unwrap_optional",
]
