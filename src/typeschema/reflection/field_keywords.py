"""Applies field directives to the schema node of a property."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from typeschema.schema_model import TypeNode
from typeschema.tag_parsing import DirectiveSet, parse_number

from .field_descriptors import FieldDescriptor

_DROPPED = object()


def apply_field_keywords(node: TypeNode, descriptor: FieldDescriptor) -> TypeNode:
    """Decorate ``node`` in place with the keywords carried by the field tags."""
    directives = descriptor.directives
    if descriptor.description:
        node.description = descriptor.description
    _apply_generic_keywords(node, directives)

    if node.type == "string":
        _apply_string_keywords(node, directives)
    elif node.type in ("integer", "number"):
        _apply_numeric_keywords(node, directives)
    elif node.type == "array":
        _apply_array_keywords(node, directives)
    elif node.type == "boolean":
        _apply_value_keywords(node, directives)

    if descriptor.enum_values:
        node.enum = unique_values([*(node.enum or []), *descriptor.enum_values])
    return node


def convert_value(raw: str, node_type: str | None) -> Any:
    """Convert a raw directive value to the JSON type of the node, or ``_DROPPED``."""
    if node_type == "integer":
        try:
            return int(raw)
        except ValueError:
            return _DROPPED
    if node_type == "number":
        number = parse_number(raw)
        return _DROPPED if number is None else number
    if node_type == "boolean":
        if raw in ("true", "false"):
            return raw == "true"
        return _DROPPED
    return raw


def unique_values(values: Iterable[Any]) -> list[Any]:
    """Deduplicate JSON values preserving first-seen order (``1`` and ``True`` stay distinct)."""
    seen: set[str] = set()
    unique: list[Any] = []
    for value in values:
        key = json.dumps(value, sort_keys=True, default=str)
        if key in seen:
            continue
        seen.add(key)
        unique.append(value)
    return unique


def _converted(raw_values: Iterable[str], node_type: str | None) -> list[Any]:
    converted = (convert_value(raw, node_type) for raw in raw_values)
    return unique_values(value for value in converted if value is not _DROPPED)


def _apply_generic_keywords(node: TypeNode, directives: DirectiveSet) -> None:
    if directives.type and not node.is_reference:
        node.type = directives.type
    if directives.title:
        node.title = directives.title
    if directives.description:
        node.description = directives.description
    if directives.enum:
        enum_values = _converted(directives.enum, node.type)
        if enum_values:
            node.enum = unique_values([*(node.enum or []), *enum_values])


def _apply_value_keywords(node: TypeNode, directives: DirectiveSet) -> None:
    if directives.default is not None:
        default = convert_value(directives.default, node.type)
        if default is not _DROPPED:
            node.default = default
    if directives.examples:
        examples = _converted(directives.examples, node.type)
        if examples:
            node.examples = unique_values([*(node.examples or []), *examples])


def _apply_string_keywords(node: TypeNode, directives: DirectiveSet) -> None:
    if directives.min_length is not None:
        node.min_length = directives.min_length
    if directives.max_length is not None:
        node.max_length = directives.max_length
    if directives.pattern:
        node.pattern = directives.pattern
    if directives.format:
        node.format = directives.format
    _apply_value_keywords(node, directives)


def _apply_numeric_keywords(node: TypeNode, directives: DirectiveSet) -> None:
    if directives.multiple_of is not None:
        node.multiple_of = directives.multiple_of
    if directives.minimum is not None:
        node.minimum = directives.minimum
    if directives.maximum is not None:
        node.maximum = directives.maximum
    if directives.exclusive_minimum:
        node.exclusive_minimum = True
    if directives.exclusive_maximum:
        node.exclusive_maximum = True
    _apply_value_keywords(node, directives)


def _apply_array_keywords(node: TypeNode, directives: DirectiveSet) -> None:
    if directives.min_items is not None:
        node.min_items = directives.min_items
    if directives.max_items is not None:
        node.max_items = directives.max_items
    if directives.unique_items:
        node.unique_items = True
