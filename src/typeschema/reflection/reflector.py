"""Reflection entry point."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from typeschema.schema_model import Schema

from .definition_registry import DefinitionRegistry
from .field_descriptors import FieldOptions, is_record_type, unwrap_optional
from .type_walker import TypeMapper, TypeWalker

_LOGGER = logging.getLogger("typeschema.reflection")


@dataclass(frozen=True)
class Reflector:  # pylint: disable=too-many-instance-attributes
    """Builds JSON Schema documents from dataclass and TypedDict types.

    A reflector is read-only configuration; every :meth:`reflect` call uses its
    own definitions registry and visiting set, so concurrent calls are safe as
    long as ``type_mapper`` has no side effects.

    Attributes:
      allow_additional_properties: Omit ``additionalProperties: false`` on record objects.
      required_from_jsonschema_tags: Require only fields tagged ``required``.
      expanded_struct: Inline the root record's fields instead of referencing a definition.
      ignored_types: Types whose fields are dropped wherever they occur.
      type_mapper: Callable returning a replacement node (or mapping) for a type, or ``None``.
      prefer_yaml_schema: Read external names from the ``yaml`` tag ahead of ``json``.
      strict_tags: Raise on malformed directive values instead of dropping them.
    """

    allow_additional_properties: bool = False
    required_from_jsonschema_tags: bool = False
    expanded_struct: bool = False
    ignored_types: tuple[Any, ...] = ()
    type_mapper: TypeMapper | None = None
    prefer_yaml_schema: bool = False
    strict_tags: bool = False

    def reflect(self, value: Any) -> Schema:
        """Reflect a type, or the type of a dataclass instance."""
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self.reflect_from_type(type(value))
        return self.reflect_from_type(value)

    def reflect_from_type(self, tp: Any) -> Schema:
        """Reflect ``tp`` into a schema document.

        Raises:
          ReflectionError: If ``tp`` (or a type it reaches) has no schema shape.
        """
        registry = DefinitionRegistry()
        walker = TypeWalker(
            registry,
            field_options=FieldOptions(
                required_from_jsonschema_tags=self.required_from_jsonschema_tags,
                prefer_yaml_schema=self.prefer_yaml_schema,
                strict_tags=self.strict_tags,
            ),
            allow_additional_properties=self.allow_additional_properties,
            ignored_types=_normalize_ignored_types(self.ignored_types),
            type_mapper=self.type_mapper,
        )

        root_type = unwrap_optional(tp)
        expand_root = (
            self.expanded_struct
            and is_record_type(root_type)
            and (self.type_mapper is None or self.type_mapper(root_type) is None)
        )
        root = walker.walk_record_inline(root_type) if expand_root else walker.walk(tp)

        definitions = registry.definitions
        _LOGGER.debug("Reflected %r into %d definitions", tp, len(definitions))
        return Schema(root=root, definitions=definitions)


def _normalize_ignored_types(ignored_types: tuple[Any, ...]) -> tuple[Any, ...]:
    # Instances stand for their type.
    return tuple(
        type(item) if dataclasses.is_dataclass(item) and not isinstance(item, type) else item
        for item in ignored_types
    )
