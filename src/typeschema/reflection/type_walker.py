"""Recursive type-to-schema walker."""

from __future__ import annotations

import collections
import collections.abc
import logging
from collections.abc import Callable, Mapping
from typing import Any, NewType, get_args, get_origin

from typeschema.primitive_mapping import is_enum_type, map_enum, map_primitive
from typeschema.schema_model import TypeNode, reference_node

from .definition_registry import DefinitionRegistry, definition_name
from .field_descriptors import (
    FieldDescriptor,
    FieldOptions,
    is_record_type,
    is_union,
    record_fields,
    strip_annotated,
    unwrap_optional,
)
from .field_keywords import apply_field_keywords, unique_values
from .reflection_errors import ReflectionError, type_label

_LOGGER = logging.getLogger("typeschema.reflection")

TypeMapper = Callable[[Any], "TypeNode | Mapping[str, Any] | None"]

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)
_MAPPING_ORIGINS = (
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


class TypeWalker:
    """Walks one type graph for a single reflection call.

    The walker owns the visiting set used to break cycles; the registry it is
    given holds the definitions for the same call.
    """

    def __init__(
        self,
        registry: DefinitionRegistry,
        *,
        field_options: FieldOptions,
        allow_additional_properties: bool = False,
        ignored_types: tuple[Any, ...] = (),
        type_mapper: TypeMapper | None = None,
    ) -> None:
        self._registry = registry
        self._field_options = field_options
        self._allow_additional_properties = allow_additional_properties
        self._ignored_types = ignored_types
        self._type_mapper = type_mapper
        self._visiting: set[Any] = set()

    def walk(self, tp: Any) -> TypeNode:
        """Return the schema node describing ``tp``."""
        tp, _ = strip_annotated(tp)
        mapped = self._mapped_node(tp)
        if mapped is not None:
            return mapped

        if isinstance(tp, NewType):
            return self.walk(tp.__supertype__)
        if tp is Any or tp is object:
            return TypeNode()
        if is_union(tp):
            return self._walk_union(get_args(tp))

        origin = get_origin(tp)
        if origin is not None:
            return self._walk_generic(tp, origin, get_args(tp))

        if is_enum_type(tp):
            return map_enum(tp)
        primitive = map_primitive(tp)
        if primitive is not None:
            return primitive
        if is_record_type(tp):
            return self._walk_record_reference(tp)
        if isinstance(tp, type) and issubclass(tp, _MAPPING_ORIGINS):
            return self._mapping_node(Any)
        if isinstance(tp, type) and issubclass(tp, _SEQUENCE_ORIGINS):
            return TypeNode(type="array", items=TypeNode())

        raise ReflectionError(f"Cannot reflect unsupported type {type_label(tp)}", tp)

    def walk_record_inline(self, record_type: type) -> TypeNode:
        """Return the object node of a record without registering a definition."""
        return self._walk_record(record_type)

    def is_ignored(self, tp: Any) -> bool:
        """True when ``tp`` is, or is built from, one of the ignored types."""
        if not self._ignored_types:
            return False
        tp, _ = strip_annotated(tp)
        if any(tp is ignored for ignored in self._ignored_types):
            return True
        return any(self.is_ignored(arg) for arg in get_args(tp) if arg is not Ellipsis)

    def _mapped_node(self, tp: Any) -> TypeNode | None:
        if self._type_mapper is None:
            return None
        fragment = self._type_mapper(tp)
        if fragment is None:
            return None
        if isinstance(fragment, TypeNode):
            return fragment.copy()
        return TypeNode.from_dict(fragment)

    def _walk_union(self, members: tuple[Any, ...]) -> TypeNode:
        present = [member for member in members if member is not type(None)]
        if not present:
            return TypeNode(type="null")
        return self._combine([self.walk(member) for member in present])

    def _walk_generic(self, tp: Any, origin: Any, args: tuple[Any, ...]) -> TypeNode:
        if isinstance(origin, type) and issubclass(origin, _MAPPING_ORIGINS):
            return self._mapping_node(args[1] if len(args) == 2 else Any)
        if isinstance(origin, type) and issubclass(origin, _SEQUENCE_ORIGINS):
            if origin is tuple and args and args[-1] is not Ellipsis:
                item = self._combine([self.walk(arg) for arg in args])
            else:
                item = self.walk(args[0]) if args else TypeNode()
            return TypeNode(type="array", items=item)
        if is_record_type(origin):
            return self.walk(origin)
        raise ReflectionError(f"Cannot reflect unsupported type {type_label(tp)}", tp)

    def _mapping_node(self, value_type: Any) -> TypeNode:
        return TypeNode(type="object", pattern_properties={".*": self.walk(value_type)})

    @staticmethod
    def _combine(nodes: list[TypeNode]) -> TypeNode:
        rendered = unique_values(node.to_dict() for node in nodes)
        if len(rendered) == 1:
            return nodes[0]
        return TypeNode(one_of=[TypeNode.from_dict(option) for option in rendered])

    def _walk_record_reference(self, record_type: type) -> TypeNode:
        if record_type in self._visiting:
            return reference_node(definition_name(record_type))
        reference = self._registry.lookup(record_type)
        if reference is not None:
            return reference
        if not self._registry.reserve(record_type):
            return reference_node(definition_name(record_type))

        self._visiting.add(record_type)
        try:
            node = self._walk_record(record_type)
        finally:
            self._visiting.discard(record_type)
        return self._registry.register(record_type, node)

    def _walk_record(self, record_type: type) -> TypeNode:
        node = TypeNode(type="object", properties={}, required=[])
        if not self._allow_additional_properties:
            node.additional_properties = False
        for descriptor in self._visible_fields(record_type):
            property_node = apply_field_keywords(self.walk(descriptor.field_type), descriptor)
            node.properties[descriptor.external_name] = property_node
            if descriptor.required:
                node.required.append(descriptor.external_name)
        return node

    def _visible_fields(self, record_type: type) -> list[FieldDescriptor]:
        collected: list[FieldDescriptor] = []
        self._collect_fields(record_type, collected, depth=0, embedding=(record_type,))

        # Shallower fields shadow embedded ones of the same name; the first declared wins ties.
        winners: dict[str, FieldDescriptor] = {}
        for descriptor in collected:
            current = winners.get(descriptor.external_name)
            if current is None or descriptor.depth < current.depth:
                winners[descriptor.external_name] = descriptor
        return [
            descriptor for descriptor in collected if winners[descriptor.external_name] is descriptor
        ]

    def _collect_fields(
        self,
        record_type: type,
        collected: list[FieldDescriptor],
        *,
        depth: int,
        embedding: tuple[type, ...],
    ) -> None:
        for descriptor in record_fields(record_type, self._field_options, depth=depth):
            # An embedding field's own visibility does not hide its promoted fields.
            if descriptor.directives.excluded if descriptor.embedded else descriptor.skip:
                continue
            if self.is_ignored(descriptor.field_type):
                _LOGGER.debug(
                    "Skipping field %s.%s: ignored type", record_type.__name__, descriptor.name
                )
                continue
            if descriptor.embedded:
                embedded_type = unwrap_optional(descriptor.field_type)
                if is_record_type(embedded_type) and embedded_type not in embedding:
                    self._collect_fields(
                        embedded_type,
                        collected,
                        depth=depth + 1,
                        embedding=(*embedding, embedded_type),
                    )
                else:
                    _LOGGER.debug(
                        "Embedded field %s.%s contributes no properties",
                        record_type.__name__,
                        descriptor.name,
                    )
                continue
            collected.append(descriptor)
