"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from typeschema.reflection import Reflector, TypeMapper
from typeschema.schema_model import TypeNode


@dataclass(frozen=True)
class ReflectorSettings:  # pylint: disable=too-many-instance-attributes
    """Normalized reflector options loaded from a configuration file."""

    path: Path | None = None
    allow_additional_properties: bool = False
    required_from_jsonschema_tags: bool = False
    expanded_struct: bool = False
    prefer_yaml_schema: bool = False
    strict_tags: bool = False
    ignored_types: tuple[Any, ...] = ()
    type_mappings: Mapping[Any, Mapping[str, Any]] = field(default_factory=dict)

    def build_reflector(self, **overrides: Any) -> Reflector:
        """Create a reflector; keyword overrides replace configured values."""
        options: dict[str, Any] = {
            "allow_additional_properties": self.allow_additional_properties,
            "required_from_jsonschema_tags": self.required_from_jsonschema_tags,
            "expanded_struct": self.expanded_struct,
            "prefer_yaml_schema": self.prefer_yaml_schema,
            "strict_tags": self.strict_tags,
            "ignored_types": self.ignored_types,
            "type_mapper": self._type_mapper() if self.type_mappings else None,
        }
        options.update(overrides)
        return Reflector(**options)

    def _type_mapper(self) -> TypeMapper:
        fragments = {tp: TypeNode.from_dict(fragment) for tp, fragment in self.type_mappings.items()}

        def map_type(tp: Any) -> TypeNode | None:
            for mapped_type, node in fragments.items():
                if tp is mapped_type:
                    return node.copy()
            return None

        return map_type
