"""Schema document entities."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

SCHEMA_VERSION = "http://json-schema.org/draft-04/schema#"
DEFINITIONS_PREFIX = "#/definitions/"

# (attribute, JSON Schema keyword) rendered ahead of the nested object and array keywords.
_LEADING_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("version", "$schema"),
    ("ref", "$ref"),
    ("type", "type"),
    ("format", "format"),
)

_TRAILING_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("description", "description"),
    ("enum", "enum"),
    ("default", "default"),
    ("examples", "examples"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("multiple_of", "multipleOf"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("exclusive_minimum", "exclusiveMinimum"),
    ("exclusive_maximum", "exclusiveMaximum"),
    ("min_items", "minItems"),
    ("max_items", "maxItems"),
    ("unique_items", "uniqueItems"),
    ("media", "media"),
)

_KEYWORD_ATTRIBUTES = {
    keyword: attribute for attribute, keyword in (*_LEADING_KEYWORDS, *_TRAILING_KEYWORDS)
}


@dataclass
class TypeNode:  # pylint: disable=too-many-instance-attributes
    """A single JSON Schema node.

    Object nodes carry ``properties``/``required``/``additional_properties``,
    array nodes carry ``items`` and reference nodes carry ``ref``. Unset
    keywords stay ``None`` and are omitted when rendered.
    """

    type: str | None = None
    format: str | None = None
    ref: str | None = None
    items: TypeNode | None = None
    properties: dict[str, TypeNode] | None = None
    required: list[str] | None = None
    additional_properties: bool | None = None
    pattern_properties: dict[str, TypeNode] | None = None
    one_of: list[TypeNode] | None = None
    enum: list[Any] | None = None
    title: str | None = None
    description: str | None = None
    default: Any = None
    examples: list[Any] | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    multiple_of: int | float | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: bool | None = None
    exclusive_maximum: bool | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool | None = None
    media: dict[str, str] | None = None
    version: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    def copy(self) -> TypeNode:
        """Return an independent deep copy of the node."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Render the node as JSON Schema keywords in a stable order."""
        rendered: dict[str, Any] = {}
        self._render_keywords(rendered, _LEADING_KEYWORDS)
        if self.one_of is not None:
            rendered["oneOf"] = [option.to_dict() for option in self.one_of]
        if self.items is not None:
            rendered["items"] = self.items.to_dict()
        if self.properties is not None:
            rendered["properties"] = {
                name: node.to_dict() for name, node in self.properties.items()
            }
        if self.pattern_properties is not None:
            rendered["patternProperties"] = {
                pattern: node.to_dict() for pattern, node in self.pattern_properties.items()
            }
        if self.additional_properties is not None:
            rendered["additionalProperties"] = self.additional_properties
        if self.required:
            rendered["required"] = list(self.required)
        self._render_keywords(rendered, _TRAILING_KEYWORDS)
        for key, value in self.extras.items():
            rendered.setdefault(key, copy.deepcopy(value))
        return rendered

    def _render_keywords(
        self, rendered: dict[str, Any], keywords: tuple[tuple[str, str], ...]
    ) -> None:
        for attribute, keyword in keywords:
            value = getattr(self, attribute)
            if value is None:
                continue
            if isinstance(value, list) and not value:
                continue
            rendered[keyword] = copy.deepcopy(value)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> TypeNode:
        """Parse a rendered JSON Schema mapping back into a node.

        Keywords without a dedicated attribute are kept in ``extras``.
        """
        if not isinstance(payload, Mapping):
            raise TypeError(f"Schema nodes must be mappings, got {type(payload).__name__}.")
        node = cls()
        for key, value in payload.items():
            if key == "items" and isinstance(value, Mapping):
                node.items = cls.from_dict(value)
            elif key == "properties":
                node.properties = {name: cls.from_dict(child) for name, child in value.items()}
            elif key == "patternProperties":
                node.pattern_properties = {
                    pattern: cls.from_dict(child) for pattern, child in value.items()
                }
            elif key == "oneOf":
                node.one_of = [cls.from_dict(option) for option in value]
            elif key == "required":
                node.required = list(value)
            elif key == "additionalProperties" and isinstance(value, bool):
                node.additional_properties = value
            elif key in _KEYWORD_ATTRIBUTES:
                setattr(node, _KEYWORD_ATTRIBUTES[key], copy.deepcopy(value))
            else:
                node.extras[key] = copy.deepcopy(value)
        return node


def reference_node(name: str) -> TypeNode:
    """Build a node pointing at a shared definition."""
    return TypeNode(ref=f"{DEFINITIONS_PREFIX}{name}")


@dataclass(frozen=True)
class Schema:
    """Top-level schema document: a root node plus named definitions."""

    root: TypeNode
    definitions: dict[str, TypeNode] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"$schema": SCHEMA_VERSION}
        root = self.root.to_dict()
        root.pop("$schema", None)
        rendered.update(root)
        if self.definitions:
            rendered["definitions"] = {
                name: node.to_dict() for name, node in self.definitions.items()
            }
        return rendered

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Schema:
        if not isinstance(payload, Mapping):
            raise TypeError("Schema documents must be mappings.")
        root_payload = {key: value for key, value in payload.items() if key != "definitions"}
        definitions = {
            name: TypeNode.from_dict(node)
            for name, node in (payload.get("definitions") or {}).items()
        }
        return cls(root=TypeNode.from_dict(root_payload), definitions=definitions)
