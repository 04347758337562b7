"""Tag parsing entities."""

from __future__ import annotations

from dataclasses import dataclass, field

EXCLUSION_SENTINEL = "-"

# Tag channels looked up in a field's metadata mapping.
JSON_TAG = "json"
YAML_TAG = "yaml"
JSONSCHEMA_TAG = "jsonschema"
DESCRIPTION_TAG = "jsonschema_description"
ENUM_TAG = "jsonschema_enum"
EMBEDDED_TAG = "embedded"


@dataclass(frozen=True)
class NameTag:
    """Parsed external-name annotation (``json`` or ``yaml`` channel)."""

    name: str = ""
    options: tuple[str, ...] = ()

    @property
    def excluded(self) -> bool:
        return self.name == EXCLUSION_SENTINEL

    @property
    def omitempty(self) -> bool:
        return "omitempty" in self.options


@dataclass(frozen=True)
class DirectiveSet:  # pylint: disable=too-many-instance-attributes
    """Constraint directives parsed from a ``jsonschema`` tag.

    Numeric and boolean values are already converted; ``enum``, ``examples``
    and ``default`` stay raw strings until the target node type is known.
    """

    excluded: bool = False
    required: bool = False
    omitempty: bool = False
    type: str | None = None
    title: str | None = None
    description: str | None = None
    format: str | None = None
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    multiple_of: int | float | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False
    default: str | None = None
    enum: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    ignored_keys: tuple[str, ...] = field(default=(), compare=False)
