"""Helpers for attaching tag channels to record fields."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any

from .directive_models import (
    DESCRIPTION_TAG,
    EMBEDDED_TAG,
    ENUM_TAG,
    JSON_TAG,
    JSONSCHEMA_TAG,
    YAML_TAG,
)


class FieldTags(Mapping[str, Any]):
    """Immutable, hashable tag mapping, safe to nest inside ``Annotated`` and unions."""

    def __init__(self, tags: Mapping[str, Any]) -> None:
        self._tags = dict(tags)

    def __getitem__(self, key: str) -> Any:
        return self._tags[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __hash__(self) -> int:
        return hash(frozenset(self._tags.items()))

    def __repr__(self) -> str:
        return f"FieldTags({self._tags!r})"


def field_tags(
    *,
    json: str | None = None,
    yaml: str | None = None,
    jsonschema: str | None = None,
    description: str | None = None,
    enum: str | None = None,
    embedded: bool = False,
) -> FieldTags:
    """Build a tag mapping usable as dataclass metadata or inside ``Annotated``."""
    tags: dict[str, Any] = {}
    for key, value in (
        (JSON_TAG, json),
        (YAML_TAG, yaml),
        (JSONSCHEMA_TAG, jsonschema),
        (DESCRIPTION_TAG, description),
        (ENUM_TAG, enum),
    ):
        if value is not None:
            tags[key] = value
    if embedded:
        tags[EMBEDDED_TAG] = True
    return FieldTags(tags)


def schema_field(
    *,
    json: str | None = None,
    yaml: str | None = None,
    jsonschema: str | None = None,
    description: str | None = None,
    enum: str | None = None,
    embedded: bool = False,
    **field_kwargs: Any,
) -> Any:
    """Return a ``dataclasses.field`` carrying schema tags in its metadata.

    Example::

        @dataclass
        class User:
            name: str = schema_field(json="name", jsonschema="required,minLength=1")
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata.update(
        field_tags(
            json=json,
            yaml=yaml,
            jsonschema=jsonschema,
            description=description,
            enum=enum,
            embedded=embedded,
        )
    )
    return dataclasses.field(metadata=metadata, **field_kwargs)
