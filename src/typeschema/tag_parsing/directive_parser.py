"""Field tag parsing service."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from .directive_models import EXCLUSION_SENTINEL, DirectiveSet, NameTag

_LOGGER = logging.getLogger("typeschema.tags")

_BOOLEAN_KEYS = {
    "required": "required",
    "omitempty": "omitempty",
    "exclusiveMinimum": "exclusive_minimum",
    "exclusiveMaximum": "exclusive_maximum",
    "uniqueItems": "unique_items",
}
_INTEGER_KEYS = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "minItems": "min_items",
    "maxItems": "max_items",
}
_NUMBER_KEYS = {
    "minimum": "minimum",
    "maximum": "maximum",
    "multipleOf": "multiple_of",
}
_STRING_KEYS = {
    "type": "type",
    "title": "title",
    "description": "description",
    "format": "format",
    "pattern": "pattern",
    "default": "default",
}
_VALUE_KEYS = {*_INTEGER_KEYS, *_NUMBER_KEYS, *_STRING_KEYS}
_REPEATABLE_KEYS = {
    "enum": "enum",
    "example": "examples",
}


class DirectiveError(ValueError):
    """Raised for malformed directive values when strict parsing is enabled."""


def parse_directives(raw: str | None, *, strict: bool = False) -> DirectiveSet:
    """Parse a comma separated ``key`` / ``key=value`` directive string.

    Malformed values are dropped for the affected key only, unless ``strict``
    is set, in which case a :class:`DirectiveError` is raised.
    """
    if not raw:
        return DirectiveSet()

    tokens = raw.split(",")
    if tokens[0].strip() == EXCLUSION_SENTINEL:
        return DirectiveSet(excluded=True)

    values: dict[str, Any] = {}
    repeated: dict[str, list[str]] = {attribute: [] for attribute in _REPEATABLE_KEYS.values()}
    ignored: list[str] = []

    for token in tokens:
        key, has_value, value = token.partition("=")
        key = key.strip()
        if not key:
            continue
        if key in _BOOLEAN_KEYS:
            parsed_flag = _parse_flag(key, value if has_value else None, strict=strict)
            if parsed_flag is not None:
                values[_BOOLEAN_KEYS[key]] = parsed_flag
        elif key in _REPEATABLE_KEYS:
            if value:
                repeated[_REPEATABLE_KEYS[key]].append(value)
        elif key not in _VALUE_KEYS:
            ignored.append(key)
        elif not value:
            if strict:
                raise DirectiveError(f"Directive '{key}' requires a value.")
        elif key in _INTEGER_KEYS:
            parsed_integer = _parse_integer(key, value, strict=strict)
            if parsed_integer is not None:
                values[_INTEGER_KEYS[key]] = parsed_integer
        elif key in _NUMBER_KEYS:
            parsed_number = parse_number(value)
            if parsed_number is None and strict:
                raise DirectiveError(f"Directive '{key}' expects a number, got '{value}'.")
            if parsed_number is not None:
                values[_NUMBER_KEYS[key]] = parsed_number
        else:
            values[_STRING_KEYS[key]] = value

    if ignored:
        _LOGGER.debug("Ignoring unknown directives %s in tag '%s'", ignored, raw)

    return DirectiveSet(
        **values,
        enum=tuple(repeated["enum"]),
        examples=tuple(repeated["examples"]),
        ignored_keys=tuple(ignored),
    )


def parse_name_tag(raw: str | None) -> NameTag:
    """Parse a ``json``/``yaml`` style tag: ``name[,option...]``."""
    if raw is None:
        return NameTag()
    name, *options = raw.split(",")
    return NameTag(
        name=name.strip(), options=tuple(option.strip() for option in options if option.strip())
    )


def parse_enum_tag(raw: str | None, *, strict: bool = False) -> tuple[Any, ...]:
    """Parse the ``jsonschema_enum`` channel, a JSON array of enum values."""
    if not raw:
        return ()
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        if strict:
            raise DirectiveError(f"Enum tag is not valid JSON: {exc}") from exc
        _LOGGER.debug("Dropping malformed enum tag '%s': %s", raw, exc)
        return ()
    if not isinstance(parsed, list):
        if strict:
            raise DirectiveError("Enum tag must be a JSON array.")
        _LOGGER.debug("Dropping enum tag '%s': not a JSON array", raw)
        return ()
    return tuple(parsed)


def parse_number(value: str) -> int | float | None:
    """Parse an integer or finite float, returning ``None`` when malformed."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_flag(key: str, value: str | None, *, strict: bool) -> bool | None:
    if value is None or value == "" or value == "true":
        return True
    if strict:
        raise DirectiveError(f"Directive '{key}' expects 'true' or no value, got '{value}'.")
    _LOGGER.debug("Ignoring directive %s=%s: unsupported boolean literal", key, value)
    return None


def _parse_integer(key: str, value: str, *, strict: bool) -> int | None:
    try:
        return int(value)
    except ValueError:
        if strict:
            raise DirectiveError(f"Directive '{key}' expects an integer, got '{value}'.") from None
        _LOGGER.debug("Dropping directive %s=%s: not an integer", key, value)
        return None
