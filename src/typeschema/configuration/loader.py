"""Configuration loader service."""

from __future__ import annotations

import importlib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from typeschema.schema_model import TypeNode

from .runtime_settings import ReflectorSettings

_BOOLEAN_KEYS = (
    "allow_additional_properties",
    "required_from_jsonschema_tags",
    "expanded_struct",
    "prefer_yaml_schema",
    "strict_tags",
)
_KNOWN_KEYS = {*_BOOLEAN_KEYS, "ignored_types", "type_mappings"}


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_settings(config_path: Path | str) -> ReflectorSettings:
    """Load and validate a YAML/JSON reflector configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    flags = {key: _require_bool(parsed.get(key, False), key) for key in _BOOLEAN_KEYS}
    return ReflectorSettings(
        path=path,
        ignored_types=_parse_ignored_types(parsed.get("ignored_types")),
        type_mappings=_parse_type_mappings(parsed.get("type_mappings")),
        **flags,
    )


def resolve_import_path(import_path: str) -> Any:
    """Resolve ``package.module:Qualified.Name`` to the named object."""
    module_name, separator, qualified_name = import_path.partition(":")
    if not separator or not module_name.strip() or not qualified_name.strip():
        raise ConfigurationError(
            f"Import path '{import_path}' must look like 'package.module:TypeName'."
        )
    try:
        target: Any = importlib.import_module(module_name.strip())
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module '{module_name}': {exc}") from exc
    for attribute in qualified_name.strip().split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise ConfigurationError(
                f"Module '{module_name}' has no attribute '{qualified_name}'."
            ) from exc
    return target


def _parse_ignored_types(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError("ignored_types must be a list of import paths.")
    return tuple(
        resolve_import_path(_require_non_empty_string(item, "ignored_types entry"))
        for item in value
    )


def _parse_type_mappings(value: Any) -> dict[Any, Mapping[str, Any]]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError("type_mappings must be a mapping of import path to schema.")
    mappings: dict[Any, Mapping[str, Any]] = {}
    for import_path, fragment in value.items():
        label = f"type_mappings.{import_path}"
        target = resolve_import_path(_require_non_empty_string(import_path, "type_mappings key"))
        if not isinstance(fragment, Mapping):
            raise ConfigurationError(f"{label} must be a schema mapping.")
        try:
            TypeNode.from_dict(fragment)
        except (TypeError, AttributeError) as exc:
            raise ConfigurationError(f"{label} is not a valid schema fragment: {exc}") from exc
        mappings[target] = dict(fragment)
    return mappings


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped
