"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_settings, resolve_import_path
from .runtime_settings import ReflectorSettings

__all__ = [
    "ReflectorSettings",
    "ConfigurationError",
    "load_settings",
    "resolve_import_path",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
