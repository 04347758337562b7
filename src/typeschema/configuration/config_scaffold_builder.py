"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "typeschema.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reflector configuration for typeschema.
# Every key is optional; command line flags override the values set here.

# Omit "additionalProperties: false" on generated record objects.
allow_additional_properties: false

# Require only fields whose jsonschema tag contains "required".
required_from_jsonschema_tags: false

# Inline the root record's fields instead of referencing a definition.
expanded_struct: false

# Read external field names from the yaml tag ahead of the json tag.
prefer_yaml_schema: false

# Fail on malformed directive values instead of dropping them.
strict_tags: false

# Types whose fields are dropped wherever they occur ("package.module:TypeName").
ignored_types: []
#  - "myapp.models:InternalAudit"

# Replacement schema fragments for specific types ("package.module:TypeName").
type_mappings: {}
#  "myapp.models:CustomTime":
#    type: string
#    format: date-time
"""


def build_placeholder_configuration() -> str:
    """Build a YAML reflector configuration with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder reflector configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
