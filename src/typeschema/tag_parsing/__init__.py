"""Tag parsing exports."""

from .directive_models import (
    DESCRIPTION_TAG,
    EMBEDDED_TAG,
    ENUM_TAG,
    EXCLUSION_SENTINEL,
    JSON_TAG,
    JSONSCHEMA_TAG,
    YAML_TAG,
    DirectiveSet,
    NameTag,
)
from .directive_parser import (
    DirectiveError,
    parse_directives,
    parse_enum_tag,
    parse_name_tag,
    parse_number,
)
from .field_tags import FieldTags, field_tags, schema_field

__all__ = [
    "DESCRIPTION_TAG",
    "EMBEDDED_TAG",
    "ENUM_TAG",
    "EXCLUSION_SENTINEL",
    "FieldTags",
    "JSON_TAG",
    "JSONSCHEMA_TAG",
    "YAML_TAG",
    "DirectiveError",
    "DirectiveSet",
    "NameTag",
    "field_tags",
    "parse_directives",
    "parse_enum_tag",
    "parse_name_tag",
    "parse_number",
    "schema_field",
]
