"""Record field enumeration."""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    NotRequired,
    Required,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from typeschema.tag_parsing import (
    DESCRIPTION_TAG,
    EMBEDDED_TAG,
    ENUM_TAG,
    JSON_TAG,
    JSONSCHEMA_TAG,
    YAML_TAG,
    DirectiveSet,
    parse_directives,
    parse_enum_tag,
    parse_name_tag,
)

from .reflection_errors import ReflectionError, type_label


@dataclass(frozen=True)
class FieldOptions:
    """Reflector switches that influence field descriptors."""

    required_from_jsonschema_tags: bool = False
    prefer_yaml_schema: bool = False
    strict_tags: bool = False


@dataclass(frozen=True)
class FieldDescriptor:  # pylint: disable=too-many-instance-attributes
    """One record field, with its tags resolved."""

    name: str
    external_name: str
    field_type: Any
    exported: bool
    skip: bool
    required: bool
    embedded: bool
    directives: DirectiveSet
    description: str | None = None
    enum_values: tuple[Any, ...] = ()
    depth: int = 0


def is_record_type(tp: Any) -> bool:
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or is_typeddict(tp))


def strip_annotated(tp: Any) -> tuple[Any, dict[str, Any]]:
    """Remove ``Annotated``/``Required``/``NotRequired`` wrappers, collecting tag mappings."""
    tags: dict[str, Any] = {}
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            base, *metadata = get_args(tp)
            for item in metadata:
                if isinstance(item, Mapping):
                    tags.update(item)
            tp = base
        elif origin in (Required, NotRequired):
            tp = get_args(tp)[0]
        else:
            return tp, tags


def is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def unwrap_optional(tp: Any) -> Any:
    """Return the single non-null member of an optional type, else the type itself."""
    tp, _ = strip_annotated(tp)
    if is_union(tp):
        members = [member for member in get_args(tp) if member is not type(None)]
        if len(members) == 1:
            return unwrap_optional(members[0])
    return tp


def record_fields(
    record_type: type, options: FieldOptions, *, depth: int = 0
) -> list[FieldDescriptor]:
    """Describe the fields of a dataclass or TypedDict in declaration order."""
    try:
        hints = get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError) as exc:
        raise ReflectionError(
            f"Cannot resolve field annotations of {type_label(record_type)}: {exc}", record_type
        ) from exc

    if dataclasses.is_dataclass(record_type):
        raw_fields = [
            (field.name, hints.get(field.name, field.type), field.metadata, False)
            for field in dataclasses.fields(record_type)
        ]
    else:
        optional_keys = frozenset(getattr(record_type, "__optional_keys__", ()))
        raw_fields = [
            (name, hint, {}, _is_optional_key(name, hint, optional_keys))
            for name, hint in hints.items()
        ]

    descriptors = []
    for name, hint, metadata, optional_key in raw_fields:
        field_type, annotated_tags = strip_annotated(hint)
        tags = {**annotated_tags, **metadata}
        descriptors.append(
            _describe_field(
                name,
                field_type,
                tags,
                options,
                optional_key=optional_key,
                depth=depth,
            )
        )
    return descriptors


def _describe_field(
    name: str,
    field_type: Any,
    tags: Mapping[str, Any],
    options: FieldOptions,
    *,
    optional_key: bool,
    depth: int,
) -> FieldDescriptor:
    name_tag = parse_name_tag(_name_channel(tags, prefer_yaml=options.prefer_yaml_schema))
    directives = parse_directives(tags.get(JSONSCHEMA_TAG), strict=options.strict_tags)
    exported = not name.startswith("_")
    skip = not exported or name_tag.excluded or directives.excluded

    if skip:
        required = False
    elif options.required_from_jsonschema_tags:
        required = directives.required
    else:
        required = not (name_tag.omitempty or optional_key)

    return FieldDescriptor(
        name=name,
        external_name=name_tag.name or name,
        field_type=field_type,
        exported=exported,
        skip=skip,
        required=required,
        embedded=bool(tags.get(EMBEDDED_TAG)) and not name_tag.name,
        directives=directives,
        description=tags.get(DESCRIPTION_TAG),
        enum_values=parse_enum_tag(tags.get(ENUM_TAG), strict=options.strict_tags),
        depth=depth,
    )


def _is_optional_key(name: str, hint: Any, optional_keys: frozenset[str]) -> bool:
    # String annotations hide Required/NotRequired from the TypedDict itself.
    origin = get_origin(hint)
    if origin is NotRequired:
        return True
    if origin is Required:
        return False
    return name in optional_keys


def _name_channel(tags: Mapping[str, Any], *, prefer_yaml: bool) -> str | None:
    channels = (YAML_TAG, JSON_TAG) if prefer_yaml else (JSON_TAG, YAML_TAG)
    for channel in channels:
        if tags.get(channel) is not None:
            return tags[channel]
    return None
