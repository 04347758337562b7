"""Type walker shape dispatch tests."""

from __future__ import annotations

import collections.abc
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Annotated, Any, Optional

import pytest
from sample_records import (
    Author,
    Book,
    Color,
    CustomTime,
    Customer,
    GrandfatherType,
    NonExported,
    Outer,
    ProtoEnum,
    TreeNode,
)
from typeschema import field_tags, schema_field
from typeschema.reflection import DefinitionRegistry, FieldOptions, ReflectionError, TypeWalker
from typeschema.schema_model import TypeNode


def _walker(**options: Any) -> tuple[TypeWalker, DefinitionRegistry]:
    registry = DefinitionRegistry()
    return TypeWalker(registry, field_options=FieldOptions(), **options), registry


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (list[int], {"type": "array", "items": {"type": "integer"}}),
        (tuple[str, ...], {"type": "array", "items": {"type": "string"}}),
        (set[float], {"type": "array", "items": {"type": "number"}}),
        (collections.abc.Sequence[bool], {"type": "array", "items": {"type": "boolean"}}),
        (list, {"type": "array", "items": {}}),
        (dict[str, int], {"type": "object", "patternProperties": {".*": {"type": "integer"}}}),
        (dict, {"type": "object", "patternProperties": {".*": {}}}),
        (collections.abc.Mapping[str, Any], {"type": "object", "patternProperties": {".*": {}}}),
        (Optional[int], {"type": "integer"}),
        (int | None, {"type": "integer"}),
        (Any, {}),
        (bytes, {"type": "string", "media": {"binaryEncoding": "base64"}}),
        (ProtoEnum, {"type": "integer"}),
        (Color, {"type": "string"}),
    ],
)
def test_walks_container_optional_and_scalar_shapes(annotation: Any, expected: dict) -> None:
    walker, registry = _walker()

    assert walker.walk(annotation).to_dict() == expected
    assert registry.definitions == {}


def test_unions_of_several_members_become_one_of() -> None:
    walker, _ = _walker()

    node = walker.walk(int | str | None)

    assert node.to_dict() == {"oneOf": [{"type": "integer"}, {"type": "string"}]}


def test_heterogeneous_tuples_combine_item_shapes() -> None:
    walker, _ = _walker()

    assert walker.walk(tuple[int, int]).to_dict() == {"type": "array", "items": {"type": "integer"}}
    assert walker.walk(tuple[int, str]).to_dict() == {
        "type": "array",
        "items": {"oneOf": [{"type": "integer"}, {"type": "string"}]},
    }


def test_records_register_definitions_and_return_references() -> None:
    walker, registry = _walker()

    node = walker.walk(list[Customer])

    assert node.to_dict() == {"type": "array", "items": {"$ref": "#/definitions/Customer"}}
    assert list(registry.definitions) == ["Customer", "Address"]


def test_self_referential_records_terminate_with_references() -> None:
    walker, registry = _walker()

    node = walker.walk(TreeNode)
    definition = registry.definitions["TreeNode"].to_dict()

    assert node.to_dict() == {"$ref": "#/definitions/TreeNode"}
    assert definition["properties"]["parent"] == {"$ref": "#/definitions/TreeNode"}
    assert definition["properties"]["children"] == {
        "type": "array",
        "items": {"$ref": "#/definitions/TreeNode"},
    }
    assert list(registry.definitions) == ["TreeNode"]


def test_mutually_referential_records_terminate() -> None:
    walker, registry = _walker()

    walker.walk(Author)
    definitions = {name: node.to_dict() for name, node in registry.definitions.items()}

    assert list(definitions) == ["Author", "Book"]
    assert definitions["Author"]["properties"]["books"]["items"] == {"$ref": "#/definitions/Book"}
    assert definitions["Book"]["properties"]["author"] == {"$ref": "#/definitions/Author"}
    assert walker.walk(Book).to_dict() == {"$ref": "#/definitions/Book"}


def test_embedded_fields_are_shadowed_by_outer_fields() -> None:
    walker, _ = _walker()

    node = walker.walk_record_inline(Outer)

    assert list(node.properties) == ["depth", "label"]
    assert node.properties["label"].description == "outer label"
    assert node.required == ["depth", "label"]


def test_type_mapper_wins_over_default_reflection() -> None:
    def map_type(tp: Any) -> TypeNode | None:
        if tp is int:
            return TypeNode(type="string", pattern="^[0-9]+$")
        return None

    walker, _ = _walker(type_mapper=map_type)

    first = walker.walk(list[int])
    second = walker.walk(dict[str, int])
    first.items.pattern = "changed"

    assert second.to_dict() == {
        "type": "object",
        "patternProperties": {".*": {"type": "string", "pattern": "^[0-9]+$"}},
    }


def test_type_mapper_may_return_plain_mappings() -> None:
    walker, _ = _walker(type_mapper=lambda tp: {"type": "string"} if tp is float else None)

    assert walker.walk(float).to_dict() == {"type": "string"}


def test_ignored_types_are_detected_through_containers() -> None:
    walker, _ = _walker(ignored_types=(Book,))

    assert walker.is_ignored(Book) is True
    assert walker.is_ignored(Optional[Book]) is True
    assert walker.is_ignored(dict[str, list[Book]]) is True
    assert walker.is_ignored(Author) is False


@pytest.mark.parametrize(
    "annotation", [Callable[[int], str], Iterator[int], type(lambda: None), complex]
)
def test_uncategorizable_types_raise_reflection_error(annotation: Any) -> None:
    walker, _ = _walker()

    with pytest.raises(ReflectionError, match="Cannot reflect unsupported type") as excinfo:
        walker.walk(annotation)

    assert excinfo.value.offending_type is not None


def test_private_embedded_records_promote_their_visible_fields() -> None:
    @dataclass
    class Wrapper:
        _hidden: NonExported = schema_field(embedded=True)
        _dropped: GrandfatherType = schema_field(embedded=True, jsonschema="-")
        code: str = schema_field(json="code")

    walker, registry = _walker()

    node = walker.walk_record_inline(Wrapper)

    assert list(node.properties) == ["public_non_exported", "code"]
    assert node.required == ["public_non_exported", "code"]
    assert registry.definitions == {}


def test_type_mapper_applies_to_nested_annotated_types() -> None:
    def map_type(tp: Any) -> TypeNode | None:
        if tp is CustomTime:
            return TypeNode(type="string", format="date-time")
        return None

    walker, _ = _walker(type_mapper=map_type)
    stamp = Annotated[CustomTime, field_tags(jsonschema="minLength=1")]

    assert walker.walk(list[stamp]).to_dict() == {
        "type": "array",
        "items": {"type": "string", "format": "date-time"},
    }
    assert walker.walk(Optional[stamp]).to_dict() == {"type": "string", "format": "date-time"}


def test_type_directive_leaves_references_untouched() -> None:
    @dataclass
    class Family:
        head: GrandfatherType = schema_field(jsonschema="type=string")
        size: int = schema_field(jsonschema="type=number")

    walker, _ = _walker()

    node = walker.walk_record_inline(Family)

    assert node.properties["head"].to_dict() == {"$ref": "#/definitions/GrandfatherType"}
    assert node.properties["size"].to_dict() == {"type": "number"}
