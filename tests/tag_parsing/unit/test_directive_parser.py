"""Directive parser tests."""

from __future__ import annotations

import dataclasses

import pytest
from typeschema.tag_parsing import (
    DirectiveError,
    parse_directives,
    parse_enum_tag,
    parse_name_tag,
    schema_field,
)


def test_parses_flags_numbers_and_strings() -> None:
    directives = parse_directives(
        "required,minLength=1,maxLength=20,pattern=.*,description=this is a property,"
        "title=the name,format=email"
    )

    assert directives.required is True
    assert directives.min_length == 1
    assert directives.max_length == 20
    assert directives.pattern == ".*"
    assert directives.description == "this is a property"
    assert directives.title == "the name"
    assert directives.format == "email"
    assert directives.excluded is False


def test_repeatable_keys_accumulate_in_order() -> None:
    directives = parse_directives("enum=a,enum=b,enum=b,example=joe,example=lucy")

    assert directives.enum == ("a", "b", "b")
    assert directives.examples == ("joe", "lucy")


def test_non_repeatable_keys_are_last_write_wins() -> None:
    directives = parse_directives("title=first,minimum=1,title=second,minimum=5")

    assert directives.title == "second"
    assert directives.minimum == 5


@pytest.mark.parametrize("raw", ["-", "-,required", " - "])
def test_exclusion_sentinel_marks_field_excluded(raw: str) -> None:
    directives = parse_directives(raw)

    assert directives.excluded is True
    assert directives.required is False


def test_empty_enum_and_example_values_are_no_ops() -> None:
    directives = parse_directives("enum=,example=")

    assert directives.enum == ()
    assert directives.examples == ()


def test_boolean_directives_accept_true_or_no_value() -> None:
    directives = parse_directives("exclusiveMinimum,exclusiveMaximum=true,omitempty=yes")

    assert directives.exclusive_minimum is True
    assert directives.exclusive_maximum is True
    assert directives.omitempty is False


def test_malformed_numbers_are_dropped_without_affecting_other_keys() -> None:
    directives = parse_directives("minimum=low,maximum=12.5,minLength=two,maxLength=3")

    assert directives.minimum is None
    assert directives.maximum == 12.5
    assert directives.min_length is None
    assert directives.max_length == 3


def test_unknown_keys_are_ignored() -> None:
    directives = parse_directives("emum=,required")

    assert directives.required is True
    assert directives.ignored_keys == ("emum",)


def test_missing_or_empty_tag_yields_empty_directives() -> None:
    assert parse_directives(None) == parse_directives("")
    assert parse_directives(None).excluded is False


@pytest.mark.parametrize(
    "raw",
    ["minimum=low", "maxLength=1.5", "required=false", "pattern=", "multipleOf=nan"],
)
def test_strict_mode_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(DirectiveError):
        parse_directives(raw, strict=True)


def test_name_tag_parses_name_and_options() -> None:
    name_tag = parse_name_tag("friends,omitempty")

    assert name_tag.name == "friends"
    assert name_tag.omitempty is True
    assert name_tag.excluded is False
    assert parse_name_tag("-").excluded is True
    assert parse_name_tag(",omitempty").name == ""
    assert parse_name_tag(None).name == ""


def test_enum_tag_parses_json_arrays_leniently() -> None:
    assert parse_enum_tag('["a","b",2,null]') == ("a", "b", 2, None)
    assert parse_enum_tag("not-json") == ()
    assert parse_enum_tag('{"a": 1}') == ()

    with pytest.raises(DirectiveError):
        parse_enum_tag("not-json", strict=True)


def test_schema_field_stores_tags_in_dataclass_metadata() -> None:
    @dataclasses.dataclass
    class Tagged:
        value: int = schema_field(
            json="value,omitempty", jsonschema="minimum=1", metadata={"owner": "qa"}, default=3
        )

    (field,) = dataclasses.fields(Tagged)

    assert field.default == 3
    assert field.metadata["json"] == "value,omitempty"
    assert field.metadata["jsonschema"] == "minimum=1"
    assert field.metadata["owner"] == "qa"
    assert "embedded" not in field.metadata
