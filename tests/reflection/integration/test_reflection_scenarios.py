"""End-to-end reflection scenarios."""

from __future__ import annotations

import json

import yaml
from sample_records import SampleUser, SignupForm
from typeschema import Reflector, Schema, encode_schema
from typeschema.schema_model import SCHEMA_VERSION

EXPECTED_SAMPLE_USER = {
    "$schema": SCHEMA_VERSION,
    "$ref": "#/definitions/SampleUser",
    "definitions": {
        "SampleUser": {
            "type": "object",
            "properties": {
                "some_base_property": {"type": "integer"},
                "some_base_property_yaml": {"type": "integer"},
                "grand": {"$ref": "#/definitions/GrandfatherType"},
                "some_untagged_base_property": {"type": "boolean"},
                "public_non_exported": {"type": "integer"},
                "id": {"type": "integer"},
                "name": {
                    "type": "string",
                    "title": "the name",
                    "description": "this is a property",
                    "default": "alex",
                    "examples": ["joe", "lucy"],
                    "minLength": 1,
                    "maxLength": 20,
                    "pattern": ".*",
                },
                "friends": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "description": "list of IDs, omitted when empty",
                },
                "tags": {"type": "object", "patternProperties": {".*": {}}},
                "test_flag": {"type": "boolean"},
                "birth_date": {"type": "string", "format": "date-time"},
                "website": {"type": "string", "format": "uri"},
                "network_address": {"type": "string", "format": "ipv4"},
                "photo": {"type": "string", "media": {"binaryEncoding": "base64"}},
                "feeling": {"type": "integer"},
                "age": {
                    "type": "integer",
                    "minimum": 18,
                    "maximum": 120,
                    "exclusiveMinimum": True,
                    "exclusiveMaximum": True,
                },
                "email": {"type": "string", "format": "email"},
            },
            "additionalProperties": False,
            "required": [
                "some_base_property",
                "some_base_property_yaml",
                "grand",
                "some_untagged_base_property",
                "public_non_exported",
                "id",
                "name",
                "test_flag",
                "age",
                "email",
            ],
        },
        "GrandfatherType": {
            "type": "object",
            "properties": {"family_name": {"type": "string"}},
            "additionalProperties": False,
            "required": ["family_name"],
        },
    },
}


def test_default_reflection_of_sample_user_matches_expected_document() -> None:
    rendered = json.loads(encode_schema(Reflector().reflect(SampleUser)))

    assert rendered == EXPECTED_SAMPLE_USER
    assert list(rendered["definitions"]["SampleUser"]["properties"]) == list(
        EXPECTED_SAMPLE_USER["definitions"]["SampleUser"]["properties"]
    )


def test_reflection_is_deterministic() -> None:
    reflector = Reflector()

    assert encode_schema(reflector.reflect(SampleUser)) == encode_schema(
        reflector.reflect(SampleUser)
    )


def test_reparsed_document_keeps_required_set_and_bounds() -> None:
    encoded = encode_schema(Reflector(expanded_struct=True).reflect(SignupForm))

    reparsed = Schema.from_dict(json.loads(encoded))
    root = reparsed.root

    assert root.required == ["user_id"]
    assert len(root.properties) == 2
    assert root.properties["user_id"].type == "integer"
    assert root.properties["nickname"].min_length == 1
    assert root.properties["nickname"].max_length == 20
    assert reparsed.to_dict() == json.loads(encoded)


def test_yaml_output_carries_the_same_document() -> None:
    schema = Reflector().reflect(SampleUser)

    assert yaml.safe_load(encode_schema(schema, "yaml")) == json.loads(encode_schema(schema))
