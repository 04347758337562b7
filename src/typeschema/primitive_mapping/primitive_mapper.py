"""Scalar and well-known type mapping."""

from __future__ import annotations

import enum
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from ipaddress import IPv4Address, IPv6Address
from pathlib import PurePath
from typing import Any, get_origin
from urllib.parse import ParseResult, SplitResult
from uuid import UUID

from typeschema.schema_model import TypeNode

BINARY_MEDIA = {"binaryEncoding": "base64"}

# Well-known types win over the generic scalar dispatch; order matters for subclasses
# (datetime is a date, bool is an int).
_WELL_KNOWN_TYPES: tuple[tuple[type, Callable[[], TypeNode]], ...] = (
    (datetime, lambda: TypeNode(type="string", format="date-time")),
    (date, lambda: TypeNode(type="string", format="date")),
    (time, lambda: TypeNode(type="string", format="time")),
    (ParseResult, lambda: TypeNode(type="string", format="uri")),
    (SplitResult, lambda: TypeNode(type="string", format="uri")),
    (IPv4Address, lambda: TypeNode(type="string", format="ipv4")),
    (IPv6Address, lambda: TypeNode(type="string", format="ipv6")),
    (UUID, lambda: TypeNode(type="string", format="uuid")),
    (PurePath, lambda: TypeNode(type="string")),
)

_SCALAR_TYPES: tuple[tuple[type, Callable[[], TypeNode]], ...] = (
    (bool, lambda: TypeNode(type="boolean")),
    (int, lambda: TypeNode(type="integer")),
    (float, lambda: TypeNode(type="number")),
    (Decimal, lambda: TypeNode(type="number")),
    (str, lambda: TypeNode(type="string")),
    (bytes, lambda: TypeNode(type="string", media=dict(BINARY_MEDIA))),
    (bytearray, lambda: TypeNode(type="string", media=dict(BINARY_MEDIA))),
)


def map_primitive(tp: Any) -> TypeNode | None:
    """Return a fresh node for a scalar or well-known type, or ``None``."""
    if tp is None or tp is type(None):
        return TypeNode(type="null")
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return None
    for candidates in (_WELL_KNOWN_TYPES, _SCALAR_TYPES):
        for known_type, build in candidates:
            if issubclass(tp, known_type):
                return build()
    return None


def map_enum(enum_type: type[enum.Enum]) -> TypeNode:
    """Return the underlying primitive node of an enumeration.

    Legal values are not enumerated; only explicit enum tags do that.
    """
    for mixin in (bool, int, float, str):
        if issubclass(enum_type, mixin):
            return map_primitive(mixin) or TypeNode(type="string")
    value_types = {type(member.value) for member in enum_type}
    if not value_types or any(issubclass(value_type, bool) for value_type in value_types):
        return TypeNode(type="string")
    if all(issubclass(value_type, int) for value_type in value_types):
        return TypeNode(type="integer")
    if all(issubclass(value_type, (int, float)) for value_type in value_types):
        return TypeNode(type="number")
    return TypeNode(type="string")


def is_enum_type(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None and issubclass(tp, enum.Enum)
