"""Reflection failure types."""

from __future__ import annotations

from typing import Any


class ReflectionError(Exception):
    """Raised when a type cannot be categorized into a schema shape."""

    def __init__(self, message: str, offending_type: Any = None) -> None:
        super().__init__(message)
        self.offending_type = offending_type


def type_label(tp: Any) -> str:
    """Human readable, fully qualified label for a reflected type."""
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)
