"""Primitive mapping exports."""

from .primitive_mapper import BINARY_MEDIA, is_enum_type, map_enum, map_primitive

__all__ = ["BINARY_MEDIA", "is_enum_type", "map_enum", "map_primitive"]
