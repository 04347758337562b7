"""Shared definitions table for named record types."""

from __future__ import annotations

import logging
from typing import Any

from typeschema.schema_model import TypeNode, reference_node

from .reflection_errors import type_label

_LOGGER = logging.getLogger("typeschema.reflection")


def definition_name(identity: Any) -> str:
    return getattr(identity, "__name__", None) or type_label(identity)


class DefinitionRegistry:
    """Deduplicates named record types into definitions for one reflection call.

    Slots are reserved before a record's fields are walked so the table keeps
    first-registration order with outer types ahead of the types they contain.
    When two distinct types render to the same name the first one keeps the
    slot and later ones resolve to its reference.
    """

    def __init__(self) -> None:
        self._names: dict[Any, str] = {}
        self._owners: dict[str, Any] = {}
        self._definitions: dict[str, TypeNode | None] = {}

    def lookup(self, identity: Any) -> TypeNode | None:
        """Return a reference for a registered (or collapsed) identity."""
        name = self._names.get(identity)
        if name is None:
            return None
        if self._owners[name] is identity and self._definitions[name] is None:
            return None
        return reference_node(name)

    def reserve(self, identity: Any) -> bool:
        """Claim the definition slot for ``identity``.

        Returns ``False`` when the name already belongs to a different type; the
        identity is then collapsed onto the existing definition.
        """
        if identity in self._names:
            return self._owners[self._names[identity]] is identity
        name = definition_name(identity)
        owner = self._owners.get(name)
        self._names[identity] = name
        if owner is not None:
            _LOGGER.warning(
                "Definition name '%s' of %s already taken by %s; reusing the first definition",
                name,
                type_label(identity),
                type_label(owner),
            )
            return False
        self._owners[name] = identity
        self._definitions[name] = None
        return True

    def register(self, identity: Any, node: TypeNode) -> TypeNode:
        """Store the definition for ``identity`` (first write wins) and return its reference."""
        if identity not in self._names:
            self.reserve(identity)
        name = self._names[identity]
        if self._owners[name] is identity and self._definitions[name] is None:
            self._definitions[name] = node
        return reference_node(name)

    @property
    def definitions(self) -> dict[str, TypeNode]:
        return {name: node for name, node in self._definitions.items() if node is not None}
