"""Components: identified nodes holding typed properties and child components."""

from __future__ import annotations

import logging
import threading
from typing import Any

from .common import FabricError

__all__ = ["Component"]

_log = logging.getLogger(__name__)

_SCALAR_KINDS = (bool, int, float, str)


def _is_kind(value: Any, kind: type) -> bool:
    if kind is Component:
        return isinstance(value, Component)
    return type(value) is kind


class Component:
    """A named node with typed properties and an ordered list of children."""

    def __init__(self, id: str) -> None:
        if not id:
            raise FabricError("Component ID cannot be empty")
        self._id = id
        self._properties: dict[str, Any] = {}
        self._children: list[Component] = []
        self._properties_lock = threading.Lock()
        self._children_lock = threading.Lock()

    @property
    def id(self) -> str:
        return self._id

    def has_property(self, name: str) -> bool:
        with self._properties_lock:
            return name in self._properties

    def remove_property(self, name: str) -> bool:
        """Remove a property; return whether it existed."""
        with self._properties_lock:
            return self._properties.pop(name, None) is not None or False

    def set_property(self, name: str, value: Any) -> None:
        """Store a bool, int, float, str or Component value under ``name``."""
        if type(value) not in _SCALAR_KINDS and not isinstance(value, Component):
            raise TypeError(
                f"Property type {type(value).__name__} not supported; "
                "must be bool, int, float, str or Component"
            )
        with self._properties_lock:
            self._properties[name] = value

    def get_property(self, name: str, kind: type | None = None) -> Any:
        """Return the property ``name``, checking that it is of type ``kind`` if given."""
        with self._properties_lock:
            if name not in self._properties:
                raise FabricError(
                    f"Property '{name}' not found in component '{self._id}'"
                )
            value = self._properties[name]
        if kind is not None and not _is_kind(value, kind):
            raise FabricError(f"Property '{name}' has incorrect type")
        return value

    def add_child(self, child: Component) -> None:
        if child is None:
            raise FabricError("Cannot add null child to component")
        with self._children_lock:
            if any(existing.id == child.id for existing in self._children):
                raise FabricError(
                    f"Child component with ID '{child.id}' already exists"
                )
            self._children.append(child)
        _log.debug("Added child '%s' to component '%s'", child.id, self._id)

    def remove_child(self, child_id: str) -> bool:
        with self._children_lock:
            for index, child in enumerate(self._children):
                if child.id == child_id:
                    del self._children[index]
                    break
            else:
                return False
        _log.debug("Removed child '%s' from component '%s'", child_id, self._id)
        return True

    def get_child(self, child_id: str) -> Component | None:
        with self._children_lock:
            return next((c for c in self._children if c.id == child_id), None)

    @property
    def children(self) -> tuple[Component, ...]:
        """A snapshot of the children in insertion order."""
        with self._children_lock:
            return tuple(self._children)

    def __repr__(self) -> str:
        return f"Component({self._id!r})"