"""Resource loading lifecycle with load counting, and a registry of resource factories."""

from __future__ import annotations

import abc
import enum
import logging
import threading
from typing import Any, Callable, ClassVar, Optional

__all__ = [
    "ResourceState",
    "ResourceLifecycle",
    "ResourceFactory",
    "resource_state_to_string",
]

_log = logging.getLogger(__name__)


class ResourceState(enum.Enum):
    UNLOADED = enum.auto()
    LOADING = enum.auto()
    LOADED = enum.auto()
    LOADING_FAILED = enum.auto()
    UNLOADING = enum.auto()


_STATE_NAMES = {
    ResourceState.UNLOADED: "Unloaded",
    ResourceState.LOADING: "Loading",
    ResourceState.LOADED: "Loaded",
    ResourceState.LOADING_FAILED: "LoadingFailed",
    ResourceState.UNLOADING: "Unloading",
}

_TRANSITIONS = {
    ResourceState.UNLOADED: {ResourceState.LOADING},
    ResourceState.LOADING: {ResourceState.LOADED, ResourceState.LOADING_FAILED},
    ResourceState.LOADED: {ResourceState.UNLOADING},
    ResourceState.LOADING_FAILED: {ResourceState.LOADING, ResourceState.UNLOADED},
    ResourceState.UNLOADING: {ResourceState.UNLOADED},
}


def resource_state_to_string(state: Any) -> str:
    """Return the display name of ``state``, or "Unknown" for any other value."""
    return _STATE_NAMES.get(state, "Unknown")


class ResourceLifecycle(abc.ABC):
    """Base for resources that are loaded and unloaded with reference counting.

    Subclasses implement :meth:`load_impl` and :meth:`unload_impl`.
    """

    def __init__(self) -> None:
        self._state = ResourceState.UNLOADED
        self._load_count = 0
        self._lock = threading.RLock()

    @property
    def state(self) -> ResourceState:
        with self._lock:
            return self._state

    @property
    def load_count(self) -> int:
        """How many loads have not yet been matched by an unload."""
        with self._lock:
            return self._load_count

    def is_valid_transition(
        self, from_state: ResourceState, to_state: ResourceState
    ) -> bool:
        return to_state in _TRANSITIONS.get(from_state, ())

    def _transition_to(self, state: ResourceState) -> bool:
        with self._lock:
            if not self.is_valid_transition(self._state, state):
                return False
            self._state = state
            return True

    def load(self) -> bool:
        """Load the resource, or count one more user if it is already loaded.

        Returns whether the resource is loaded afterwards.
        """
        with self._lock:
            if self._state is ResourceState.LOADED:
                self._load_count += 1
                return True

            if not self._transition_to(ResourceState.LOADING):
                _log.error("Failed to transition to Loading state")
                return False

            try:
                success = bool(self.load_impl())
            except Exception as exc:
                _log.error("Exception during resource loading: %s", exc)
                success = False

            if not success:
                if not self._transition_to(ResourceState.LOADING_FAILED):
                    _log.error("Failed to transition to LoadingFailed state")
                return False

            if not self._transition_to(ResourceState.LOADED):
                _log.error("Failed to transition to Loaded state")
                return False
            self._load_count += 1
            return True

    def unload(self) -> None:
        """Drop one user; unload the resource when none remain."""
        with self._lock:
            if self._state is ResourceState.UNLOADED:
                return
            if self._load_count > 0:
                self._load_count -= 1
            if self._load_count > 0:
                return

            if not self._transition_to(ResourceState.UNLOADING):
                _log.error("Failed to transition to Unloading state")
                return

            try:
                self.unload_impl()
            except Exception as exc:
                _log.error("Exception during resource unloading: %s", exc)

            if not self._transition_to(ResourceState.UNLOADED):
                _log.error("Failed to transition to Unloaded state")

    @abc.abstractmethod
    def load_impl(self) -> bool:
        """Do the actual loading; return whether it succeeded."""

    @abc.abstractmethod
    def unload_impl(self) -> None:
        """Do the actual unloading."""


ResourceFactoryFunc = Callable[[str], Optional[Any]]


class ResourceFactory:
    """Process-wide registry mapping type identifiers to resource constructors."""

    _factories: ClassVar[dict[str, ResourceFactoryFunc]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def register_type(cls, type_id: str, factory: ResourceFactoryFunc) -> None:
        """Register ``factory(resource_id)`` under ``type_id``, replacing any earlier one."""
        with cls._lock:
            cls._factories[type_id] = factory

    @classmethod
    def is_type_registered(cls, type_id: str) -> bool:
        with cls._lock:
            return type_id in cls._factories

    @classmethod
    def create(cls, type_id: str, resource_id: str) -> Any | None:
        """Create a resource of type ``type_id``; return None if the type is unknown."""
        with cls._lock:
            factory = cls._factories.get(type_id)
        if factory is None:
            return None
        return factory(resource_id)