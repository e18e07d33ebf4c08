"""Events carrying typed data, and a dispatcher routing them to listeners."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from .common import FabricError, unique_id

__all__ = ["Event", "EventDispatcher", "EventHandler"]

_log = logging.getLogger(__name__)

_DATA_KINDS = (bool, int, float, str)

EventHandler = Callable[["Event"], None]


class Event:
    """A typed event with a source, key/value data and handling flags."""

    def __init__(self, type: str, source: str = "") -> None:
        if not type:
            raise FabricError("Event type cannot be empty")
        self._type = type
        self._source = source
        self._data: dict[str, Any] = {}
        self._data_lock = threading.Lock()
        self.handled = False
        self.propagate = True

    @property
    def type(self) -> str:
        return self._type

    @property
    def source(self) -> str:
        return self._source

    def has_data(self, key: str) -> bool:
        with self._data_lock:
            return key in self._data

    def set_data(self, key: str, value: Any) -> None:
        """Store a bool, int, float or str value under ``key``."""
        if type(value) not in _DATA_KINDS:
            raise TypeError(
                f"Data type {type(value).__name__} not supported; "
                "must be bool, int, float or str"
            )
        with self._data_lock:
            self._data[key] = value

    def get_data(self, key: str, kind: type | None = None) -> Any:
        """Return the value under ``key``, checking it is exactly ``kind`` if given."""
        with self._data_lock:
            if key not in self._data:
                raise FabricError(f"Event data key '{key}' not found")
            value = self._data[key]
        if kind is not None and type(value) is not kind:
            raise FabricError(f"Event data key '{key}' has incorrect type")
        return value

    def __repr__(self) -> str:
        return f"Event({self._type!r}, {self._source!r})"


@dataclass(frozen=True)
class _HandlerEntry:
    id: str
    handler: EventHandler


class EventDispatcher:
    """Keeps listeners per event type and dispatches events to them in order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[_HandlerEntry]] = {}
        self._lock = threading.Lock()

    def add_event_listener(self, event_type: str, handler: EventHandler) -> str:
        """Register ``handler`` for ``event_type`` and return its identifier."""
        if not event_type:
            raise FabricError("Event type cannot be empty")
        if handler is None or not callable(handler):
            raise FabricError("Event handler cannot be null")
        entry = _HandlerEntry(unique_id("h_"), handler)
        with self._lock:
            self._listeners.setdefault(event_type, []).append(entry)
        _log.debug("Added event listener for type '%s' with ID '%s'", event_type, entry.id)
        return entry.id

    def remove_event_listener(self, event_type: str, handler_id: str) -> bool:
        with self._lock:
            entries = self._listeners.get(event_type)
            if not entries:
                return False
            for index, entry in enumerate(entries):
                if entry.id == handler_id:
                    del entries[index]
                    break
            else:
                return False
        _log.debug("Removed event listener for type '%s' with ID '%s'", event_type, handler_id)
        return True

    def dispatch_event(self, event: Event) -> bool:
        """Call listeners in order until one marks the event handled.

        Returns whether the event ended up handled. Exceptions from listeners
        are logged and do not stop the dispatch.
        """
        with self._lock:
            entries = list(self._listeners.get(event.type, ()))
        if not entries:
            return False
        for entry in entries:
            try:
                entry.handler(event)
            except Exception as exc:  # listener failures must not break dispatch
                _log.error("Exception in event handler: %s", exc)
                continue
            if event.handled:
                return True
        return False