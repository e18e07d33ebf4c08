"""Shared error type and identifier helpers used across the engine."""

from __future__ import annotations

import itertools
import threading
import uuid

__all__ = ["FabricError", "unique_id"]


class FabricError(Exception):
    """Raised when an engine operation receives invalid input or meets an invalid state."""


_counter = itertools.count(1)
_counter_lock = threading.Lock()


def unique_id(prefix: str = "") -> str:
    """Return an identifier that is unique within this process, starting with ``prefix``."""
    with _counter_lock:
        serial = next(_counter)
    return f"{prefix}{serial}_{uuid.uuid4().hex[:8]}"