"""Component lifecycle states, allowed transitions and hooks run on them."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from .common import FabricError, unique_id

__all__ = [
    "LifecycleState",
    "LifecycleManager",
    "LifecycleHook",
    "lifecycle_state_to_string",
]

_log = logging.getLogger(__name__)

LifecycleHook = Callable[[], None]


class LifecycleState(enum.IntEnum):
    CREATED = 0
    INITIALIZED = 1
    RENDERED = 2
    UPDATING = 3
    SUSPENDED = 4
    DESTROYED = 5


_STATE_NAMES = {
    LifecycleState.CREATED: "Created",
    LifecycleState.INITIALIZED: "Initialized",
    LifecycleState.RENDERED: "Rendered",
    LifecycleState.UPDATING: "Updating",
    LifecycleState.SUSPENDED: "Suspended",
    LifecycleState.DESTROYED: "Destroyed",
}

_TRANSITIONS = {
    LifecycleState.CREATED: {LifecycleState.INITIALIZED, LifecycleState.DESTROYED},
    LifecycleState.INITIALIZED: {
        LifecycleState.RENDERED,
        LifecycleState.SUSPENDED,
        LifecycleState.DESTROYED,
    },
    LifecycleState.RENDERED: {
        LifecycleState.UPDATING,
        LifecycleState.SUSPENDED,
        LifecycleState.DESTROYED,
    },
    LifecycleState.UPDATING: {
        LifecycleState.RENDERED,
        LifecycleState.SUSPENDED,
        LifecycleState.DESTROYED,
    },
    LifecycleState.SUSPENDED: {
        LifecycleState.INITIALIZED,
        LifecycleState.RENDERED,
        LifecycleState.DESTROYED,
    },
    LifecycleState.DESTROYED: set(),
}


def lifecycle_state_to_string(state: Any) -> str:
    """Return the display name of ``state``, or "Unknown" for any other value."""
    try:
        return _STATE_NAMES[LifecycleState(state)]
    except (ValueError, TypeError, KeyError):
        return "Unknown"


@dataclass(frozen=True)
class _HookEntry:
    id: str
    hook: LifecycleHook


class LifecycleManager:
    """Tracks a lifecycle state and runs hooks when it changes."""

    def __init__(self) -> None:
        self._state = LifecycleState.CREATED
        self._state_lock = threading.Lock()
        self._hooks_lock = threading.Lock()
        self._state_hooks: dict[LifecycleState, list[_HookEntry]] = {}
        self._transition_hooks: dict[
            tuple[LifecycleState, LifecycleState], list[_HookEntry]
        ] = {}

    @property
    def state(self) -> LifecycleState:
        with self._state_lock:
            return self._state

    def set_state(self, state: LifecycleState) -> None:
        """Move to ``state``, then run its state hooks and the transition hooks."""
        with self._state_lock:
            old_state = self._state
            if not self.is_valid_transition(old_state, state):
                raise FabricError(
                    "Invalid lifecycle state transition from "
                    f"{lifecycle_state_to_string(old_state)} to "
                    f"{lifecycle_state_to_string(state)}"
                )
            self._state = state

        _log.debug(
            "Lifecycle state changed from %s to %s",
            lifecycle_state_to_string(old_state),
            lifecycle_state_to_string(state),
        )

        with self._hooks_lock:
            state_hooks = [e.hook for e in self._state_hooks.get(state, ())]
            transition_hooks = [
                e.hook for e in self._transition_hooks.get((old_state, state), ())
            ]

        for hook in state_hooks:
            try:
                hook()
            except Exception as exc:  # hooks must not break the state change
                _log.error("Exception in lifecycle hook: %s", exc)

        for hook in transition_hooks:
            try:
                hook()
            except Exception as exc:
                _log.error("Exception in lifecycle transition hook: %s", exc)

    def add_hook(self, state: LifecycleState, hook: LifecycleHook) -> str:
        """Run ``hook`` whenever the manager enters ``state``; return its identifier."""
        if hook is None or not callable(hook):
            raise FabricError("Lifecycle hook cannot be null")
        entry = _HookEntry(unique_id("hook_"), hook)
        with self._hooks_lock:
            self._state_hooks.setdefault(state, []).append(entry)
        _log.debug(
            "Added lifecycle hook for state '%s' with ID '%s'",
            lifecycle_state_to_string(state),
            entry.id,
        )
        return entry.id

    def add_transition_hook(
        self,
        from_state: LifecycleState,
        to_state: LifecycleState,
        hook: LifecycleHook,
    ) -> str:
        """Run ``hook`` on the transition ``from_state`` -> ``to_state``; return its identifier."""
        if hook is None or not callable(hook):
            raise FabricError("Lifecycle transition hook cannot be null")
        entry = _HookEntry(unique_id("transition_"), hook)
        with self._hooks_lock:
            self._transition_hooks.setdefault((from_state, to_state), []).append(entry)
        _log.debug(
            "Added lifecycle transition hook from '%s' to '%s' with ID '%s'",
            lifecycle_state_to_string(from_state),
            lifecycle_state_to_string(to_state),
            entry.id,
        )
        return entry.id

    def remove_hook(self, hook_id: str) -> bool:
        """Remove a state or transition hook by identifier; return whether it existed."""
        with self._hooks_lock:
            for registry in (self._state_hooks, self._transition_hooks):
                for entries in registry.values():
                    for index, entry in enumerate(entries):
                        if entry.id == hook_id:
                            del entries[index]
                            _log.debug("Removed lifecycle hook with ID '%s'", hook_id)
                            return True
        return False

    @staticmethod
    def is_valid_transition(
        from_state: LifecycleState, to_state: LifecycleState
    ) -> bool:
        """Self-transitions are always allowed; Destroyed is terminal otherwise."""
        if from_state == to_state:
            return True
        return to_state in _TRANSITIONS.get(from_state, ())