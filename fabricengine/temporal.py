"""Time snapshots, time-driven behaviours and interpolation."""

from __future__ import annotations

import abc
import pickle
from typing import Any, Callable, Generic, TypeVar

__all__ = ["TimeState", "TimeBehavior", "lerp", "make_time_behavior"]

_T = TypeVar("_T")


class TimeState:
    """The stored states of entities at one point in time."""

    def __init__(self, timestamp: float = 0.0) -> None:
        self._timestamp = float(timestamp)
        self._entity_states: dict[str, bytes] = {}

    @property
    def timestamp(self) -> float:
        return self._timestamp

    def set_entity_state(self, entity_id: str, state: Any) -> None:
        """Store a serialized copy of ``state`` for ``entity_id``."""
        self._entity_states[entity_id] = pickle.dumps(state)

    def get_entity_state(self, entity_id: str) -> Any | None:
        """Return a copy of the stored state, or None if the entity has none."""
        data = self._entity_states.get(entity_id)
        if data is None:
            return None
        return pickle.loads(data)

    def diff(self, other: TimeState) -> dict[str, bool]:
        """Map every entity in either state to whether both hold it with different values.

        Entities present in only one of the states map to False.
        """
        result: dict[str, bool] = {}
        for entity_id in self._entity_states.keys() | other._entity_states.keys():
            mine = self._entity_states.get(entity_id)
            theirs = other._entity_states.get(entity_id)
            result[entity_id] = (
                mine is not None and theirs is not None and mine != theirs
            )
        return result

    def clone(self) -> TimeState:
        copy = TimeState(self._timestamp)
        copy._entity_states = dict(self._entity_states)
        return copy

    def __repr__(self) -> str:
        return f"TimeState({self._timestamp!r}, entities={len(self._entity_states)})"


class TimeBehavior(abc.ABC):
    """An object updated with time that can snapshot and restore its state."""

    @abc.abstractmethod
    def on_time_update(self, delta_time: float) -> None:
        """Advance by ``delta_time``."""

    @abc.abstractmethod
    def create_snapshot(self) -> bytes:
        """Return the current state as bytes."""

    @abc.abstractmethod
    def restore_snapshot(self, data: bytes) -> None:
        """Restore the state from bytes made by :meth:`create_snapshot`."""


def lerp(a: Any, b: Any, t: float) -> Any:
    """Linear interpolation (or extrapolation) from ``a`` to ``b`` by ``t``."""
    return a + (b - a) * t


class _CallbackTimeBehavior(TimeBehavior, Generic[_T]):
    def __init__(
        self,
        update_func: Callable[[float], None],
        get_state_func: Callable[[], _T],
        set_state_func: Callable[[_T], None],
    ) -> None:
        self._update = update_func
        self._get_state = get_state_func
        self._set_state = set_state_func

    def on_time_update(self, delta_time: float) -> None:
        self._update(delta_time)

    def create_snapshot(self) -> bytes:
        return pickle.dumps(self._get_state())

    def restore_snapshot(self, data: bytes) -> None:
        if not data:
            return
        self._set_state(pickle.loads(data))


def make_time_behavior(
    update_func: Callable[[float], None],
    get_state_func: Callable[[], _T],
    set_state_func: Callable[[_T], None],
) -> TimeBehavior:
    """Build a :class:`TimeBehavior` from update, state-getter and state-setter callables."""
    return _CallbackTimeBehavior(update_func, get_state_func, set_state_func)