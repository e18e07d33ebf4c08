"""Observable values, computed values, effects and observable collections."""

from __future__ import annotations

import enum
import operator
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from .common import unique_id

__all__ = [
    "ReactiveContext",
    "ReactiveTransaction",
    "Observable",
    "ComputedValue",
    "Effect",
    "ObservableCollectionEventType",
    "ObservableCollectionEvent",
    "ObservableCollection",
]

_T = TypeVar("_T")

# Observables read since the last computation started collecting; shared by
# computed values and effects, as well as by ReactiveContext.
_current_dependencies: set = set()


class _TransactionCounter:
    """Process-wide count of open transactions."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def enter(self) -> int:
        with self._lock:
            self._count += 1
            return self._count

    def leave(self) -> None:
        with self._lock:
            self._count -= 1

    @property
    def active(self) -> bool:
        with self._lock:
            return self._count > 0


_transactions = _TransactionCounter()


class ReactiveContext:
    """Per-thread context that records which observables a scope reads."""

    _local = threading.local()

    def __init__(self) -> None:
        self._tracker: Optional[set] = None

    @classmethod
    def current(cls) -> ReactiveContext:
        """Return this thread's context, creating it on first use."""
        context = getattr(cls._local, "context", None)
        if context is None:
            context = cls()
            cls._local.context = context
        return context

    @classmethod
    def reset(cls) -> None:
        """Stop any active tracking and forget all collected dependencies."""
        cls.current()._tracker = None
        _current_dependencies.clear()

    @classmethod
    def execute(cls, func: Callable[[], Any]) -> set:
        """Run ``func`` while tracking; return the observables it read."""
        dependencies: set = set()
        with cls.current().track_dependencies(dependencies):
            func()
        return dependencies

    @classmethod
    def collect_current_dependencies(cls) -> set:
        """Return a copy of the observables read since collection last started."""
        return set(_current_dependencies)

    def track_dependency(self, observable: Any) -> None:
        """Record ``observable`` in the innermost active tracking scope, if any."""
        if self._tracker is not None:
            self._tracker.add(observable)

    @contextmanager
    def track_dependencies(self, dependencies: set) -> Iterator[set]:
        """Collect observables read inside the ``with`` block into ``dependencies``."""
        previous = self._tracker
        self._tracker = dependencies
        try:
            yield dependencies
        finally:
            self._tracker = previous


class ReactiveTransaction:
    """A batch during which observable changes do not notify observers.

    Use it as a context manager; leaving the block commits the transaction
    unless it was already committed or rolled back.
    """

    def __init__(self) -> None:
        self._committed = False
        self._rolled_back = False
        self._open = True
        self._is_root = _transactions.enter() == 1

    @classmethod
    def begin(cls) -> ReactiveTransaction:
        return cls()

    def __enter__(self) -> ReactiveTransaction:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Commit if still pending and end the transaction."""
        if not self._open:
            return
        if not (self._committed or self._rolled_back):
            self.commit()
        self._open = False
        _transactions.leave()

    def commit(self) -> None:
        if self._committed or self._rolled_back:
            raise RuntimeError("Transaction already committed or rolled back")
        self._committed = True

    def rollback(self) -> None:
        if self._committed or self._rolled_back:
            raise RuntimeError("Transaction already committed or rolled back")
        self._rolled_back = True

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def is_root(self) -> bool:
        return self._is_root

    @staticmethod
    def is_transaction_active() -> bool:
        return _transactions.active


ObserverFunc = Callable[[Any, Any], None]


class Observable(Generic[_T]):
    """A value whose observers are told of every change."""

    def __init__(
        self,
        initial_value: Any = None,
        comparator: Callable[[Any, Any], bool] = operator.eq,
    ) -> None:
        self._value = initial_value
        self._comparator = comparator
        self._observers: dict[str, ObserverFunc] = {}
        self._lock = threading.Lock()

    def get(self) -> _T:
        """Return the value, recording the read for dependency tracking."""
        ReactiveContext.current().track_dependency(self)
        _current_dependencies.add(self)
        return self._value

    def set(self, new_value: _T) -> None:
        """Replace the value; observers are notified unless a transaction is open."""
        if self._comparator(self._value, new_value):
            return
        old_value = self._value
        self._value = new_value
        if not ReactiveTransaction.is_transaction_active():
            self._notify(old_value, new_value)

    def update(self, func: Callable[[_T], _T]) -> None:
        """Set the value to ``func(current value)``."""
        self.set(func(self._value))

    def observe(self, observer: ObserverFunc) -> str:
        """Call ``observer(old, new)`` on each change; return an identifier for it."""
        observer_id = unique_id("obs_")
        with self._lock:
            self._observers[observer_id] = observer
        return observer_id

    def unobserve(self, observer_id: str) -> bool:
        with self._lock:
            return self._observers.pop(observer_id, None) is not None

    def _notify(self, old_value: Any, new_value: Any) -> None:
        with self._lock:
            observers = list(self._observers.values())
        for observer in observers:
            observer(old_value, new_value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class ComputedValue(Observable[_T]):
    """A read-only value derived from other observables and kept up to date."""

    def __init__(self, compute_func: Callable[[], _T]) -> None:
        super().__init__()
        self._compute = compute_func
        self._subscriptions: list[tuple[Observable[Any], str]] = []
        self._recalculate()

    def set(self, new_value: Any) -> None:
        raise RuntimeError("Cannot set a computed value directly")

    def invalidate(self) -> None:
        """Recompute the value and refresh the dependencies."""
        self._recalculate()

    @property
    def dependencies(self) -> frozenset:
        return frozenset(dep for dep, _ in self._subscriptions)

    def _on_dependency_changed(self, _old: Any, _new: Any) -> None:
        self.invalidate()

    def _unsubscribe(self) -> None:
        for dependency, observer_id in self._subscriptions:
            dependency.unobserve(observer_id)
        self._subscriptions.clear()

    def _recalculate(self) -> None:
        self._unsubscribe()
        _current_dependencies.clear()
        new_value = self._compute()
        dependencies = [dep for dep in _current_dependencies if dep is not self]
        for dependency in dependencies:
            observer_id = dependency.observe(self._on_dependency_changed)
            self._subscriptions.append((dependency, observer_id))
        old_value = self._value
        self._value = new_value
        self._notify(old_value, new_value)


class Effect:
    """Runs a function now and again whenever an observable it read changes."""

    def __init__(self, effect_func: Callable[[], Any]) -> None:
        self._effect = effect_func
        self._subscriptions: list[tuple[Observable[Any], str]] = []
        self._active = True
        self.run()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def dependencies(self) -> frozenset:
        return frozenset(dep for dep, _ in self._subscriptions)

    def run(self) -> None:
        """Run the effect and resubscribe to what it read; no-op once disposed."""
        if not self._active:
            return
        self._cleanup()
        _current_dependencies.clear()
        self._effect()
        for dependency in list(_current_dependencies):
            observer_id = dependency.observe(self._on_dependency_changed)
            self._subscriptions.append((dependency, observer_id))

    def dispose(self) -> None:
        """Stop the effect for good."""
        self._cleanup()
        self._active = False

    def _on_dependency_changed(self, _old: Any, _new: Any) -> None:
        if self._active:
            self.run()

    def _cleanup(self) -> None:
        for dependency, observer_id in self._subscriptions:
            dependency.unobserve(observer_id)
        self._subscriptions.clear()


class ObservableCollectionEventType(enum.Enum):
    ADD = enum.auto()
    REMOVE = enum.auto()
    REPLACE = enum.auto()
    CLEAR = enum.auto()


@dataclass(frozen=True)
class ObservableCollectionEvent(Generic[_T]):
    """A change to an :class:`ObservableCollection`."""

    type: ObservableCollectionEventType
    item: _T
    old_item: Optional[_T] = None
    index: int = 0


CollectionObserver = Callable[[ObservableCollectionEvent], None]


class ObservableCollection(Generic[_T]):
    """An ordered list of items whose observers hear of additions and removals."""

    def __init__(self, items: Iterable[_T] = ()) -> None:
        self._items: list[_T] = list(items)
        self._observers: dict[str, CollectionObserver] = {}
        self._lock = threading.Lock()

    def add(self, item: _T) -> None:
        self._items.append(item)
        self._notify(
            ObservableCollectionEvent(
                ObservableCollectionEventType.ADD, item, index=len(self._items) - 1
            )
        )

    def remove(self, item: _T) -> bool:
        """Remove the first item equal to ``item``; return whether one was found."""
        for index, existing in enumerate(self._items):
            if existing == item:
                del self._items[index]
                self._notify(
                    ObservableCollectionEvent(
                        ObservableCollectionEventType.REMOVE, item, index=index
                    )
                )
                return True
        return False

    def clear(self) -> None:
        """Remove every item, sending one removal event per item in order."""
        removed = self._items
        self._items = []
        for index, item in enumerate(removed):
            self._notify(
                ObservableCollectionEvent(
                    ObservableCollectionEventType.REMOVE, item, index=index
                )
            )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[_T]:
        return iter(list(self._items))

    def observe(self, observer: CollectionObserver) -> str:
        observer_id = unique_id("colobs_")
        with self._lock:
            self._observers[observer_id] = observer
        return observer_id

    def unobserve(self, observer_id: str) -> bool:
        with self._lock:
            return self._observers.pop(observer_id, None) is not None

    def at(self, index: int) -> _T:
        """Return the item at ``index``; raise IndexError when out of range."""
        if index < 0 or index >= len(self._items):
            raise IndexError(f"index {index} out of range for collection of size {len(self._items)}")
        return self._items[index]

    def _notify(self, event: ObservableCollectionEvent) -> None:
        with self._lock:
            observers = list(self._observers.values())
        for observer in observers:
            observer(event)