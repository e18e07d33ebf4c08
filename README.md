# fabricengine

A pure-Python library of building blocks for interactive applications. It has
no third-party dependencies.

## What is in it

- `fabricengine.common`: `FabricError`, the error raised for invalid input or
  invalid state, and `unique_id(prefix)`, which returns identifiers unique
  within the process.
- `fabricengine.component`: `Component`, a node with a non-empty `id`. It holds
  properties of type bool, int, float, str or `Component` (`set_property`,
  `get_property(name, kind)`, `has_property`, `remove_property`). It also keeps
  an ordered list of children with unique ids (`add_child`, `remove_child`,
  `get_child`, `children`).
- `fabricengine.event`: `Event(type, source)` carries bool/int/float/str data
  (`set_data`, `get_data(key, kind)`, `has_data`) and the flags `handled` and
  `propagate`. `EventDispatcher` registers listeners per event type
  (`add_event_listener` returns an id, `remove_event_listener`).
  `dispatch_event` calls the listeners in order until one sets
  `event.handled`. It returns whether that happened. A listener that raises is
  logged and skipped.
- `fabricengine.lifecycle`: `LifecycleState` (CREATED, INITIALIZED, RENDERED,
  UPDATING, SUSPENDED, DESTROYED) and `lifecycle_state_to_string`.
  `LifecycleManager` allows only valid transitions
  (`LifecycleManager.is_valid_transition`) and raises `FabricError` on the
  others. It runs state hooks (`add_hook`) and transition hooks
  (`add_transition_hook`). Both kinds are removed with `remove_hook`.
- `fabricengine.plugin`: the abstract `Plugin` (`version`, `author`,
  `initialize`, `shutdown`) and `PluginManager`. `PluginManager.instance()`
  gives a process-wide manager. The manager registers factories by name and
  loads, gets, initializes and unloads plugins. `shutdown_all` shuts plugins
  down in reverse order of loading.
- `fabricengine.reactive`:
  - `Observable` notifies observers with `(old, new)` on change. No
    notification is sent while a `ReactiveTransaction` is open.
  - `ComputedValue` recomputes when an observable it read changes, and
    refuses `set`.
  - `Effect` reruns when its dependencies change, until `dispose`.
  - `ObservableCollection` sends `ObservableCollectionEvent`s on `add`,
    `remove` and `clear`.
  - `ReactiveContext` records the observables read within a scope.
- `fabricengine.temporal`:
  - `TimeState(timestamp)` stores copies of entity states
    (`set_entity_state`, `get_entity_state`, `diff`, `clone`).
  - `TimeBehavior` is the abstract interface for time-updated objects with
    byte snapshots.
  - `make_time_behavior` builds a `TimeBehavior` from three callables.
  - `lerp(a, b, t)` interpolates linearly.
- `fabricengine.token`: the `TokenType` enumeration and the `Token` dataclass
  (`type`, `value`).
- `fabricengine.resource`:
  - `ResourceState` and `resource_state_to_string`.
  - `ResourceLifecycle` is an abstract base that counts loads. Its `load` calls
    `load_impl` and counts repeat loads. Its `unload` calls `unload_impl`
    when the last user leaves.
  - `ResourceFactory` is a registry of constructors keyed by type id.
- `fabricengine.threadpool`: `ThreadPoolExecutor` runs tasks on resizable
  worker threads and returns `concurrent.futures.Future`s.
  - `submit_with_timeout` fails the future with `ThreadPoolTimeoutError` when a
    task runs too long.
  - `pause_for_testing` makes submitted tasks run at once in the caller's
    thread.

## Install

```
pip install fabricengine
```

## Examples

Events:

```python
from fabricengine.event import Event, EventDispatcher

dispatcher = EventDispatcher()

def on_click(event):
    event.handled = True

dispatcher.add_event_listener("click", on_click)
event = Event("click", "button1")
event.set_data("x", 10)
assert dispatcher.dispatch_event(event)
assert event.get_data("x", int) == 10
```

Lifecycle:

```python
from fabricengine.lifecycle import LifecycleManager, LifecycleState

manager = LifecycleManager()
manager.add_hook(LifecycleState.INITIALIZED, lambda: print("ready"))
manager.set_state(LifecycleState.INITIALIZED)
assert manager.state is LifecycleState.INITIALIZED
```

Reactive values:

```python
from fabricengine.reactive import ComputedValue, Observable

counter = Observable(0)
label = ComputedValue(lambda: f"Counter: {counter.get()}")
counter.set(1)
assert label.get() == "Counter: 1"
```

Resources:

```python
from fabricengine.resource import ResourceLifecycle, ResourceState

class Texture(ResourceLifecycle):
    def load_impl(self):
        return True

    def unload_impl(self):
        pass

texture = Texture()
assert texture.load()
assert texture.state == ResourceState.LOADED
texture.unload()
assert texture.state == ResourceState.UNLOADED
```

Thread pool:

```python
from fabricengine.threadpool import ThreadPoolExecutor

with ThreadPoolExecutor(2) as pool:
    assert pool.submit(pow, 2, 10).result() == 1024
```

## What it does not do

This is a library only.

- It has no command-line program and no command-line argument parser. The
  `token` module defines token kinds but nothing that produces tokens.
- It opens no windows or web views and renders nothing.
- It has no scene graph.
- It has no timeline that advances regions or takes automatic snapshots.
  `temporal` provides only snapshots, behaviours and interpolation.
- It has no central hub that caches or schedules resources.

## Running the tests

```
pip install "fabricengine[test]"
pytest
```