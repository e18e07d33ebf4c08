import threading

import pytest

from fabricengine.reactive import (
    ComputedValue,
    Effect,
    Observable,
    ObservableCollection,
    ObservableCollectionEvent,
    ObservableCollectionEventType,
    ReactiveContext,
    ReactiveTransaction,
)


@pytest.fixture(autouse=True)
def _clean_context():
    ReactiveContext.reset()
    yield
    ReactiveContext.reset()


def _recorder():
    calls = []

    def observer(old, new):
        calls.append((old, new))

    return calls, observer


# Observable


def test_observable_initial_value():
    assert Observable(5).get() == 5
    assert Observable().get() is None


def test_set_notifies_with_old_and_new():
    obs = Observable(1)
    calls, observer = _recorder()
    obs.observe(observer)
    obs.set(2)
    assert obs.get() == 2
    assert calls == [(1, 2)]


def test_set_same_value_does_not_notify():
    obs = Observable("same")
    calls, observer = _recorder()
    obs.observe(observer)
    obs.set("same")
    assert obs.get() == "same"
    obs.set("other")
    assert obs.get() == "other"
    assert calls == [("same", "other")]


def test_custom_comparator_suppresses_change():
    obs = Observable("hello", comparator=lambda a, b: a.lower() == b.lower())
    calls, observer = _recorder()
    obs.observe(observer)
    obs.set("HELLO")
    assert obs.get() == "hello"
    assert calls == []


def test_update_applies_function():
    obs = Observable("abc")
    calls, observer = _recorder()
    obs.observe(observer)
    obs.update(str.upper)
    assert obs.get() == "ABC"
    assert calls == [("abc", "ABC")]


def test_unobserve():
    obs = Observable(0)
    calls, observer = _recorder()
    observer_id = obs.observe(observer)
    assert observer_id.startswith("obs_")
    assert obs.unobserve(observer_id) is True
    assert obs.unobserve(observer_id) is False
    obs.set(7)
    assert calls == []


def test_observer_ids_are_unique():
    obs = Observable(0)
    ids = {obs.observe(lambda o, n: None) for _ in range(10)}
    assert len(ids) == 10


# ReactiveContext


def test_current_context_is_per_thread():
    main = ReactiveContext.current()
    assert ReactiveContext.current() is main
    other = []
    thread = threading.Thread(target=lambda: other.append(ReactiveContext.current()))
    thread.start()
    thread.join()
    assert other[0] is not main


def test_execute_returns_read_observables():
    a = Observable(1)
    b = Observable(2)
    c = Observable(3)
    deps = ReactiveContext.execute(lambda: (a.get(), b.get()))
    assert deps == {a, b}
    assert c not in deps


def test_track_dependencies_scope_ends_on_exit():
    a = Observable(1)
    b = Observable(2)
    deps = set()
    context = ReactiveContext.current()
    with context.track_dependencies(deps) as collected:
        a.get()
    b.get()
    assert collected is deps
    assert deps == {a}


def test_nested_tracking_restores_outer_scope():
    a = Observable(1)
    b = Observable(2)
    outer, inner = set(), set()
    context = ReactiveContext.current()
    with context.track_dependencies(outer):
        with context.track_dependencies(inner):
            a.get()
        b.get()
    assert inner == {a}
    assert outer == {b}


def test_collect_and_reset_current_dependencies():
    a = Observable(1)
    a.get()
    assert a in ReactiveContext.collect_current_dependencies()
    ReactiveContext.reset()
    assert ReactiveContext.collect_current_dependencies() == set()


def test_track_dependency_without_scope_is_ignored():
    deps = set()
    context = ReactiveContext.current()
    context.track_dependency(Observable(1))
    with context.track_dependencies(deps):
        pass
    assert deps == set()


# ReactiveTransaction


def test_transaction_active_only_inside_block():
    assert not ReactiveTransaction.is_transaction_active()
    with ReactiveTransaction.begin() as tx:
        assert ReactiveTransaction.is_transaction_active()
        assert tx.is_root
    assert not ReactiveTransaction.is_transaction_active()
    assert tx.committed


def test_transaction_suppresses_notifications():
    obs = Observable(1)
    calls, observer = _recorder()
    obs.observe(observer)
    with ReactiveTransaction():
        obs.set(2)
    assert obs.get() == 2
    assert calls == []


def test_nested_transactions():
    with ReactiveTransaction() as outer:
        with ReactiveTransaction() as inner:
            assert not inner.is_root
        assert ReactiveTransaction.is_transaction_active()
    assert outer.is_root
    assert not ReactiveTransaction.is_transaction_active()


def test_commit_twice_raises():
    with ReactiveTransaction() as tx:
        tx.commit()
        with pytest.raises(RuntimeError):
            tx.commit()
        with pytest.raises(RuntimeError):
            tx.rollback()


def test_rollback_then_exit_keeps_rolled_back():
    with ReactiveTransaction() as tx:
        tx.rollback()
        with pytest.raises(RuntimeError):
            tx.commit()
    assert tx.rolled_back
    assert not tx.committed
    assert not ReactiveTransaction.is_transaction_active()


def test_close_is_idempotent():
    tx = ReactiveTransaction.begin()
    tx.close()
    tx.close()
    assert not ReactiveTransaction.is_transaction_active()


# ComputedValue


def test_computed_value_tracks_dependency():
    counter = Observable(0)
    text = ComputedValue(lambda: "Counter: " + str(counter.get()))
    assert text.get() == "Counter: 0"
    counter.set(5)
    assert text.get() == "Counter: 5"


def test_computed_value_over_two_observables():
    a = Observable(1)
    b = Observable("x")
    pair = ComputedValue(lambda: (a.get(), b.get()))
    assert pair.get() == (1, "x")
    assert pair.dependencies == frozenset({a, b})
    b.set("y")
    assert pair.get() == (1, "y")


def test_computed_value_cannot_be_set():
    computed = ComputedValue(lambda: 1)
    with pytest.raises(RuntimeError):
        computed.set(2)


def test_computed_value_notifies_its_observers():
    source = Observable("a")
    computed = ComputedValue(lambda: source.get().upper())
    calls, observer = _recorder()
    observer_id = computed.observe(observer)
    assert observer_id.startswith("obs_")
    source.set("b")
    assert computed.get() == "B"
    assert calls == [("A", "B")]


def test_computed_recomputes_once_per_change():
    source = Observable(0)
    runs = []

    def compute():
        runs.append(source.get())
        return source.get()

    computed = ComputedValue(compute)
    for value in (10, 20, 30):
        before = len(runs)
        source.set(value)
        assert len(runs) == before + 1
        assert computed.get() == value


def test_invalidate_recomputes():
    runs = []
    computed = ComputedValue(lambda: runs.append(None) or len(runs))
    before = len(runs)
    computed.invalidate()
    assert len(runs) == before + 1
    assert computed.get() == len(runs)


def test_computed_chain():
    base = Observable("a")
    first = ComputedValue(lambda: base.get() + "!")
    second = ComputedValue(lambda: "<" + first.get() + ">")
    base.set("b")
    assert first.get() == "b!"
    assert second.get() == "<b!>"


# Effect


def test_effect_runs_immediately_and_on_change():
    source = Observable("start")
    seen = []
    Effect(lambda: seen.append(source.get()))
    assert seen == ["start"]
    source.set("next")
    assert seen == ["start", "next"]


def test_effect_dispose_stops_runs():
    source = Observable(1)
    seen = []
    effect = Effect(lambda: seen.append(source.get()))
    effect.dispose()
    source.set(2)
    effect.run()
    assert seen == [1]
    assert not effect.active
    assert effect.dependencies == frozenset()


def test_effect_follows_changing_dependencies():
    flag = Observable(True)
    a = Observable("a1")
    b = Observable("b1")
    seen = []
    effect = Effect(lambda: seen.append(a.get() if flag.get() else b.get()))
    flag.set(False)
    assert effect.dependencies == frozenset({flag, b})
    count = len(seen)
    a.set("a2")
    assert len(seen) == count
    b.set("b2")
    assert seen[-1] == "b2"


def test_effect_manual_run():
    source = Observable("v")
    seen = []
    effect = Effect(lambda: seen.append(source.get()))
    effect.run()
    assert seen == ["v", "v"]


# ObservableCollection


def test_collection_add_event():
    collection = ObservableCollection(["a"])
    events = []
    collection.observe(events.append)
    collection.add("b")
    assert len(collection) == 2
    assert collection.at(1) == "b"
    assert events == [ObservableCollectionEvent(ObservableCollectionEventType.ADD, "b", index=1)]


def test_collection_remove_event():
    collection = ObservableCollection(["a", "b", "c"])
    events = []
    collection.observe(events.append)
    assert collection.remove("b") is True
    assert list(collection) == ["a", "c"]
    assert events == [ObservableCollectionEvent(ObservableCollectionEventType.REMOVE, "b", index=1)]
    assert collection.remove("zzz") is False
    assert len(events) == 1


def test_collection_clear_emits_removals_in_order():
    collection = ObservableCollection(["x", "y"])
    events = []
    collection.observe(events.append)
    collection.clear()
    assert len(collection) == 0
    assert [(e.type, e.item, e.index) for e in events] == [
        (ObservableCollectionEventType.REMOVE, "x", 0),
        (ObservableCollectionEventType.REMOVE, "y", 1),
    ]


def test_collection_at_out_of_range():
    collection = ObservableCollection(["only"])
    assert collection.at(0) == "only"
    with pytest.raises(IndexError):
        collection.at(1)
    with pytest.raises(IndexError):
        collection.at(-1)


def test_collection_unobserve():
    collection = ObservableCollection()
    events = []
    observer_id = collection.observe(events.append)
    assert observer_id.startswith("colobs_")
    assert collection.unobserve(observer_id) is True
    assert collection.unobserve(observer_id) is False
    collection.add("item")
    assert events == []


def test_collection_event_defaults():
    event = ObservableCollectionEvent(ObservableCollectionEventType.CLEAR, "i")
    assert event.old_item is None
    assert event.index == 0