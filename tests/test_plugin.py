import pytest

from fabricengine.common import FabricError, unique_id
from fabricengine.plugin import Plugin, PluginManager


class RecordingPlugin(Plugin):
    def __init__(self, name, log, init_result=True, fail_shutdown=False):
        self.name = name
        self.log = log
        self.init_result = init_result
        self.fail_shutdown = fail_shutdown

    @property
    def version(self):
        return "1.0"

    @property
    def author(self):
        return "tester"

    def initialize(self):
        self.log.append(("init", self.name))
        return self.init_result

    def shutdown(self):
        self.log.append(("shutdown", self.name))
        if self.fail_shutdown:
            raise RuntimeError("boom")


@pytest.fixture
def manager():
    return PluginManager()


@pytest.fixture
def log():
    return []


def test_register_and_load(manager, log):
    manager.register_plugin("alpha", lambda: RecordingPlugin("alpha", log))
    assert manager.get_plugin("alpha") is None
    assert manager.load_plugin("alpha") is True
    plugin = manager.get_plugin("alpha")
    assert plugin.name == "alpha"
    assert list(manager.plugins) == ["alpha"]


def test_register_empty_name_raises(manager, log):
    with pytest.raises(FabricError):
        manager.register_plugin("", lambda: RecordingPlugin("x", log))


def test_register_null_factory_raises(manager):
    with pytest.raises(FabricError):
        manager.register_plugin("alpha", None)


def test_register_duplicate_raises(manager, log):
    manager.register_plugin("alpha", lambda: RecordingPlugin("alpha", log))
    with pytest.raises(FabricError):
        manager.register_plugin("alpha", lambda: RecordingPlugin("alpha", log))


def test_load_unregistered_returns_false(manager):
    assert manager.load_plugin("missing") is False
    assert manager.plugins == {}


def test_load_twice_keeps_same_instance(manager, log):
    manager.register_plugin("alpha", lambda: RecordingPlugin("alpha", log))
    assert manager.load_plugin("alpha")
    first = manager.get_plugin("alpha")
    assert manager.load_plugin("alpha") is True
    assert manager.get_plugin("alpha") is first


def test_factory_returning_none_fails(manager):
    manager.register_plugin("empty", lambda: None)
    assert manager.load_plugin("empty") is False
    assert manager.get_plugin("empty") is None


def test_factory_raising_fails(manager):
    def factory():
        raise RuntimeError("cannot build")

    manager.register_plugin("broken", factory)
    assert manager.load_plugin("broken") is False
    assert manager.get_plugin("broken") is None


def test_unload_shuts_down(manager, log):
    manager.register_plugin("alpha", lambda: RecordingPlugin("alpha", log))
    manager.load_plugin("alpha")
    assert manager.unload_plugin("alpha") is True
    assert log == [("shutdown", "alpha")]
    assert manager.get_plugin("alpha") is None
    assert manager.unload_plugin("alpha") is False


def test_unload_with_failing_shutdown(manager, log):
    manager.register_plugin(
        "alpha", lambda: RecordingPlugin("alpha", log, fail_shutdown=True)
    )
    manager.load_plugin("alpha")
    assert manager.unload_plugin("alpha") is False
    assert manager.get_plugin("alpha") is None


def test_initialize_all(manager, log):
    manager.register_plugin("a", lambda: RecordingPlugin("a", log))
    manager.register_plugin("b", lambda: RecordingPlugin("b", log))
    manager.load_plugin("a")
    manager.load_plugin("b")
    assert manager.initialize_all() is True
    assert sorted(log) == [("init", "a"), ("init", "b")]


def test_initialize_all_reports_failure(manager, log):
    manager.register_plugin("a", lambda: RecordingPlugin("a", log))
    manager.register_plugin("b", lambda: RecordingPlugin("b", log, init_result=False))
    manager.load_plugin("a")
    manager.load_plugin("b")
    assert manager.initialize_all() is False
    assert ("init", "a") in log


def test_shutdown_all_reverse_order(manager, log):
    for name in ("a", "b", "c"):
        manager.register_plugin(name, lambda n=name: RecordingPlugin(n, log))
        manager.load_plugin(name)
    manager.shutdown_all()
    assert log == [("shutdown", "c"), ("shutdown", "b"), ("shutdown", "a")]
    assert manager.plugins == {}


def test_plugins_returns_copy(manager, log):
    manager.register_plugin("a", lambda: RecordingPlugin("a", log))
    manager.load_plugin("a")
    snapshot = manager.plugins
    snapshot.clear()
    assert manager.get_plugin("a") is not None
    assert "a" in manager.plugins


def test_instance_is_singleton(log):
    name = unique_id("probe_")
    first = PluginManager.instance()
    first.register_plugin(name, lambda: RecordingPlugin(name, log))
    assert first.load_plugin(name) is True

    plugin = PluginManager.instance().get_plugin(name)
    assert plugin is first.get_plugin(name)
    assert plugin.name == name
    assert PluginManager().get_plugin(name) is None

    assert PluginManager.instance().unload_plugin(name) is True
    assert first.get_plugin(name) is None