"""Plugins and the manager that registers, loads and shuts them down."""

from __future__ import annotations

import abc
import logging
import threading
from typing import Callable, ClassVar, Optional

from .common import FabricError

__all__ = ["Plugin", "PluginFactory", "PluginManager"]

_log = logging.getLogger(__name__)


class Plugin(abc.ABC):
    """Base class for plugins managed by :class:`PluginManager`."""

    @property
    @abc.abstractmethod
    def version(self) -> str:
        """The plugin's version string."""

    @property
    @abc.abstractmethod
    def author(self) -> str:
        """The plugin's author."""

    @abc.abstractmethod
    def initialize(self) -> bool:
        """Prepare the plugin for use; return whether it succeeded."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Release everything the plugin holds."""


PluginFactory = Callable[[], Optional[Plugin]]


class PluginManager:
    """Registry of plugin factories and of the plugins loaded from them."""

    _instance: ClassVar[PluginManager | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._factories: dict[str, PluginFactory] = {}
        self._loaded: dict[str, Plugin] = {}
        self._lock = threading.Lock()

    @classmethod
    def instance(cls) -> PluginManager:
        """Return the process-wide manager, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def register_plugin(self, name: str, factory: PluginFactory) -> None:
        """Register ``factory`` under ``name``; names may be registered only once."""
        with self._lock:
            if not name:
                raise FabricError("Plugin name cannot be empty")
            if factory is None or not callable(factory):
                raise FabricError("Plugin factory cannot be null")
            if name in self._factories:
                raise FabricError(f"Plugin '{name}' is already registered")
            self._factories[name] = factory
        _log.debug("Registered plugin '%s'", name)

    def load_plugin(self, name: str) -> bool:
        """Create and keep the plugin registered as ``name``; return whether it is loaded."""
        with self._lock:
            if name in self._loaded:
                _log.warning("Plugin '%s' is already loaded", name)
                return True
            factory = self._factories.get(name)
            if factory is None:
                _log.error("Plugin '%s' is not registered", name)
                return False
            try:
                plugin = factory()
                if plugin is None:
                    _log.error("Failed to create plugin '%s'", name)
                    return False
                self._loaded[name] = plugin
                _log.info(
                    "Loaded plugin '%s' (%s) by %s", name, plugin.version, plugin.author
                )
                return True
            except Exception as exc:
                self._loaded.pop(name, None)
                _log.error("Exception loading plugin '%s': %s", name, exc)
                return False

    def unload_plugin(self, name: str) -> bool:
        """Remove the loaded plugin ``name`` and shut it down; return whether that worked."""
        with self._lock:
            plugin = self._loaded.pop(name, None)
            if plugin is None:
                _log.warning("Plugin '%s' is not loaded", name)
                return False
        try:
            plugin.shutdown()
        except Exception as exc:
            _log.error("Exception unloading plugin '%s': %s", name, exc)
            return False
        _log.info("Unloaded plugin '%s'", name)
        return True

    def get_plugin(self, name: str) -> Plugin | None:
        with self._lock:
            return self._loaded.get(name)

    @property
    def plugins(self) -> dict[str, Plugin]:
        """A copy of the loaded plugins keyed by name."""
        with self._lock:
            return dict(self._loaded)

    def initialize_all(self) -> bool:
        """Initialize every loaded plugin; return True only if all succeeded."""
        with self._lock:
            plugins = list(self._loaded.items())
        success = True
        for name, plugin in plugins:
            try:
                if plugin.initialize():
                    _log.info("Initialized plugin '%s'", name)
                else:
                    _log.error("Failed to initialize plugin '%s'", name)
                    success = False
            except Exception as exc:
                _log.error("Exception initializing plugin '%s': %s", name, exc)
                success = False
        return success

    def shutdown_all(self) -> None:
        """Unload every plugin, shutting them down in reverse order of loading."""
        with self._lock:
            plugins = list(self._loaded.items())
            self._loaded.clear()
        for name, plugin in reversed(plugins):
            try:
                plugin.shutdown()
                _log.info("Shut down plugin '%s'", name)
            except Exception as exc:
                _log.error("Exception shutting down plugin '%s': %s", name, exc)