"""Building blocks for interactive applications: components, events, lifecycles, plugins, reactive values, time snapshots, tokens, resources and a thread pool."""

__version__ = "0.1.0"

__all__ = [
    "common",
    "component",
    "event",
    "lifecycle",
    "plugin",
    "reactive",
    "resource",
    "temporal",
    "threadpool",
    "token",
]