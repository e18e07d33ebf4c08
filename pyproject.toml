[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fabricengine"
version = "0.1.0"
description = "Building blocks for interactive applications: components, events, lifecycles, plugins, reactive values, time snapshots, resources and a thread pool"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "components",
    "events",
    "lifecycle",
    "plugins",
    "reactive",
    "observable",
    "snapshots",
    "resources",
    "thread pool",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fabricengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
