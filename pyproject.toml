[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glint"
version = "0.1.0"
description = "Core rules of an ephemeral entity layer: expiration tracking, gas and state accounting, calldata slicing and sidecar helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["ephemeral", "storage", "entities", "expiration", "rlp", "gas", "sidecar"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["glint"]

[tool.hatch.build.targets.sdist]
include = ["glint", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
