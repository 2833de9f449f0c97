[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ocypod"
version = "0.1.0"
description = "Durations, job fields, queue settings, errors, configuration and health reports for a Redis-backed job queue"
requires-python = ">=3.11"
dependencies = []
keywords = ["job queue", "task queue", "redis", "configuration", "long running tasks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ocypod"]

[tool.hatch.build.targets.sdist]
include = ["ocypod", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
