[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sporkle"
version = "0.1.0"
description = "Text-processing helpers for an IRC bot: calculators, decisions, factoids, karma, seen replies, URL codes and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["irc", "bot", "karma", "factoids", "netmask", "chat"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat :: Internet Relay Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sporkle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
