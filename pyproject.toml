[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "barstate"
version = "0.1.0"
description = "State models and helpers for a desktop status bar: network, power, tray, privacy indicators and session launchers"
requires-python = ">=3.10"
dependencies = []
keywords = ["status-bar", "desktop", "networkmanager", "upower", "tray", "statusnotifier"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["barstate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
