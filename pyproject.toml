[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gameforge"
version = "0.1.0"
description = "Core building blocks for a small game engine: events, input, clock, logging, files, strings, freelist allocation, transforms and a camera."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["game", "engine", "events", "input", "camera", "transform", "freelist"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gameforge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
