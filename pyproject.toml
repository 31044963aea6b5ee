[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rogueclone"
version = "6.0.0"
description = "Dungeon, monster, item and movement engine for a classic Rogue-style game"
requires-python = ">=3.10"
dependencies = []
keywords = ["rogue", "roguelike", "dungeon", "game"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rogueclone"]

[tool.pytest.ini_options]
addopts = "-ra"
