[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sotiles"
version = "0.1.0"
description = "A tile-based collect-and-escape puzzle game with a map editor, map validator and XPM image reader"
requires-python = ">=3.10"
keywords = ["game", "puzzle", "tiles", "map", "xpm", "pygame", "editor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sotiles = "sotiles.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sotiles"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
