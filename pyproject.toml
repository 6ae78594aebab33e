[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xuangomoku"
version = "0.1.0"
description = "Gomoku (five in a row) game server with an AI opponent and player matching, plus an HTTP client library"
requires-python = ">=3.10"
keywords = ["gomoku", "five-in-a-row", "board-game", "game-server", "http"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
xuangomoku-server = "xuangomoku.server:main"

[tool.hatch.build.targets.wheel]
packages = ["xuangomoku"]

[tool.hatch.build.targets.sdist]
include = ["xuangomoku", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
