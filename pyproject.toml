[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pokefight"
version = "0.1.0"
description = "Turn-based double battle game: HTTP lobby and command-exchange server, client helpers and HUD layout."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "turn-based", "battle", "http", "lobby", "multiplayer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pokefight-server = "pokefight.httpserver:main"

[tool.hatch.build.targets.wheel]
packages = ["pokefight"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
