[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dotf"
version = "0.1.0"
description = "Game-logic core of a robot defence game: sprites, robots with abilities, and a UDP state-sync client"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "sprites", "robots", "udp", "multiplayer"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dotf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
