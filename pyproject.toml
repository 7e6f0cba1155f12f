[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "novelstage"
version = "0.1.0"
description = "A small visual novel engine driven by JSON scripts, with backgrounds, sprites, fades, choices, backlog and audio."
requires-python = ">=3.10"
keywords = ["visual novel", "game", "pygame", "engine", "story"]
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
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
novelstage = "novelstage.app:main"

[tool.hatch.build.targets.wheel]
packages = ["novelstage"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
