[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pushbox"
version = "0.1.0"
description = "A Sokoban-style push-box puzzle game with a pygame window"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["sokoban", "puzzle", "game", "push box", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
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

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pushbox = "pushbox.ui:main"

[tool.hatch.build.targets.wheel]
packages = ["pushbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
