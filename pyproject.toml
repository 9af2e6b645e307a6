[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vix"
version = "0.1.0"
description = "A small modal terminal text editor with vi-style normal and insert modes"
requires-python = ">=3.10"
keywords = ["editor", "text-editor", "terminal", "vi", "modal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vix = "vix.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vix"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
