[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysprog"
version = "0.1.0"
description = "A small command shell with an incremental line parser, cooperative coroutine file sorting and k-way merging"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "parser", "coroutines", "merge sort", "k-way merge", "scheduler"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: System Shells",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sysprog-shell = "sysprog.shell:main"
sysprog-sortfiles = "sysprog.sortfiles:main"

[tool.hatch.build.targets.wheel]
packages = ["sysprog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
