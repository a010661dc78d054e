[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minilua"
version = "0.1.0"
description = "A tiny Lua-style virtual machine core: value stack, call frames and protected calls"
requires-python = ">=3.10"
dependencies = []
keywords = ["lua", "virtual-machine", "interpreter", "stack"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minilua = "minilua.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minilua"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
