[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "no2cc"
version = "0.1.0"
description = "A small compiler for a C-like language that emits x86-64 assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "x86-64", "assembly", "register-allocation", "intermediate-representation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
no2cc = "no2cc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["no2cc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
