[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpncalc"
version = "1.0.0"
description = "Infix expression calculator using Reverse Polish Notation, with support for named variables"
requires-python = ">=3.10"
dependencies = []
keywords = ["calculator", "rpn", "reverse polish notation", "postfix", "prefix", "infix", "expression"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rpncalc = "rpncalc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rpncalc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
