[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ocpmfit"
version = "0.1.0"
description = "Context-based fitness and precision for object-centric Petri nets against object-centric event logs"
requires-python = ">=3.10"
dependencies = [
    "networkx",
]
keywords = [
    "process mining",
    "object-centric",
    "petri net",
    "ocel",
    "conformance checking",
    "fitness",
    "precision",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ocpmfit = "ocpmfit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ocpmfit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
