[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commdetect"
version = "0.1.0"
description = "Graph community detection (Louvain variants), graph coloring and multiple-stream random numbers in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph",
    "clustering",
    "community detection",
    "louvain",
    "modularity",
    "graph coloring",
    "random streams",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["commdetect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
