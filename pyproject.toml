[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agensgraph"
version = "0.1.0"
description = "Read AgensGraph graph ids, vertices, edges, paths and their arrays from the text a database driver returns."
requires-python = ">=3.10"
dependencies = []
keywords = ["agensgraph", "graph", "database", "postgresql", "graphid", "vertex", "edge", "graphpath"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["agensgraph"]

[tool.pytest.ini_options]
addopts = "-ra"
