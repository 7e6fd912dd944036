[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iftgraph"
version = "0.1.0"
description = "Adjacency-list graphs, graph-based image segmentation and the Image Foresting Transform"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph",
    "adjacency list",
    "dijkstra",
    "segmentation",
    "union-find",
    "image foresting transform",
    "ift",
    "bucket queue",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["iftgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
