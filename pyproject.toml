[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "knapsacksolver"
version = "0.1.0"
description = "Bellman dynamic programming algorithms for the 0-1 knapsack problem"
requires-python = ">=3.10"
dependencies = []
keywords = ["knapsack", "optimization", "dynamic programming", "combinatorial optimization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
knapsacksolver = "knapsacksolver.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["knapsacksolver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
