[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parsort"
version = "0.1.0"
description = "Parallel partition sort with a concurrent task queue and pairwise merge steps"
requires-python = ">=3.10"
dependencies = []
keywords = ["sorting", "parallel", "threads", "merge", "queue", "barrier"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
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
parallel-sort = "parsort.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["parsort"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
