[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dtxkit"
version = "0.1.0"
description = "Building blocks for distributed transaction benchmarks: hashing, workload generators, latency histograms, configuration, concurrency helpers and a coroutine request scheduler."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "transactions",
    "benchmark",
    "murmurhash",
    "zipf",
    "latency",
    "histogram",
    "coroutine",
    "scheduler",
    "split-ordered-list",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Benchmark",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dtxkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
