[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "olake"
version = "0.1.0"
description = "Building blocks for replicating MongoDB, MySQL and PostgreSQL data: connection configs, chunk planning and change-capture helpers"
requires-python = ">=3.10"
dependencies = [
    "pymongo",
]
keywords = ["replication", "cdc", "mongodb", "mysql", "postgresql", "backfill", "etl"]
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
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["olake"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
