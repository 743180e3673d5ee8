[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arana"
version = "0.1.0"
description = "Sharding rules, shard computers and shard evaluation for a database proxy"
requires-python = ">=3.10"
dependencies = []
keywords = ["sharding", "database", "proxy", "routing", "mysql"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["arana"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
