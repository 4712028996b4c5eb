[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kafkit"
version = "0.1.0"
description = "Building blocks of a Kafka client: wire codecs, compression, error codes, consumer assignments and producer partitioning"
requires-python = ">=3.10"
dependencies = []
keywords = ["kafka", "protocol", "codec", "snappy", "gzip", "partitioner", "xxhash"]
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
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kafkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
