[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simpleio"
version = "0.1.0"
description = "Growable byte buffers, buffer pools and a unified stream interface for files"
requires-python = ">=3.10"
dependencies = []
keywords = ["io", "buffer", "stream", "file", "pool", "mmap", "lock"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simpleio"]

[tool.pytest.ini_options]
addopts = "-ra"
