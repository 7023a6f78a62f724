[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syslab"
version = "0.1.0"
description = "Systems programming building blocks: a fixed-size ring, a memory pool, BSD-style queues, trees, pcap reading, hugepage discovery and small socket servers."
requires-python = ">=3.10"
keywords = [
    "ring-buffer",
    "memory-pool",
    "red-black-tree",
    "binary-search-tree",
    "pcap",
    "hugepages",
    "sys-queue",
    "echo-server",
    "selectors",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Networking",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syslab-pcap = "syslab.pcap:main"
syslab-filebump = "syslab.filebump:main"
syslab-ring = "syslab.ring:main"
syslab-bintree = "syslab.bintree:main"
syslab-rbtree = "syslab.rbtree:main"
syslab-peer = "syslab.peer:main"
syslab-netevent = "syslab.netevent:main"
syslab-echo = "syslab.echo:main"

[tool.hatch.build.targets.wheel]
packages = ["syslab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
