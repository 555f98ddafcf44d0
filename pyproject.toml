[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mphkit"
version = "0.1.0"
description = "Minimal perfect hashing building blocks: Jenkins hashing, FCH construction, select structures and small graph utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["perfect hashing", "minimal perfect hash", "fch", "jenkins hash", "select", "succinct"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mphkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
