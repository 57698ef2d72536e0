[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ckbcli"
version = "0.1.0"
description = "Building blocks for a CKB command-line client: argument parsing, coloured JSON and YAML output, settings and completion."
requires-python = ">=3.10"
dependencies = []
keywords = ["ckb", "cli", "yaml", "json", "completion", "argument-parsing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ckbcli"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
