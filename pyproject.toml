[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quicksorty"
version = "2.0.0"
description = "In-place quicksort with optional worker threads for lists of numbers, strings, bytes and custom collections"
requires-python = ">=3.10"
dependencies = []
keywords = ["sort", "quicksort", "concurrent", "threads", "in-place", "lesswap"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["quicksorty"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
