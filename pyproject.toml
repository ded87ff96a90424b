[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "banexg"
version = "0.1.0"
description = "Trading data models, order book sides, decimal precision rounding, timeframe arithmetic and JSON helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "trading",
    "exchange",
    "order book",
    "precision",
    "timeframe",
    "kline",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["banexg"]

[tool.hatch.build.targets.sdist]
include = [
    "banexg",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
