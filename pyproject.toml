[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "succinctpy"
version = "0.1.0"
description = "Succinct data structures: broadword bit tricks, select directories, Elias-Fano, gamma-coded vectors and balanced parentheses."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "succinct",
    "elias-fano",
    "gamma-code",
    "rank",
    "select",
    "balanced-parentheses",
    "range-minimum-query",
    "bit-vector",
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["succinctpy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
