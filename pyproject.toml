[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tabcsv"
version = "1.0.0"
description = "Read, edit and write CSV documents with labelled rows and columns and typed cell access"
requires-python = ">=3.10"
dependencies = []
keywords = ["csv", "table", "spreadsheet", "parser", "labels"]
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
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tabcsv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
