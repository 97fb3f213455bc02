[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "documcp"
version = "0.1.0"
description = "Crawl documentation sites, index their text in memory and serve full-text search over HTTP."
requires-python = ">=3.10"
dependencies = [
    "beautifulsoup4",
]
keywords = ["crawler", "documentation", "search", "inverted-index", "full-text"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
documcp = "documcp.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["documcp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
