[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "movieclient"
version = "1.0.0"
description = "Interactive command-line client for a movie library REST service over plain HTTP/1.1"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "rest", "client", "cli", "movies", "library", "cookies", "jwt"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
movieclient = "movieclient.cli:main"

[tool.setuptools.packages.find]
include = ["movieclient*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
