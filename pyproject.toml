[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "wellformed"
version = "2.2.6"
description = "Check XML documents for well-formedness and write them out in canonical, markup or meta form"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "well-formed", "expat", "canonical", "content-type", "command-line"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wellformed = "wellformed.cli:main"

[tool.setuptools.packages.find]
include = ["wellformed*"]

[tool.pytest.ini_options]
addopts = "-ra"
