[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "ephemerides"
version = "0.1.0"
description = "Star catalog readers, session data and sky-chart mathematics for planning observations of stars and variable stars"
requires-python = ">=3.10"
dependencies = []
keywords = ["astronomy", "ephemeris", "variable stars", "star catalog", "VSX", "BSC", "quaternion", "julian date"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["ephemerides*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
