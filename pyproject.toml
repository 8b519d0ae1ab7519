[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rockbase"
version = "1.0.0"
description = "Common robotics value types: timestamps, timeouts, temperatures, twists, wrenches, waypoints, motion commands and transforms with covariance"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["robotics", "time", "twist", "wrench", "covariance", "transform", "waypoint"]
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
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rockbase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
