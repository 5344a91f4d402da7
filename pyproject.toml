[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "convexvol"
version = "0.1.0"
description = "Volume estimation and random sampling for convex bodies: zonotopes, ball intersections and cooling-ball volume approximation."
requires-python = ">=3.10"
keywords = ["convex", "polytope", "zonotope", "volume", "sampling", "random walk", "hit-and-run"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["convexvol"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
