[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vectrace"
version = "0.1.0"
description = "Fit smooth vector outlines to closed lattice paths, with greymap filtering and thresholding helpers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "vectorization",
    "tracing",
    "bitmap",
    "bezier",
    "outline",
    "greymap",
    "threshold",
]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vectrace"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
