[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splatimport"
version = "0.1.0"
description = "Reader for 3D Gaussian splat assets stored as binary PLY files"
requires-python = ">=3.10"
dependencies = []
keywords = ["gaussian-splatting", "3dgs", "ply", "point-cloud", "graphics"]
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
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["splatimport"]

[tool.pytest.ini_options]
addopts = "-ra"
