[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gdmltools"
version = "0.1.0"
description = "Build benchmark detector geometries and write, read and trim them as GDML files"
requires-python = ">=3.10"
dependencies = []
keywords = ["gdml", "geometry", "detector", "physics", "calorimeter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Text Processing :: Markup :: XML",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gdml-gen = "gdmltools.gdml_gen:main"
gdml-subset = "gdmltools.subset:main"

[tool.hatch.build.targets.wheel]
packages = ["gdmltools"]

[tool.pytest.ini_options]
addopts = "-ra"
