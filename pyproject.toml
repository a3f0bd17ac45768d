[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smallpath"
version = "0.1.0"
description = "A small Monte Carlo path tracer for a Cornell-box scene of spheres, with a BVH and a painterly Halton-sampled variant."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "path tracing",
    "ray tracing",
    "rendering",
    "monte carlo",
    "bvh",
    "cornell box",
    "global illumination",
    "halton",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
smallpath = "smallpath.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["smallpath"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
