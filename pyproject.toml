[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smogsim"
version = "0.1.1"
description = "Verlet particle physics with breakable links and a tank-battle game controller"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "particles", "verlet", "simulation", "game", "tanks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["smogsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
