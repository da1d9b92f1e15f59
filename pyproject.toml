[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boxworld"
version = "0.1.0"
description = "A small 3D box world with a walking player, gravity and swept collision, drawn with pygame."
requires-python = ">=3.10"
keywords = ["game", "physics", "collision", "pygame", "3d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
boxworld = "boxworld.app:main"

[tool.hatch.build.targets.wheel]
packages = ["boxworld"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
