[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chordimouse"
version = "0.1.0"
description = "Chord keyboard and joystick mouse logic: input detection, cursor acceleration, key profiles and configuration storage"
requires-python = ">=3.10"
dependencies = []
keywords = ["chord", "keyboard", "mouse", "joystick", "hid", "cursor", "embedded"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["chordimouse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
