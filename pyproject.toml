[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "midiarp"
version = "0.1.0"
description = "MIDI channel messages and a hyper arpeggiator that turns held notes into timed arpeggios"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "arpeggiator", "music", "channel messages"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["midiarp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
