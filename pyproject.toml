[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "h264nal"
version = "0.1.0"
description = "Split H.264 Annex B streams into NAL units and decode SPS and PPS headers"
requires-python = ">=3.10"
dependencies = []
keywords = ["h264", "avc", "nal", "nalu", "sps", "pps", "annex-b", "video", "bitstream", "exp-golomb"]
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
    "Topic :: Multimedia :: Video",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
h264nal = "h264nal.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["h264nal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
