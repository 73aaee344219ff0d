[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rkgplayback"
version = "0.1.0"
description = "Decode Mario Kart Wii ghost (RKG) files into GameCube controller input, frame by frame"
requires-python = ">=3.10"
dependencies = []
keywords = ["rkg", "ghost", "mario kart wii", "yaz1", "gamecube", "joybus", "tas"]
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
    "Topic :: Games/Entertainment",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rkgplayback"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
