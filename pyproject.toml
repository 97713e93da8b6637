[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eter"
version = "0.1.0"
description = "A two-player terminal card and board game of stacking, illusions and explosions"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "board game", "card game", "terminal", "two-player"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
eter = "eter.gamemanager:main"

[tool.hatch.build.targets.wheel]
packages = ["eter"]

[tool.pytest.ini_options]
addopts = "-ra"
