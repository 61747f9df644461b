[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kxo"
version = "0.1.0"
description = "Self-playing 4x4 tic-tac-toe engine with tree-search and negamax players, a terminal viewer and load averages"
requires-python = ">=3.10"
dependencies = []
keywords = ["tic-tac-toe", "mcts", "negamax", "zobrist", "game-engine"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
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
kxo-view = "kxo.viewer:main"
kxo-cpuusage = "kxo.cpuusage:main"

[tool.hatch.build.targets.wheel]
packages = ["kxo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
