[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voidcli"
version = "0.1.0"
description = "A terminal emulator core: escape-sequence parsing, a virtual screen, pseudo-terminals, command blocks, history, completion and themes"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = ["terminal", "emulator", "pty", "vt100", "ansi", "shell", "history", "completion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
voidcli = "voidcli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["voidcli"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
