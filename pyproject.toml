[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilebar"
version = "1.0.0"
description = "A tiling window layout engine and system information components for a status line"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["window manager", "tiling", "status bar", "statusline", "system monitor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tilebar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
