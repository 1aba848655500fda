[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "videoguard"
version = "0.1.0"
description = "Watches window titles, closes the browser on blacklisted content and enforces scheduled breaks"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["monitoring", "browser", "window-title", "blacklist", "break-reminder"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
videoguard = "videoguard.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["videoguard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
