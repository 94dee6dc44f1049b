[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consolestatus"
version = "0.1.0"
description = "Build Degraded, Progressing, Available and Upgradeable operator conditions and flush them to an operator status."
requires-python = ">=3.10"
dependencies = []
keywords = ["operator", "status", "conditions", "kubernetes", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["consolestatus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
