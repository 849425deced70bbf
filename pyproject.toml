[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigacq"
version = "1.0.1"
description = "Signal acquisition building blocks: serial port control, BLE characteristic decoding, command encoding, snapshots and plot helpers"
requires-python = ">=3.10"
keywords = ["serial", "ble", "plotting", "data acquisition", "snapshot", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sigacq"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
