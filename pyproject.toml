[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eqisolator"
version = "1.0.0"
description = "A transparent four-band isolator equalizer with smoothed gain and bypass controls"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "equalizer", "eq", "isolator", "dsp", "crossover", "biquad"]
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
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["eqisolator"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
