[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "panpcs"
version = "0.1.0"
description = "Request signing, error decoding, expiring caches and response models for the Baidu PCS and Pan web APIs."
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["baidu", "pcs", "netdisk", "cloud-storage", "signature", "cache"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
panpcs-ndk-gcc = "panpcs.ndkbuild:main"

[tool.hatch.build.targets.wheel]
packages = ["panpcs"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
