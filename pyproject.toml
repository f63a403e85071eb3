[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cworch"
version = "0.1.0"
description = "Cosmos key and address helpers, locked JSON state files, environment settings and in-memory CosmWasm example contracts"
requires-python = ">=3.10"
keywords = ["cosmos", "cosmwasm", "bech32", "secp256k1", "ed25519", "blockchain", "state"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
    "pycryptodome",
    "portalocker",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cworch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
