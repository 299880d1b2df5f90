[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "enclavekit"
version = "0.1.0"
description = "Pure-Python ChaCha20, Poly1305, ChaCha20-Poly1305 AEAD and X25519, plus an enclave security-monitor model"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "chacha20",
    "poly1305",
    "aead",
    "curve25519",
    "x25519",
    "enclave",
    "security-monitor",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["enclavekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
