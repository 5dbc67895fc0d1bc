[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "certparse"
version = "0.1.0"
description = "DER decoding of X.509 names, algorithm identifiers, public keys and times, with PEM reading, signature verification and structure validation"
requires-python = ">=3.10"
keywords = ["x509", "asn1", "der", "pem", "pki", "signature"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["certparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
