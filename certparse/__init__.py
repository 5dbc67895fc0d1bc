"""DER decoding of X.509 names, keys, algorithms and times, with PEM reading, verification and validation."""

__version__ = "0.1.0"