"""Structure validators for X.509 objects, and loggers collecting their findings."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from .asn1 import Tag, X509Error
from .public_key import RSAPublicKey, UnknownPublicKey
from .x509 import SubjectPublicKeyInfo, X509Name


class Logger(ABC):
    """Receives validation warnings and errors."""

    @abstractmethod
    def warn(self, message: str) -> None: ...

    @abstractmethod
    def err(self, message: str) -> None: ...


@dataclass
class VecLogger(Logger):
    """Logger storing messages in lists."""

    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def err(self, message: str) -> None:
        self.errors.append(message)


class StderrLogger(Logger):
    """Logger printing messages to standard error."""

    def warn(self, message: str) -> None:
        print(f"[W] {message}", file=sys.stderr)

    def err(self, message: str) -> None:
        print(f"[E] {message}", file=sys.stderr)


class CallbackLogger(Logger):
    """Logger handing messages to callables."""

    def __init__(self, warn: Callable[[str], None], err: Callable[[str], None]) -> None:
        self._warn = warn
        self._err = err

    def warn(self, message: str) -> None:
        self._warn(message)

    def err(self, message: str) -> None:
        self._err(message)


class Validate(ABC):
    """An item that can validate itself, reporting through callables."""

    @abstractmethod
    def validate(self, warn: Callable[[str], None], err: Callable[[str], None]) -> bool:
        """Return True if the item is valid; report non-fatal and fatal problems."""

    def validate_to_vec(self) -> tuple[bool, list[str], list[str]]:
        """Validate, returning the result, the warnings and the errors."""
        warnings: list[str] = []
        errors: list[str] = []
        result = self.validate(warnings.append, errors.append)
        return result, warnings, errors


class Validator(ABC):
    """Validates items of one kind, reporting to a Logger."""

    @abstractmethod
    def validate(self, item, logger: Logger) -> bool:
        """Return True if the item is valid; report problems to the logger."""

    def chain(self, other: Validator) -> ChainValidator:
        return ChainValidator(self, other)


class ChainValidator(Validator):
    """Runs two validators on the same item; valid only if both pass."""

    def __init__(self, first: Validator, second: Validator) -> None:
        self.first = first
        self.second = second

    def validate(self, item, logger: Logger) -> bool:
        first = self.first.validate(item, logger)
        second = self.second.validate(item, logger)
        return first and second


_ASCII_TAGS = (Tag.PRINTABLE_STRING, Tag.IA5_STRING)


class X509NameStructureValidator(Validator):
    """Checks the character sets of the attributes of an X.509 name."""

    def validate(self, item: X509Name, logger: Logger) -> bool:
        for attr in item.iter_attributes():
            if attr.attr_value.tag in _ASCII_TAGS and not attr.as_bytes().isascii():
                logger.warn(f"Invalid charset in X.509 Name, component {attr.attr_type}")
        return True


class X509PublicKeyValidator(Validator):
    """Checks that a subject public key can be decoded and is well formed."""

    def validate(self, item: SubjectPublicKeyInfo, logger: Logger) -> bool:
        try:
            key = item.parsed()
        except X509Error:
            logger.err("Invalid public key")
            return False
        if isinstance(key, RSAPublicKey):
            if key.modulus[0] & 0x80:
                logger.warn("Public key: (RSA) modulus is negative")
            if key.exponent[0] & 0x80:
                logger.warn("Public key: (RSA) exponent is negative")
        elif isinstance(key, UnknownPublicKey):
            logger.warn("Unknown public key type")
        return True