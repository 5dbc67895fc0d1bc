"""Public key values carried in a SubjectPublicKeyInfo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .asn1 import ErrorKind, X509Error, parse_integer_bytes, parse_sequence


@dataclass(frozen=True)
class RSAPublicKey:
    """RSA public key (RFC 3279); both values may carry a leading zero byte."""

    modulus: bytes
    exponent: bytes

    @classmethod
    def from_der(cls, data: bytes) -> tuple[RSAPublicKey, bytes]:
        """Parse `SEQUENCE { modulus INTEGER, exponent INTEGER }`."""
        try:
            content, rest = parse_sequence(data)
            modulus, content = parse_integer_bytes(content)
            exponent, _ = parse_integer_bytes(content)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_SPKI) from exc
        return cls(modulus, exponent), rest

    def try_exponent(self) -> int:
        """Return the exponent as an unsigned 64-bit number."""
        exponent = self.exponent
        if not exponent or exponent[0] & 0x80 or len(exponent) > 8:
            raise X509Error(ErrorKind.INVALID_NUMBER)
        return int.from_bytes(exponent, "big")

    def key_size(self) -> int:
        """Return the key size in bits, or 0."""
        if self.modulus and not self.modulus[0] & 0x80:
            return 8 * (len(self.modulus) - 1)
        return 0


@dataclass(frozen=True)
class ECPoint:
    """Elliptic curve point, as defined in RFC 5480."""

    data: bytes

    def key_size(self) -> int:
        """Return the key size in bits, or 0 for an empty or invalid point."""
        if not self.data:
            return 0
        prefix, rest = self.data[0], self.data[1:]
        if prefix == 4:
            return len(rest) * 8 // 2
        if prefix in (2, 3):
            return len(rest) * 8
        return 0


@dataclass(frozen=True)
class DSAPublicKey:
    """DSA public key Y, the content of an INTEGER (RFC 3279)."""

    y: bytes

    def key_size(self) -> int:
        return len(self.y) * 8


@dataclass(frozen=True)
class GostR3410PublicKey:
    """GOST R 34.10-94/2001 public key, the content of an OCTET STRING (RFC 4491)."""

    y: bytes

    def key_size(self) -> int:
        return len(self.y) * 8


@dataclass(frozen=True)
class GostR34102012PublicKey:
    """GOST R 34.10-2012 public key (256 or 512 bits)."""

    data: bytes

    def key_size(self) -> int:
        return 0


@dataclass(frozen=True)
class UnknownPublicKey:
    """Public key of an algorithm this package does not decode."""

    data: bytes

    def key_size(self) -> int:
        return 0


PublicKey = Union[
    RSAPublicKey,
    ECPoint,
    DSAPublicKey,
    GostR3410PublicKey,
    GostR34102012PublicKey,
    UnknownPublicKey,
]