"""Signature algorithms, RSA-PSS/OAEP parameters and ECDSA signature values."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, ClassVar, TypeVar, Union

from .asn1 import (
    Any,
    ErrorKind,
    Oid,
    Tag,
    TagClass,
    X509Error,
    parse_any,
    parse_integer_bytes,
    parse_oid,
    parse_sequence,
)
from .objects import (
    OID_HASH_SHA1,
    OID_PKCS1_MGF1,
    OID_PKCS1_RSASSAPSS,
    OID_SIG_ED25519,
)
from .x509 import AlgorithmIdentifier

_T = TypeVar("_T")

_PKCS1 = Oid.from_string("1.2.840.113549.1.1")
_ANSI_X962_SIGNATURES = Oid.from_string("1.2.840.10045.4")
_X9_57_DSA = Oid.from_string("1.2.840.10040.4")
_RSAES_OAEP = Oid.from_string("1.2.840.113549.1.1.7")
_P_SPECIFIED = Oid.from_string("1.2.840.113549.1.1.9")


class SignatureKind(enum.Enum):
    RSA = "RSA"
    RSASSA_PSS = "RSASSA-PSS"
    RSAAES_OAEP = "RSAES-OAEP"
    DSA = "DSA"
    ECDSA = "ECDSA"
    ED25519 = "ED25519"


@dataclass(frozen=True)
class MaskGenAlgorithm:
    """A mask generation function and the hash it uses."""

    mgf: Oid
    hash: Oid


def _expect_sequence(value: Any) -> bytes:
    if value.header.tag_class != TagClass.UNIVERSAL or value.tag != Tag.SEQUENCE:
        raise X509Error(ErrorKind.UNEXPECTED_TAG, f"expected SEQUENCE, got tag {value.tag}")
    return value.data


def _opt_tagged(
    data: bytes, number: int, parse_inner: Callable[[bytes], _T]
) -> tuple[_T | None, bytes]:
    """Parse an optional `[number] EXPLICIT` field; leave the input alone if absent."""
    if not data:
        return None, data
    obj, rest = parse_any(data)
    if obj.header.tag_class != TagClass.CONTEXT_SPECIFIC or obj.tag != number:
        return None, data
    return parse_inner(obj.data), rest


def _algorithm(content: bytes) -> AlgorithmIdentifier:
    return AlgorithmIdentifier.from_der(content)[0]


def _u32(content: bytes) -> int:
    raw, _ = parse_integer_bytes(content)
    value = int.from_bytes(raw, "big")
    if raw[0] & 0x80 or value > 0xFFFFFFFF:
        raise X509Error(ErrorKind.INVALID_NUMBER)
    return value


def _mask_gen(raw: AlgorithmIdentifier | None) -> MaskGenAlgorithm:
    if raw is None:
        return MaskGenAlgorithm(OID_PKCS1_MGF1, OID_HASH_SHA1)
    if raw.parameters is None:
        raise X509Error(ErrorKind.INVALID_ALGORITHM_IDENTIFIER)
    try:
        hash_oid, _ = parse_oid(raw.parameters.data)
    except X509Error as exc:
        raise X509Error(ErrorKind.INVALID_ALGORITHM_IDENTIFIER) from exc
    return MaskGenAlgorithm(raw.algorithm, hash_oid)


@dataclass(frozen=True)
class RsaSsaPssParams:
    """RSASSA-PSS parameters (RFC 4055); absent fields take their defaults."""

    hash_algorithm: AlgorithmIdentifier | None = None
    mask_gen_algorithm_raw: AlgorithmIdentifier | None = None
    salt_length_value: int | None = None
    trailer_field_value: int | None = None

    @classmethod
    def from_any(cls, value: Any) -> RsaSsaPssParams:
        content = _expect_sequence(value)
        hash_alg, content = _opt_tagged(content, 0, _algorithm)
        mask_gen, content = _opt_tagged(content, 1, _algorithm)
        salt_length, content = _opt_tagged(content, 2, _u32)
        trailer_field, _ = _opt_tagged(content, 3, _u32)
        return cls(hash_alg, mask_gen, salt_length, trailer_field)

    def hash_algorithm_oid(self) -> Oid:
        """Return the hash algorithm OID, or SHA1 if absent."""
        return self.hash_algorithm.algorithm if self.hash_algorithm else OID_HASH_SHA1

    def mask_gen_algorithm(self) -> MaskGenAlgorithm:
        """Return the mask generation algorithm, MGF1 with SHA1 if absent."""
        return _mask_gen(self.mask_gen_algorithm_raw)

    def salt_length(self) -> int:
        return 20 if self.salt_length_value is None else self.salt_length_value

    def trailer_field(self) -> int:
        return 1 if self.trailer_field_value is None else self.trailer_field_value


@dataclass(frozen=True)
class RsaAesOaepParams:
    """RSAES-OAEP parameters (RFC 8017); absent fields take their defaults."""

    hash_algorithm: AlgorithmIdentifier | None = None
    mask_gen_algorithm_raw: AlgorithmIdentifier | None = None
    p_source_alg_raw: AlgorithmIdentifier | None = None

    EMPTY: ClassVar[AlgorithmIdentifier] = AlgorithmIdentifier(_P_SPECIFIED, None)

    @classmethod
    def from_any(cls, value: Any) -> RsaAesOaepParams:
        content = _expect_sequence(value)
        hash_alg, content = _opt_tagged(content, 0, _algorithm)
        mask_gen, content = _opt_tagged(content, 1, _algorithm)
        p_source, _ = _opt_tagged(content, 2, _algorithm)
        return cls(hash_alg, mask_gen, p_source)

    def hash_algorithm_oid(self) -> Oid:
        """Return the hash algorithm OID, or SHA1 if absent."""
        return self.hash_algorithm.algorithm if self.hash_algorithm else OID_HASH_SHA1

    def mask_gen_algorithm(self) -> MaskGenAlgorithm:
        """Return the mask generation algorithm, MGF1 with SHA1 if absent."""
        return _mask_gen(self.mask_gen_algorithm_raw)

    def p_source_alg(self) -> AlgorithmIdentifier:
        """Return the pSourceFunc algorithm, or pSpecified with no parameters."""
        return self.p_source_alg_raw if self.p_source_alg_raw is not None else self.EMPTY


@dataclass(frozen=True)
class SignatureAlgorithm:
    """The kind of a signature algorithm, with its parameters where it has any."""

    kind: SignatureKind
    params: Union[RsaSsaPssParams, RsaAesOaepParams, None] = None

    @classmethod
    def from_algorithm_identifier(cls, identifier: AlgorithmIdentifier) -> SignatureAlgorithm:
        oid = identifier.algorithm
        if oid.starts_with(_PKCS1):
            if oid == OID_PKCS1_RSASSAPSS:
                return cls(SignatureKind.RSASSA_PSS, cls._params(identifier, RsaSsaPssParams))
            return cls(SignatureKind.RSA)
        if oid.starts_with(_ANSI_X962_SIGNATURES):
            return cls(SignatureKind.ECDSA)
        if oid.starts_with(_X9_57_DSA):
            return cls(SignatureKind.DSA)
        if oid == OID_SIG_ED25519:
            return cls(SignatureKind.ED25519)
        if oid == _RSAES_OAEP:
            return cls(SignatureKind.RSAAES_OAEP, cls._params(identifier, RsaAesOaepParams))
        raise X509Error(
            ErrorKind.INVALID_SIGNATURE_VALUE, f"bad signature algorithm identifier: {oid}"
        )

    @staticmethod
    def _params(identifier: AlgorithmIdentifier, params_type):
        if identifier.parameters is None:
            raise X509Error(ErrorKind.INVALID_SIGNATURE_VALUE)
        try:
            return params_type.from_any(identifier.parameters)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_SIGNATURE_VALUE) from exc


@dataclass(frozen=True)
class EcdsaSigValue:
    """ECDSA signature value (RFC 3279): the raw contents of two INTEGERs."""

    r: bytes
    s: bytes

    @classmethod
    def from_der(cls, data: bytes) -> tuple[EcdsaSigValue, bytes]:
        content, rest = parse_sequence(data)
        r, content = parse_integer_bytes(content)
        s, _ = parse_integer_bytes(content)
        return cls(r, s), rest