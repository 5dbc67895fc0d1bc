"""Cryptographic signature verification of certificates, CRLs and requests."""

from __future__ import annotations

from typing import Callable

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa

from .asn1 import BitString, ErrorKind, X509Error
from .objects import (
    OID_EC_P256,
    OID_NIST_EC_P384,
    OID_PKCS1_SHA1WITHRSA,
    OID_PKCS1_SHA256WITHRSA,
    OID_PKCS1_SHA384WITHRSA,
    OID_PKCS1_SHA512WITHRSA,
    OID_SHA1_WITH_RSA,
    OID_SIG_ECDSA_WITH_SHA256,
    OID_SIG_ECDSA_WITH_SHA384,
    OID_SIG_ED25519,
)
from .public_key import RSAPublicKey
from .x509 import AlgorithmIdentifier, SubjectPublicKeyInfo

_RSA_MAX_BITS = 8192

# signature algorithm -> (hash, smallest accepted modulus size in bits)
_RSA_ALGORITHMS = {
    OID_PKCS1_SHA1WITHRSA: (hashes.SHA1, 1024),
    OID_SHA1_WITH_RSA: (hashes.SHA1, 1024),
    OID_PKCS1_SHA256WITHRSA: (hashes.SHA256, 2048),
    OID_PKCS1_SHA384WITHRSA: (hashes.SHA384, 2048),
    OID_PKCS1_SHA512WITHRSA: (hashes.SHA512, 2048),
}

_ECDSA_ALGORITHMS = {
    OID_SIG_ECDSA_WITH_SHA256: hashes.SHA256,
    OID_SIG_ECDSA_WITH_SHA384: hashes.SHA384,
}

_CURVES = {
    OID_EC_P256: ec.SECP256R1,
    OID_NIST_EC_P384: ec.SECP384R1,
}


def _unsupported() -> X509Error:
    return X509Error(ErrorKind.SIGNATURE_UNSUPPORTED_ALGORITHM)


def _ec_curve(pubkey_alg: AlgorithmIdentifier) -> type[ec.EllipticCurve]:
    """Return the curve named by the key's parameters, if supported."""
    if pubkey_alg.parameters is None:
        raise _unsupported()
    try:
        curve_oid = pubkey_alg.parameters.as_oid()
    except X509Error as exc:
        raise _unsupported() from exc
    curve = _CURVES.get(curve_oid)
    if curve is None:
        raise _unsupported()
    return curve


def _rsa_verifier(key_data, signature, raw_data, hash_type, min_bits) -> Callable[[], None]:
    def run() -> None:
        key, _ = RSAPublicKey.from_der(key_data)
        modulus = int.from_bytes(key.modulus, "big")
        exponent = int.from_bytes(key.exponent, "big")
        if not min_bits <= modulus.bit_length() <= _RSA_MAX_BITS:
            raise ValueError("RSA modulus size out of accepted range")
        public = rsa.RSAPublicNumbers(exponent, modulus).public_key()
        public.verify(signature, raw_data, padding.PKCS1v15(), hash_type())

    return run


def _ecdsa_verifier(key_data, signature, raw_data, curve, hash_type) -> Callable[[], None]:
    def run() -> None:
        public = ec.EllipticCurvePublicKey.from_encoded_point(curve(), key_data)
        public.verify(signature, raw_data, ec.ECDSA(hash_type()))

    return run


def _ed25519_verifier(key_data, signature, raw_data) -> Callable[[], None]:
    def run() -> None:
        public = ed25519.Ed25519PublicKey.from_public_bytes(key_data)
        public.verify(signature, raw_data)

    return run


def verify_signature(
    public_key: SubjectPublicKeyInfo,
    signature_algorithm: AlgorithmIdentifier,
    signature_value: BitString,
    raw_data: bytes,
) -> None:
    """Verify a signature over raw data with the signer's public key.

    Raises X509Error with SIGNATURE_UNSUPPORTED_ALGORITHM if the algorithm is
    not supported, or SIGNATURE_VERIFICATION_ERROR if the signature is wrong.
    """
    oid = signature_algorithm.algorithm
    key_data = bytes(public_key.subject_public_key.data)
    signature = bytes(signature_value.data)
    raw_data = bytes(raw_data)

    if oid in _RSA_ALGORITHMS:
        hash_type, min_bits = _RSA_ALGORITHMS[oid]
        verifier = _rsa_verifier(key_data, signature, raw_data, hash_type, min_bits)
    elif oid in _ECDSA_ALGORITHMS:
        curve = _ec_curve(public_key.algorithm)
        verifier = _ecdsa_verifier(key_data, signature, raw_data, curve, _ECDSA_ALGORITHMS[oid])
    elif oid == OID_SIG_ED25519:
        verifier = _ed25519_verifier(key_data, signature, raw_data)
    else:
        raise _unsupported()

    try:
        verifier()
    except (InvalidSignature, UnsupportedAlgorithm, ValueError, TypeError, X509Error) as exc:
        raise X509Error(ErrorKind.SIGNATURE_VERIFICATION_ERROR) from exc