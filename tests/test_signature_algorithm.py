import pytest

from certparse.asn1 import ErrorKind, Oid, Tag, TagClass, X509Error, encode_tlv, parse_any
from certparse.objects import (
    OID_HASH_SHA1,
    OID_NIST_HASH_SHA256,
    OID_PKCS1_MGF1,
    OID_PKCS1_RSASSAPSS,
    OID_PKCS1_SHA256WITHRSA,
    OID_SIG_ECDSA_WITH_SHA256,
    OID_SIG_ED25519,
)
from certparse.signature_algorithm import (
    EcdsaSigValue,
    MaskGenAlgorithm,
    RsaAesOaepParams,
    RsaSsaPssParams,
    SignatureAlgorithm,
    SignatureKind,
)
from certparse.x509 import AlgorithmIdentifier


def seq(*parts):
    return encode_tlv(TagClass.UNIVERSAL, True, Tag.SEQUENCE, b"".join(parts))


def oid_der(oid):
    return encode_tlv(TagClass.UNIVERSAL, False, Tag.OID, oid.to_der_content())


def null():
    return encode_tlv(TagClass.UNIVERSAL, False, Tag.NULL, b"")


def integer(raw):
    return encode_tlv(TagClass.UNIVERSAL, False, Tag.INTEGER, raw)


def explicit(number, content):
    return encode_tlv(TagClass.CONTEXT_SPECIFIC, True, number, content)


def any_of(der):
    return parse_any(der)[0]


def test_rsa_signature():
    alg = SignatureAlgorithm.from_algorithm_identifier(
        AlgorithmIdentifier(OID_PKCS1_SHA256WITHRSA, any_of(null()))
    )
    assert alg.kind is SignatureKind.RSA
    assert alg.params is None


def test_ecdsa_dsa_ed25519():
    ecdsa = SignatureAlgorithm.from_algorithm_identifier(AlgorithmIdentifier(OID_SIG_ECDSA_WITH_SHA256))
    assert ecdsa.kind is SignatureKind.ECDSA
    dsa = SignatureAlgorithm.from_algorithm_identifier(
        AlgorithmIdentifier(Oid.from_string("1.2.840.10040.4.3"))
    )
    assert dsa.kind is SignatureKind.DSA
    ed = SignatureAlgorithm.from_algorithm_identifier(AlgorithmIdentifier(OID_SIG_ED25519))
    assert ed.kind is SignatureKind.ED25519


def test_unknown_algorithm_rejected():
    with pytest.raises(X509Error) as info:
        SignatureAlgorithm.from_algorithm_identifier(AlgorithmIdentifier(Oid.from_string("1.3.101.113")))
    assert info.value.kind is ErrorKind.INVALID_SIGNATURE_VALUE


def test_oaep_oid_is_child_of_pkcs1():
    alg = SignatureAlgorithm.from_algorithm_identifier(
        AlgorithmIdentifier(Oid.from_string("1.2.840.113549.1.1.7"))
    )
    assert alg.kind is SignatureKind.RSA


def test_pss_without_parameters_rejected():
    with pytest.raises(X509Error) as info:
        SignatureAlgorithm.from_algorithm_identifier(AlgorithmIdentifier(OID_PKCS1_RSASSAPSS))
    assert info.value.kind is ErrorKind.INVALID_SIGNATURE_VALUE


def test_pss_with_non_sequence_parameters_rejected():
    with pytest.raises(X509Error) as info:
        SignatureAlgorithm.from_algorithm_identifier(
            AlgorithmIdentifier(OID_PKCS1_RSASSAPSS, any_of(null()))
        )
    assert info.value.kind is ErrorKind.INVALID_SIGNATURE_VALUE


def test_pss_default_parameters():
    alg = SignatureAlgorithm.from_algorithm_identifier(
        AlgorithmIdentifier(OID_PKCS1_RSASSAPSS, any_of(seq()))
    )
    assert alg.kind is SignatureKind.RSASSA_PSS
    params = alg.params
    assert params.hash_algorithm is None
    assert params.hash_algorithm_oid() == OID_HASH_SHA1
    assert params.mask_gen_algorithm() == MaskGenAlgorithm(OID_PKCS1_MGF1, OID_HASH_SHA1)
    assert params.salt_length() == 20
    assert params.trailer_field() == 1


def test_pss_explicit_parameters():
    der = seq(
        explicit(0, seq(oid_der(OID_NIST_HASH_SHA256), null())),
        explicit(1, seq(oid_der(OID_PKCS1_MGF1), seq(oid_der(OID_NIST_HASH_SHA256), null()))),
        explicit(2, integer(bytes([32]))),
        explicit(3, integer(bytes([1]))),
    )
    params = RsaSsaPssParams.from_any(any_of(der))
    assert params.hash_algorithm_oid() == OID_NIST_HASH_SHA256
    assert params.mask_gen_algorithm() == MaskGenAlgorithm(OID_PKCS1_MGF1, OID_NIST_HASH_SHA256)
    assert params.salt_length() == 32
    assert params.trailer_field() == 1


def test_pss_salt_only():
    params = RsaSsaPssParams.from_any(any_of(seq(explicit(2, integer(bytes([48]))))))
    assert params.hash_algorithm_oid() == OID_HASH_SHA1
    assert params.salt_length() == 48
    assert params.trailer_field() == 1


def test_mask_gen_without_parameters_rejected():
    params = RsaSsaPssParams(mask_gen_algorithm_raw=AlgorithmIdentifier(OID_PKCS1_MGF1))
    with pytest.raises(X509Error) as info:
        params.mask_gen_algorithm()
    assert info.value.kind is ErrorKind.INVALID_ALGORITHM_IDENTIFIER


def test_oaep_defaults():
    params = RsaAesOaepParams.from_any(any_of(seq()))
    assert params.hash_algorithm_oid() == OID_HASH_SHA1
    assert params.mask_gen_algorithm() == MaskGenAlgorithm(OID_PKCS1_MGF1, OID_HASH_SHA1)
    assert params.p_source_alg() == RsaAesOaepParams.EMPTY
    assert str(params.p_source_alg().algorithm) == "1.2.840.113549.1.1.9"


def test_oaep_explicit_hash_and_p_source():
    p_source = AlgorithmIdentifier(Oid.from_string("1.2.840.113549.1.1.9"), any_of(null()))
    der = seq(
        explicit(0, seq(oid_der(OID_NIST_HASH_SHA256), null())),
        explicit(2, seq(oid_der(p_source.algorithm), null())),
    )
    params = RsaAesOaepParams.from_any(any_of(der))
    assert params.hash_algorithm_oid() == OID_NIST_HASH_SHA256
    assert params.mask_gen_algorithm_raw is None
    assert params.p_source_alg() == p_source


def test_ecdsa_sig_value():
    r = bytes([0x00, 0x81, 0x22])
    s = bytes([0x33, 0x44])
    der = seq(integer(r), integer(s)) + b"\xff"
    value, rest = EcdsaSigValue.from_der(der)
    assert value == EcdsaSigValue(r, s)
    assert rest == b"\xff"


def test_ecdsa_sig_value_missing_s():
    with pytest.raises(X509Error):
        EcdsaSigValue.from_der(seq(integer(b"\x01")))