import pytest

from certparse.asn1 import ErrorKind, Tag, TagClass, X509Error, encode_tlv
from certparse.public_key import (
    DSAPublicKey,
    ECPoint,
    GostR3410PublicKey,
    GostR34102012PublicKey,
    RSAPublicKey,
    UnknownPublicKey,
)


def _integer(content: bytes) -> bytes:
    return encode_tlv(TagClass.UNIVERSAL, False, Tag.INTEGER, content)


def _sequence(content: bytes) -> bytes:
    return encode_tlv(TagClass.UNIVERSAL, True, Tag.SEQUENCE, content)


def test_rsa_from_der_round_trip():
    modulus = b"\x00" + b"\xc3" * 128
    exponent = b"\x01\x00\x01"
    der = _sequence(_integer(modulus) + _integer(exponent)) + b"\xff"
    key, rest = RSAPublicKey.from_der(der)
    assert key.modulus == modulus
    assert key.exponent == exponent
    assert rest == b"\xff"


def test_rsa_from_der_rejects_non_sequence():
    with pytest.raises(X509Error) as info:
        RSAPublicKey.from_der(b"\x04\x00")
    assert info.value.kind is ErrorKind.INVALID_SPKI


def test_rsa_from_der_rejects_missing_exponent():
    der = _sequence(_integer(b"\x01\x02"))
    with pytest.raises(X509Error) as info:
        RSAPublicKey.from_der(der)
    assert info.value.kind is ErrorKind.INVALID_SPKI


def test_try_exponent_standard_value():
    key = RSAPublicKey(b"\x00\xff", b"\x01\x00\x01")
    assert key.try_exponent() == 65537


def test_try_exponent_ignores_leading_zero():
    with_zero = RSAPublicKey(b"\x00\xff", b"\x00\x03")
    without = RSAPublicKey(b"\x00\xff", b"\x03")
    assert with_zero.try_exponent() == without.try_exponent()


@pytest.mark.parametrize("exponent", [b"", b"\x80", b"\x01" * 9])
def test_try_exponent_errors(exponent):
    with pytest.raises(X509Error) as info:
        RSAPublicKey(b"\x00\xff", exponent).try_exponent()
    assert info.value.kind is ErrorKind.INVALID_NUMBER


def test_rsa_key_size_with_leading_zero():
    key = RSAPublicKey(b"\x00" + b"\xab" * 256, b"\x03")
    assert key.key_size() == 2048


def test_rsa_key_size_same_for_any_non_negative_first_byte():
    body = b"\x55" * 64
    assert RSAPublicKey(b"\x00" + body, b"\x03").key_size() == RSAPublicKey(
        b"\x7f" + body, b"\x03"
    ).key_size()


@pytest.mark.parametrize("modulus", [b"", b"\x80\x01\x02"])
def test_rsa_key_size_zero_for_empty_or_negative(modulus):
    assert RSAPublicKey(modulus, b"\x03").key_size() == 0


def test_ec_uncompressed_p256():
    point = ECPoint(b"\x04" + b"\x11" * 64)
    assert point.key_size() == 256


@pytest.mark.parametrize("prefix", [b"\x02", b"\x03"])
def test_ec_compressed_matches_uncompressed(prefix):
    compressed = ECPoint(prefix + b"\x22" * 48)
    uncompressed = ECPoint(b"\x04" + b"\x22" * 96)
    assert compressed.key_size() == uncompressed.key_size()


@pytest.mark.parametrize("data", [b"", b"\x05" + b"\x01" * 32, b"\x00"])
def test_ec_empty_or_invalid(data):
    assert ECPoint(data).key_size() == 0


def test_dsa_and_gost_sizes_agree():
    y = b"\x5a" * 40
    assert DSAPublicKey(y).key_size() == GostR3410PublicKey(y).key_size()


def test_dsa_size_scales_with_length():
    short = DSAPublicKey(b"\x01" * 16).key_size()
    long = DSAPublicKey(b"\x01" * 32).key_size()
    assert long == 2 * short
    assert short > 0


def test_gost_2012_and_unknown_have_no_size():
    assert GostR34102012PublicKey(b"\x01" * 64).key_size() == 0
    assert UnknownPublicKey(b"\x01" * 64).key_size() == 0