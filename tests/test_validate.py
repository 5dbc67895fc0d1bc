from dataclasses import dataclass

from certparse.asn1 import Any, BitString, Oid, Tag, TagClass, encode_tlv
from certparse.objects import OID_KEY_TYPE_EC_PUBLIC_KEY, OID_PKCS1_RSAENCRYPTION
from certparse.validate import (
    CallbackLogger,
    ChainValidator,
    StderrLogger,
    Validate,
    Validator,
    VecLogger,
    X509NameStructureValidator,
    X509PublicKeyValidator,
)
from certparse.x509 import (
    AlgorithmIdentifier,
    AttributeTypeAndValue,
    RelativeDistinguishedName,
    SubjectPublicKeyInfo,
    X509Name,
)


@dataclass
class V1(Validate):
    a: int

    def validate(self, warn, err):
        if self.a > 10:
            warn("a is greater than 10")
        return True


class V1Validator(Validator):
    def validate(self, item, logger):
        if item.a > 10:
            logger.warn("a is greater than 10")
        return True


class FailingValidator(Validator):
    def validate(self, item, logger):
        logger.err("always fails")
        return False


def test_validate_warn():
    res, warn, err = Validate.validate_to_vec(V1(1))
    assert res is True
    assert warn == []
    assert err == []
    res, warn, err = Validate.validate_to_vec(V1(20))
    assert res is True
    assert warn == ["a is greater than 10"]
    assert err == []


def test_validator_warn():
    logger = VecLogger()
    assert V1Validator().validate(V1(1), logger) is True
    assert logger.warnings == []
    assert logger.errors == []
    assert V1Validator().validate(V1(20), logger) is True
    assert logger.warnings == ["a is greater than 10"]
    assert logger.errors == []


def test_chain_runs_both_validators():
    logger = VecLogger()
    chained = FailingValidator().chain(V1Validator())
    assert isinstance(chained, ChainValidator)
    assert chained.validate(V1(20), logger) is False
    assert logger.errors == ["always fails"]
    assert logger.warnings == ["a is greater than 10"]


def test_chain_passes_when_both_pass():
    logger = VecLogger()
    assert ChainValidator(V1Validator(), V1Validator()).validate(V1(20), logger) is True
    assert logger.warnings == ["a is greater than 10", "a is greater than 10"]


def test_callback_logger():
    warnings, errors = [], []
    logger = CallbackLogger(warnings.append, errors.append)
    logger.warn("w")
    logger.err("e")
    assert warnings == ["w"]
    assert errors == ["e"]


def test_stderr_logger(capsys):
    logger = StderrLogger()
    logger.warn("something odd")
    logger.err("something wrong")
    assert capsys.readouterr().err == "[W] something odd\n[E] something wrong\n"


def _name(tag, value: bytes) -> X509Name:
    attr = AttributeTypeAndValue(Oid.from_string("2.5.4.3"), Any.from_tag_and_data(tag, value))
    return X509Name([RelativeDistinguishedName([attr])])


def test_name_validator_non_ascii_printable():
    logger = VecLogger()
    assert X509NameStructureValidator().validate(_name(Tag.PRINTABLE_STRING, "é".encode()), logger)
    assert logger.warnings == ["Invalid charset in X.509 Name, component 2.5.4.3"]
    assert logger.errors == []


def test_name_validator_ascii_and_utf8_ok():
    logger = VecLogger()
    validator = X509NameStructureValidator()
    assert validator.validate(_name(Tag.IA5_STRING, b"example.com"), logger)
    assert validator.validate(_name(Tag.UTF8_STRING, "é".encode()), logger)
    assert logger.warnings == []


def _rsa_spki(modulus: bytes, exponent: bytes) -> SubjectPublicKeyInfo:
    content = encode_tlv(TagClass.UNIVERSAL, False, Tag.INTEGER, modulus) + encode_tlv(
        TagClass.UNIVERSAL, False, Tag.INTEGER, exponent
    )
    der = encode_tlv(TagClass.UNIVERSAL, True, Tag.SEQUENCE, content)
    return SubjectPublicKeyInfo(
        AlgorithmIdentifier(OID_PKCS1_RSAENCRYPTION, None), BitString(0, der)
    )


def test_public_key_validator_good_rsa():
    logger = VecLogger()
    assert X509PublicKeyValidator().validate(_rsa_spki(b"\x00\xc1\x02", b"\x01\x00\x01"), logger)
    assert logger.warnings == []
    assert logger.errors == []


def test_public_key_validator_negative_rsa():
    logger = VecLogger()
    assert X509PublicKeyValidator().validate(_rsa_spki(b"\xc1\x02", b"\x81"), logger)
    assert logger.warnings == [
        "Public key: (RSA) modulus is negative",
        "Public key: (RSA) exponent is negative",
    ]


def test_public_key_validator_invalid():
    logger = VecLogger()
    spki = SubjectPublicKeyInfo(
        AlgorithmIdentifier(OID_PKCS1_RSAENCRYPTION, None), BitString(0, b"\x01\x02")
    )
    assert X509PublicKeyValidator().validate(spki, logger) is False
    assert logger.errors == ["Invalid public key"]


def test_public_key_validator_unknown_and_ec():
    logger = VecLogger()
    unknown = SubjectPublicKeyInfo(
        AlgorithmIdentifier(Oid.from_string("1.2.3.4"), None), BitString(0, b"\x01")
    )
    ec_key = SubjectPublicKeyInfo(
        AlgorithmIdentifier(OID_KEY_TYPE_EC_PUBLIC_KEY, None), BitString(0, b"\x04" + b"\x01" * 64)
    )
    assert X509PublicKeyValidator().validate(unknown, logger) is True
    assert X509PublicKeyValidator().validate(ec_key, logger) is True
    assert logger.warnings == ["Unknown public key type"]
    assert logger.errors == []