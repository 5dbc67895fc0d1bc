"""X.509 building blocks: versions, names, algorithm identifiers and key info."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator

from .asn1 import (
    Any,
    BitString,
    ErrorKind,
    Oid,
    Tag,
    TagClass,
    X509Error,
    parse_any,
    parse_bit_string,
    parse_integer_bytes,
    parse_octet_string,
    parse_oid,
    parse_sequence,
)
from .objects import (
    OID_GOST_R3410_2001,
    OID_KEY_TYPE_DSA,
    OID_KEY_TYPE_EC_PUBLIC_KEY,
    OID_KEY_TYPE_GOST_R3410_2012_256,
    OID_KEY_TYPE_GOST_R3410_2012_512,
    OID_PKCS1_RSAENCRYPTION,
    OID_PKCS9_EMAIL_ADDRESS,
    OID_X509_COMMON_NAME,
    OID_X509_COUNTRY_NAME,
    OID_X509_LOCALITY_NAME,
    OID_X509_ORGANIZATION_NAME,
    OID_X509_ORGANIZATIONAL_UNIT,
    OID_X509_STATE_OR_PROVINCE_NAME,
    OidRegistry,
    oid2abbrev,
    oid_registry,
)
from .public_key import (
    DSAPublicKey,
    ECPoint,
    GostR3410PublicKey,
    GostR34102012PublicKey,
    PublicKey,
    RSAPublicKey,
    UnknownPublicKey,
)


def _display(type_name: str, names: dict[int, str], value: int) -> str:
    name = names.get(value)
    return name if name is not None else f"{type_name}({value} / 0x{value:x})"


def _consumed(data: bytes, rest: bytes) -> bytes:
    return bytes(data[: len(data) - len(rest)])


_VERSION_NAMES = {0: "V1", 1: "V2", 2: "V3"}


@dataclass(frozen=True)
class X509Version:
    """The version number of an encoded certificate (V1 is 0, V3 is 2)."""

    value: int

    V1: ClassVar[X509Version]
    V2: ClassVar[X509Version]
    V3: ClassVar[X509Version]

    @classmethod
    def from_der(cls, data: bytes) -> tuple[X509Version, bytes]:
        """Parse `Version ::= INTEGER` as an unsigned 32-bit number."""
        try:
            raw, rest = parse_integer_bytes(data)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_VERSION) from exc
        value = int.from_bytes(raw, "big")
        if raw[0] & 0x80 or value > 0xFFFFFFFF:
            raise X509Error(ErrorKind.INVALID_VERSION)
        return cls(value), rest

    @classmethod
    def from_der_tagged_0(cls, data: bytes) -> tuple[X509Version, bytes]:
        """Parse `[0] EXPLICIT Version DEFAULT v1`."""
        data = bytes(data)
        if not data:
            return cls.V1, data
        obj, rest = parse_any(data)
        if obj.header.tag_class != TagClass.CONTEXT_SPECIFIC or obj.tag != 0:
            return cls.V1, data
        version, _ = cls.from_der(obj.data)
        return version, rest

    def __str__(self) -> str:
        return _display("X509Version", _VERSION_NAMES, self.value)


X509Version.V1 = X509Version(0)
X509Version.V2 = X509Version(1)
X509Version.V3 = X509Version(2)


_REASON_NAMES = {
    0: "Unspecified",
    1: "KeyCompromise",
    2: "CACompromise",
    3: "AffiliationChanged",
    4: "Superseded",
    5: "CessationOfOperation",
    6: "CertificateHold",
    8: "RemoveFromCRL",
    9: "PrivilegeWithdrawn",
    10: "AACompromise",
}


@dataclass(frozen=True)
class ReasonCode:
    """CRL entry revocation reason; the default is Unspecified."""

    value: int = 0

    UNSPECIFIED: ClassVar[ReasonCode]
    KEY_COMPROMISE: ClassVar[ReasonCode]
    CA_COMPROMISE: ClassVar[ReasonCode]
    AFFILIATION_CHANGED: ClassVar[ReasonCode]
    SUPERSEDED: ClassVar[ReasonCode]
    CESSATION_OF_OPERATION: ClassVar[ReasonCode]
    CERTIFICATE_HOLD: ClassVar[ReasonCode]
    REMOVE_FROM_CRL: ClassVar[ReasonCode]
    PRIVILEGE_WITHDRAWN: ClassVar[ReasonCode]
    AA_COMPROMISE: ClassVar[ReasonCode]

    def __str__(self) -> str:
        return _display("ReasonCode", _REASON_NAMES, self.value)


ReasonCode.UNSPECIFIED = ReasonCode(0)
ReasonCode.KEY_COMPROMISE = ReasonCode(1)
ReasonCode.CA_COMPROMISE = ReasonCode(2)
ReasonCode.AFFILIATION_CHANGED = ReasonCode(3)
ReasonCode.SUPERSEDED = ReasonCode(4)
ReasonCode.CESSATION_OF_OPERATION = ReasonCode(5)
ReasonCode.CERTIFICATE_HOLD = ReasonCode(6)
ReasonCode.REMOVE_FROM_CRL = ReasonCode(8)
ReasonCode.PRIVILEGE_WITHDRAWN = ReasonCode(9)
ReasonCode.AA_COMPROMISE = ReasonCode(10)


@dataclass(frozen=True)
class AttributeTypeAndValue:
    """One component of a relative distinguished name."""

    attr_type: Oid
    attr_value: Any

    @classmethod
    def from_der(cls, data: bytes) -> tuple[AttributeTypeAndValue, bytes]:
        content, rest = parse_sequence(data)
        try:
            attr_type, content = parse_oid(content)
            attr_value, _ = parse_any(content)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_X509_NAME) from exc
        return cls(attr_type, attr_value), rest

    def as_str(self) -> str:
        """Return the value as text; only Numeric, Printable, UTF8 and IA5 strings qualify."""
        return self.attr_value.as_str()

    def as_bytes(self) -> bytes:
        return self.attr_value.as_bytes()


@dataclass(frozen=True)
class RelativeDistinguishedName:
    """A set of attribute type and value pairs."""

    attributes: tuple[AttributeTypeAndValue, ...] = field(default_factory=tuple)

    def __init__(self, attributes=()) -> None:
        object.__setattr__(self, "attributes", tuple(attributes))

    @classmethod
    def from_der(cls, data: bytes) -> tuple[RelativeDistinguishedName, bytes]:
        obj, rest = parse_any(data)
        if obj.header.tag_class != TagClass.UNIVERSAL or obj.tag != Tag.SET:
            raise X509Error(ErrorKind.UNEXPECTED_TAG, f"expected SET, got tag {obj.tag}")
        content = obj.data
        first, content = AttributeTypeAndValue.from_der(content)
        attributes = [first]
        while content:
            try:
                attr, content = AttributeTypeAndValue.from_der(content)
            except X509Error:
                break
            attributes.append(attr)
        return cls(attributes), rest

    def __iter__(self) -> Iterator[AttributeTypeAndValue]:
        return iter(self.attributes)


@dataclass(frozen=True)
class AlgorithmIdentifier:
    """`AlgorithmIdentifier ::= SEQUENCE { algorithm OID, parameters ANY OPTIONAL }`."""

    algorithm: Oid
    parameters: Any | None = None

    @classmethod
    def from_der(cls, data: bytes) -> tuple[AlgorithmIdentifier, bytes]:
        content, rest = parse_sequence(data)
        try:
            algorithm, content = parse_oid(content)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_ALGORITHM_IDENTIFIER) from exc
        parameters = parse_any(content)[0] if content else None
        return cls(algorithm, parameters), rest


@dataclass(frozen=True)
class SubjectPublicKeyInfo:
    """Public key with its algorithm, and the raw DER of the whole structure."""

    algorithm: AlgorithmIdentifier
    subject_public_key: BitString
    raw: bytes = b""

    @classmethod
    def from_der(cls, data: bytes) -> tuple[SubjectPublicKeyInfo, bytes]:
        data = bytes(data)
        content, rest = parse_sequence(data)
        algorithm, content = AlgorithmIdentifier.from_der(content)
        try:
            key, _ = parse_bit_string(content)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_SPKI) from exc
        return cls(algorithm, key, _consumed(data, rest)), rest

    def parsed(self) -> PublicKey:
        """Decode the public key according to its algorithm."""
        data = self.subject_public_key.data
        algorithm = self.algorithm.algorithm
        try:
            if algorithm == OID_PKCS1_RSAENCRYPTION:
                return RSAPublicKey.from_der(data)[0]
            if algorithm == OID_KEY_TYPE_EC_PUBLIC_KEY:
                return ECPoint(data)
            if algorithm == OID_KEY_TYPE_DSA:
                return DSAPublicKey(parse_integer_bytes(data)[0])
            if algorithm == OID_GOST_R3410_2001:
                return GostR3410PublicKey(parse_octet_string(data)[0])
            if algorithm in (OID_KEY_TYPE_GOST_R3410_2012_256, OID_KEY_TYPE_GOST_R3410_2012_512):
                return GostR34102012PublicKey(parse_octet_string(data)[0])
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_SPKI) from exc
        return UnknownPublicKey(data)


@dataclass(frozen=True)
class X509Name:
    """An X.501 Name, as used in the issuer and subject fields."""

    rdn_seq: tuple[RelativeDistinguishedName, ...] = field(default_factory=tuple)
    raw: bytes = b""

    def __init__(self, rdn_seq=(), raw: bytes = b"") -> None:
        object.__setattr__(self, "rdn_seq", tuple(rdn_seq))
        object.__setattr__(self, "raw", bytes(raw))

    @classmethod
    def from_der(cls, data: bytes) -> tuple[X509Name, bytes]:
        data = bytes(data)
        content, rest = parse_sequence(data)
        rdns = []
        while content:
            try:
                rdn, content = RelativeDistinguishedName.from_der(content)
            except X509Error:
                break
            rdns.append(rdn)
        return cls(rdns, _consumed(data, rest)), rest

    def __str__(self) -> str:
        try:
            return x509name_to_string(self.rdn_seq, oid_registry())
        except X509Error:
            return "<X509Error: Invalid X.509 name>"

    def to_string_with_registry(self, registry: OidRegistry) -> str:
        return x509name_to_string(self.rdn_seq, registry)

    def __iter__(self) -> Iterator[RelativeDistinguishedName]:
        return iter(self.rdn_seq)

    def iter_rdn(self) -> Iterator[RelativeDistinguishedName]:
        return iter(self.rdn_seq)

    def iter_attributes(self) -> Iterator[AttributeTypeAndValue]:
        for rdn in self.rdn_seq:
            yield from rdn

    def iter_by_oid(self, oid: Oid) -> Iterator[AttributeTypeAndValue]:
        return (attr for attr in self.iter_attributes() if attr.attr_type == oid)

    def iter_common_name(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_X509_COMMON_NAME)

    def iter_country(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_X509_COUNTRY_NAME)

    def iter_organization(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_X509_ORGANIZATION_NAME)

    def iter_organizational_unit(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_X509_ORGANIZATIONAL_UNIT)

    def iter_state_or_province(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_X509_STATE_OR_PROVINCE_NAME)

    def iter_locality(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_X509_LOCALITY_NAME)

    def iter_email(self) -> Iterator[AttributeTypeAndValue]:
        return self.iter_by_oid(OID_PKCS9_EMAIL_ADDRESS)


_TEXT_TAGS = {
    Tag.NUMERIC_STRING,
    Tag.VISIBLE_STRING,
    Tag.PRINTABLE_STRING,
    Tag.GENERAL_STRING,
    Tag.OBJECT_DESCRIPTOR,
    Tag.GRAPHIC_STRING,
    Tag.T61_STRING,
    Tag.VIDEOTEX_STRING,
    Tag.UTF8_STRING,
    Tag.IA5_STRING,
}


def attribute_value_to_string(value: Any) -> str:
    """Return the value as text, or as upper-case hex if it is not a string type."""
    try:
        if value.tag in _TEXT_TAGS:
            return value.data.decode("utf-8")
        if value.tag == Tag.BMP_STRING:
            if len(value.data) % 2:
                raise UnicodeDecodeError("utf-16-be", value.data, 0, 1, "odd length")
            return value.data.decode("utf-16-be")
    except UnicodeDecodeError as exc:
        raise X509Error(ErrorKind.INVALID_ATTRIBUTES) from exc
    return value.as_bytes().hex().upper()


def x509name_to_string(rdn_seq, registry: OidRegistry) -> str:
    """Join attributes with " + " inside an RDN and RDNs with ", "."""

    def component(attr: AttributeTypeAndValue) -> str:
        text = attribute_value_to_string(attr.attr_value)
        try:
            abbrev = oid2abbrev(attr.attr_type, registry)
        except LookupError:
            abbrev = f"OID({attr.attr_type})"
        return f"{abbrev}={text}"

    return ", ".join(" + ".join(component(attr) for attr in rdn) for rdn in rdn_seq)


def parse_signature_value(data: bytes) -> tuple[BitString, bytes]:
    try:
        return parse_bit_string(data)
    except X509Error as exc:
        raise X509Error(ErrorKind.INVALID_SIGNATURE_VALUE) from exc


def parse_serial(data: bytes) -> tuple[tuple[bytes, int], bytes]:
    """Parse a serial number; return (raw bytes, unsigned value) and the rest.

    Serials with the high bit set are accepted and read as unsigned.
    """
    try:
        obj, rest = parse_any(data)
    except X509Error as exc:
        raise X509Error(ErrorKind.INVALID_SERIAL) from exc
    if obj.tag != Tag.INTEGER:
        raise X509Error(ErrorKind.INVALID_SERIAL)
    return (obj.data, int.from_bytes(obj.data, "big")), rest