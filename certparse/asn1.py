"""Minimal DER primitives: headers, tags, object identifiers and errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class ErrorKind(enum.Enum):
    """Categories of parsing and validation failures."""

    INVALID_VERSION = "invalid version"
    INVALID_SERIAL = "invalid serial"
    INVALID_ALGORITHM_IDENTIFIER = "invalid algorithm identifier"
    INVALID_X509_NAME = "invalid X.509 name"
    INVALID_DATE = "invalid date"
    INVALID_SPKI = "invalid subject public key info"
    INVALID_SIGNATURE_VALUE = "invalid signature value"
    INVALID_ATTRIBUTES = "invalid attributes"
    INVALID_NUMBER = "invalid number"
    DUPLICATE_EXTENSIONS = "duplicate extensions"
    SIGNATURE_UNSUPPORTED_ALGORITHM = "signature algorithm not supported"
    SIGNATURE_VERIFICATION_ERROR = "signature verification failed"
    INVALID_TAG = "invalid tag"
    UNEXPECTED_TAG = "unexpected tag"
    INVALID_LENGTH = "invalid length"
    BER_VALUE_ERROR = "invalid value"
    INCOMPLETE = "incomplete data"


class X509Error(Exception):
    """Error raised while decoding or checking X.509 structures."""

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind


class TagClass(enum.IntEnum):
    UNIVERSAL = 0
    APPLICATION = 1
    CONTEXT_SPECIFIC = 2
    PRIVATE = 3


class Tag(enum.IntEnum):
    """Universal tag numbers."""

    EOC = 0
    BOOLEAN = 1
    INTEGER = 2
    BIT_STRING = 3
    OCTET_STRING = 4
    NULL = 5
    OID = 6
    OBJECT_DESCRIPTOR = 7
    UTF8_STRING = 12
    SEQUENCE = 16
    SET = 17
    NUMERIC_STRING = 18
    PRINTABLE_STRING = 19
    T61_STRING = 20
    VIDEOTEX_STRING = 21
    IA5_STRING = 22
    UTC_TIME = 23
    GENERALIZED_TIME = 24
    GRAPHIC_STRING = 25
    VISIBLE_STRING = 26
    GENERAL_STRING = 27
    BMP_STRING = 30


def _base128(value: int) -> bytes:
    out = [value & 0x7F]
    value >>= 7
    while value:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(out))


@dataclass(frozen=True)
class Oid:
    """An object identifier, held as its tuple of arcs."""

    arcs: tuple[int, ...]

    def __init__(self, arcs) -> None:
        arcs = tuple(int(a) for a in arcs)
        if not arcs or any(a < 0 for a in arcs):
            raise ValueError("an OID needs at least one non-negative arc")
        object.__setattr__(self, "arcs", arcs)

    @classmethod
    def from_string(cls, text: str) -> Oid:
        return cls(int(part) for part in text.strip().split("."))

    @classmethod
    def from_der_content(cls, data: bytes) -> Oid:
        if not data or data[-1] & 0x80:
            raise X509Error(ErrorKind.BER_VALUE_ERROR, "malformed OID content")
        values, current = [], 0
        for byte in data:
            current = (current << 7) | (byte & 0x7F)
            if not byte & 0x80:
                values.append(current)
                current = 0
        first = values[0]
        if first < 40:
            head = [0, first]
        elif first < 80:
            head = [1, first - 40]
        else:
            head = [2, first - 80]
        return cls(head + values[1:])

    def to_der_content(self) -> bytes:
        if len(self.arcs) < 2:
            raise ValueError("an OID needs at least two arcs to be encoded")
        parts = [self.arcs[0] * 40 + self.arcs[1], *self.arcs[2:]]
        return b"".join(_base128(p) for p in parts)

    def starts_with(self, prefix: Oid) -> bool:
        return self.arcs[: len(prefix.arcs)] == prefix.arcs

    def __str__(self) -> str:
        return ".".join(str(a) for a in self.arcs)


@dataclass(frozen=True)
class Header:
    tag_class: TagClass
    constructed: bool
    tag: int
    length: int


_STRING_TAGS = {Tag.NUMERIC_STRING, Tag.PRINTABLE_STRING, Tag.UTF8_STRING, Tag.IA5_STRING}


@dataclass(frozen=True)
class Any:
    """A DER object with its header and raw content."""

    header: Header
    data: bytes = field(default=b"")

    @classmethod
    def from_tag_and_data(cls, tag: int, data: bytes) -> Any:
        constructed = tag in (Tag.SEQUENCE, Tag.SET)
        return cls(Header(TagClass.UNIVERSAL, constructed, int(tag), len(data)), bytes(data))

    @property
    def tag(self) -> int:
        return self.header.tag

    def as_bytes(self) -> bytes:
        return self.data

    def as_str(self) -> str:
        if self.header.tag_class != TagClass.UNIVERSAL or self.tag not in _STRING_TAGS:
            raise X509Error(ErrorKind.UNEXPECTED_TAG, f"unexpected tag {self.tag}")
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise X509Error(ErrorKind.INVALID_ATTRIBUTES) from exc

    def as_oid(self) -> Oid:
        if self.header.tag_class != TagClass.UNIVERSAL or self.tag != Tag.OID:
            raise X509Error(ErrorKind.UNEXPECTED_TAG, f"unexpected tag {self.tag}")
        return Oid.from_der_content(self.data)

    def to_der(self) -> bytes:
        h = self.header
        return encode_tlv(h.tag_class, h.constructed, h.tag, self.data)


@dataclass(frozen=True)
class BitString:
    unused_bits: int
    data: bytes


def _incomplete() -> X509Error:
    return X509Error(ErrorKind.INCOMPLETE)


def parse_header(data: bytes) -> tuple[Header, bytes]:
    """Parse an identifier and definite length; return the header and the rest."""
    data = bytes(data)
    if len(data) < 2:
        raise _incomplete()
    first = data[0]
    tag_class = TagClass(first >> 6)
    constructed = bool(first & 0x20)
    tag = first & 0x1F
    pos = 1
    if tag == 0x1F:
        tag = 0
        while True:
            if pos >= len(data):
                raise _incomplete()
            byte = data[pos]
            pos += 1
            tag = (tag << 7) | (byte & 0x7F)
            if not byte & 0x80:
                break
    if pos >= len(data):
        raise _incomplete()
    lead = data[pos]
    pos += 1
    if lead & 0x80:
        count = lead & 0x7F
        if count == 0:
            raise X509Error(ErrorKind.INVALID_LENGTH, "indefinite length in DER")
        if count > 8:
            raise X509Error(ErrorKind.INVALID_LENGTH)
        if pos + count > len(data):
            raise _incomplete()
        length = int.from_bytes(data[pos : pos + count], "big")
        pos += count
    else:
        length = lead
    return Header(tag_class, constructed, tag, length), data[pos:]


def parse_any(data: bytes) -> tuple[Any, bytes]:
    header, rest = parse_header(data)
    if len(rest) < header.length:
        raise _incomplete()
    return Any(header, rest[: header.length]), rest[header.length :]


def _parse_universal(data: bytes, tag: Tag) -> tuple[Any, bytes]:
    obj, rest = parse_any(data)
    if obj.header.tag_class != TagClass.UNIVERSAL or obj.tag != tag:
        raise X509Error(ErrorKind.UNEXPECTED_TAG, f"expected tag {tag.name}, got {obj.tag}")
    return obj, rest


def parse_sequence(data: bytes) -> tuple[bytes, bytes]:
    """Parse a SEQUENCE; return its content and the rest."""
    obj, rest = _parse_universal(data, Tag.SEQUENCE)
    if not obj.header.constructed:
        raise X509Error(ErrorKind.BER_VALUE_ERROR, "SEQUENCE must be constructed")
    return obj.data, rest


def parse_oid(data: bytes) -> tuple[Oid, bytes]:
    obj, rest = _parse_universal(data, Tag.OID)
    return Oid.from_der_content(obj.data), rest


def parse_integer_bytes(data: bytes) -> tuple[bytes, bytes]:
    obj, rest = _parse_universal(data, Tag.INTEGER)
    if not obj.data:
        raise X509Error(ErrorKind.BER_VALUE_ERROR, "empty INTEGER")
    return obj.data, rest


def parse_bit_string(data: bytes) -> tuple[BitString, bytes]:
    obj, rest = _parse_universal(data, Tag.BIT_STRING)
    if not obj.data or obj.data[0] > 7:
        raise X509Error(ErrorKind.BER_VALUE_ERROR, "malformed BIT STRING")
    return BitString(obj.data[0], obj.data[1:]), rest


def parse_octet_string(data: bytes) -> tuple[bytes, bytes]:
    obj, rest = _parse_universal(data, Tag.OCTET_STRING)
    return obj.data, rest


def encode_tlv(tag_class: int, constructed: bool, tag: int, content: bytes) -> bytes:
    """Encode one DER object from its parts."""
    first = (int(tag_class) << 6) | (0x20 if constructed else 0)
    if tag < 0x1F:
        ident = bytes([first | tag])
    else:
        ident = bytes([first | 0x1F]) + _base128(tag)
    size = len(content)
    if size < 0x80:
        length = bytes([size])
    else:
        raw = size.to_bytes((size.bit_length() + 7) // 8, "big")
        length = bytes([0x80 | len(raw)]) + raw
    return ident + length + bytes(content)