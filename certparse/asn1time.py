"""ASN.1 UTCTime and GeneralizedTime values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

from .asn1 import ErrorKind, Tag, TagClass, X509Error, parse_any

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_UTC_RE = re.compile(rb"(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})?(Z|[+-]\d{4})\Z")
_GEN_RE = re.compile(
    rb"(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})?(?:[.,](\d+))?(Z|[+-]\d{4})?\Z"
)


def _zone(text: bytes | None) -> timezone:
    if not text or text == b"Z":
        return timezone.utc
    sign = -1 if text[:1] == b"-" else 1
    hours, minutes = int(text[1:3]), int(text[3:5])
    if hours > 23 or minutes > 59:
        raise ValueError("bad offset")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _decode(tag: int, content: bytes) -> datetime:
    try:
        if tag == Tag.UTC_TIME:
            m = _UTC_RE.match(content)
            if not m:
                raise ValueError("bad UTCTime")
            yy = int(m[1])
            year = 2000 + yy if yy < 50 else 1900 + yy
            fraction = 0
        else:
            m = _GEN_RE.match(content)
            if not m:
                raise ValueError("bad GeneralizedTime")
            year = int(m[1])
            fraction = int((m[7] or b"0")[:6].ljust(6, b"0"))
        dt = datetime(
            year, int(m[2]), int(m[3]), int(m[4]), int(m[5]), int(m[6] or 0),
            fraction, tzinfo=_zone(m[7] if tag == Tag.UTC_TIME else m[8]),
        )
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError) as exc:
        raise X509Error(ErrorKind.BER_VALUE_ERROR, str(exc)) from exc


def parse_choice_of_time(data: bytes) -> tuple[datetime, bytes]:
    """Parse a UTCTime or GeneralizedTime; return the UTC datetime and the rest."""
    obj, rest = parse_any(data)
    if obj.header.tag_class != TagClass.UNIVERSAL or obj.tag not in (
        Tag.UTC_TIME,
        Tag.GENERALIZED_TIME,
    ):
        raise X509Error(ErrorKind.UNEXPECTED_TAG, f"unexpected tag {obj.tag}")
    return _decode(obj.tag, obj.data), rest


@dataclass(frozen=True, order=True)
class ASN1Time:
    """An ASN.1 timestamp."""

    dt: datetime

    def __init__(self, dt: datetime) -> None:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        object.__setattr__(self, "dt", dt)

    @classmethod
    def from_der(cls, data: bytes) -> tuple[ASN1Time, bytes]:
        try:
            dt, rest = parse_choice_of_time(data)
        except X509Error as exc:
            raise X509Error(ErrorKind.INVALID_DATE) from exc
        return cls(dt), rest

    @classmethod
    def from_der_opt(cls, data: bytes) -> tuple[ASN1Time | None, bytes]:
        """Parse an optional time; a missing or differently tagged value gives None."""
        if not data:
            return None, data
        try:
            dt, rest = parse_choice_of_time(data)
        except X509Error as exc:
            if exc.kind in (ErrorKind.UNEXPECTED_TAG, ErrorKind.INVALID_TAG):
                return None, data
            raise X509Error(ErrorKind.INVALID_DATE) from exc
        return cls(dt), rest

    @classmethod
    def from_timestamp(cls, secs: int) -> ASN1Time:
        try:
            return cls(_EPOCH + timedelta(seconds=secs))
        except OverflowError as exc:
            raise X509Error(ErrorKind.INVALID_DATE) from exc

    @classmethod
    def now(cls) -> ASN1Time:
        return cls(datetime.now(timezone.utc))

    def timestamp(self) -> int:
        return (self.dt - _EPOCH) // timedelta(seconds=1)

    def to_datetime(self) -> datetime:
        return self.dt

    def to_rfc2822(self) -> str:
        """Format as RFC 2822; raise ValueError for years before 1900."""
        if self.dt.year < 1900:
            raise ValueError("year before 1900 cannot be represented in RFC 2822")
        return format_datetime(self.dt)

    def __str__(self) -> str:
        d = self.dt
        offset = d.utcoffset() or timedelta(0)
        sign = "-" if offset < timedelta(0) else "+"
        minutes = abs(offset) // timedelta(minutes=1)
        return (
            f"{_MONTHS[d.month - 1]} {d.day:>2} {d.hour:02}:{d.minute:02}:{d.second:02} "
            f"{d.year} {sign}{minutes // 60:02}:{minutes % 60:02}"
        )

    def __add__(self, other: timedelta) -> ASN1Time:
        if not isinstance(other, timedelta):
            return NotImplemented
        return ASN1Time(self.dt + other)

    def __sub__(self, other: ASN1Time) -> timedelta | None:
        if not isinstance(other, ASN1Time):
            return NotImplemented
        return self.dt - other.dt if self.dt > other.dt else None