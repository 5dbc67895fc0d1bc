"""Reading PEM-encapsulated data: a labelled base64 block between BEGIN and END lines."""

from __future__ import annotations

import base64
import binascii
import io
from dataclasses import dataclass
from typing import BinaryIO, Iterator


class PemError(Exception):
    """A PEM block could not be read."""


class MissingHeaderError(PemError):
    """No BEGIN line was found."""


class InvalidHeaderError(PemError):
    """The BEGIN line is malformed."""


class IncompletePemError(PemError):
    """The input ended before the END line."""


class Base64DecodeError(PemError):
    """The block content is not valid base64."""


def _read_line(stream) -> str:
    line = stream.readline()
    if isinstance(line, bytes):
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PemError("stream did not contain valid UTF-8") from exc
    return line


@dataclass(frozen=True)
class Pem:
    """A decoded PEM block: its label and its binary contents."""

    label: str
    contents: bytes

    @classmethod
    def read(cls, stream: BinaryIO) -> tuple[Pem, int]:
        """Read the next PEM block; return it and the stream position after it."""
        while True:
            line = _read_line(stream)
            if not line:
                raise MissingHeaderError("no PEM header found")
            if line.startswith("-----BEGIN "):
                break
        parts = line.split("-----")
        if len(parts) < 3 or parts[0]:
            raise InvalidHeaderError(f"invalid PEM header: {line.rstrip()!r}")
        label = parts[1].removeprefix("BEGIN ").split("-")[0]

        body = []
        while True:
            line = _read_line(stream)
            if not line:
                raise IncompletePemError("PEM block has no END line")
            if line.startswith("-----END "):
                break
            body.append(line.rstrip())

        try:
            contents = base64.b64decode("".join(body), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise Base64DecodeError("invalid base64 in PEM block") from exc
        return cls(label, contents), stream.tell()

    @classmethod
    def iter_from_buffer(cls, data: bytes) -> Iterator[Pem]:
        """Yield every PEM block of a buffer, ignoring lines outside blocks."""
        return cls.iter_from_reader(io.BytesIO(bytes(data)))

    @classmethod
    def iter_from_reader(cls, reader: BinaryIO) -> Iterator[Pem]:
        """Yield every PEM block of a reader; an invalid block raises PemError."""
        while True:
            try:
                pem, _ = cls.read(reader)
            except MissingHeaderError:
                return
            yield pem


def parse_x509_pem(data: bytes) -> tuple[Pem, bytes]:
    """Decode the first PEM block of a buffer; return it and the remaining input."""
    data = bytes(data)
    pem, consumed = Pem.read(io.BytesIO(data))
    return pem, data[consumed:]