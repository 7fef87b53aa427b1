"""Content-transfer encoders for part bodies, plus header encoding helpers."""

from __future__ import annotations

import base64
from email.header import Header
from typing import Iterable, Iterator, Optional, Protocol, runtime_checkable

from . import config

# Hard ceiling for encoded line length in both quoted-printable and base64 (RFC 2045 6.7, 6.8)
RFC_MAX_LINE_LENGTH = 76

_CR, _LF, _SP, _TAB, _EQ = 13, 10, 32, 9, 61
_QP_SAFE = frozenset(range(33, 127)) - {_EQ}


@runtime_checkable
class ContentEncoder(Protocol):
    """
    What TextPart needs from a transfer encoding.

    `name` labels the Content-Transfer-Encoding header. `encode_string` works on a
    fully materialized body; `encode_byte_stream` transforms an iterable of byte
    chunks lazily and must produce the same bytes as `encode_string` applied to
    the concatenated chunks.
    """

    name: str

    def encode_string(
        self,
        content: bytes,
        charset: Optional[str] = "utf-8",
        first_line_offset: int = 0,
        max_line_length: int = 0,
    ) -> bytes:
        ...

    def encode_byte_stream(self, stream: Iterable[bytes], max_line_length: int = 0) -> Iterator[bytes]:
        ...


def _line_limit(max_line_length: int) -> int:
    default = min(config.MAX_LINE_LENGTH, RFC_MAX_LINE_LENGTH)
    if max_line_length <= 0 or max_line_length > RFC_MAX_LINE_LENGTH:
        return default
    return max_line_length


def _as_bytes(content: bytes | str, charset: Optional[str]) -> bytes:
    if isinstance(content, str):
        return content.encode(charset or config.DEFAULT_CHARSET)
    return bytes(content)


class _QuotedPrintableWriter:
    """
    Incremental RFC 2045 quoted-printable encoder.

    Whitespace is held back until the next byte shows whether it ends a line,
    and a trailing CR is held until we know whether an LF follows, so chunk
    boundaries never change the output.
    """

    def __init__(self, max_line_length: int = 0, first_line_offset: int = 0):
        self.limit = _line_limit(max_line_length)
        self.column = max(first_line_offset, 0)
        self.pending_ws = bytearray()
        self.pending_cr = False

    def feed(self, data: bytes) -> bytes:
        out = bytearray()
        for b in data:
            if self.pending_cr:
                self.pending_cr = False
                if b == _LF:
                    self._hard_break(out)
                    continue
                self._flush_ws(out, trailing=False)
                self._emit(out, b"=0D")
            if b == _SP or b == _TAB:
                self.pending_ws.append(b)
            elif b == _CR:
                self.pending_cr = True
            elif b == _LF:
                self._hard_break(out)
            else:
                self._flush_ws(out, trailing=False)
                self._emit(out, bytes((b,)) if b in _QP_SAFE else b"=%02X" % b)
        return bytes(out)

    def finish(self) -> bytes:
        out = bytearray()
        if self.pending_cr:
            self.pending_cr = False
            self._flush_ws(out, trailing=False)
            self._emit(out, b"=0D")
        self._flush_ws(out, trailing=True)
        return bytes(out)

    def _hard_break(self, out: bytearray) -> None:
        self._flush_ws(out, trailing=True)
        out += b"\r\n"
        self.column = 0

    def _flush_ws(self, out: bytearray, trailing: bool) -> None:
        if not self.pending_ws:
            return
        last = len(self.pending_ws) - 1
        for i, b in enumerate(self.pending_ws):
            self._emit(out, b"=%02X" % b if trailing and i == last else bytes((b,)))
        self.pending_ws.clear()

    def _emit(self, out: bytearray, token: bytes) -> None:
        # keep room for the "=" of a soft line break
        if self.column and self.column + len(token) > self.limit - 1:
            out += b"=\r\n"
            self.column = 0
        out += token
        self.column += len(token)


class _Base64Writer:
    """Incremental base64 encoder that wraps output lines with CRLF."""

    def __init__(self, max_line_length: int = 0, first_line_offset: int = 0):
        self.limit = _line_limit(max_line_length)
        self.column = max(first_line_offset, 0)
        self.remainder = b""

    def feed(self, data: bytes) -> bytes:
        data = self.remainder + data
        cut = len(data) - len(data) % 3
        self.remainder = data[cut:]
        return self._wrap(base64.b64encode(data[:cut]))

    def finish(self) -> bytes:
        tail, self.remainder = self.remainder, b""
        return self._wrap(base64.b64encode(tail))

    def _wrap(self, encoded: bytes) -> bytes:
        out = bytearray()
        pos = 0
        while pos < len(encoded):
            if self.column >= self.limit:
                out += b"\r\n"
                self.column = 0
            piece = encoded[pos:pos + self.limit - self.column]
            out += piece
            pos += len(piece)
            self.column += len(piece)
        return bytes(out)


def _run_writer(writer, stream: Iterable[bytes]) -> Iterator[bytes]:
    for chunk in stream:
        out = writer.feed(chunk)
        if out:
            yield out
    tail = writer.finish()
    if tail:
        yield tail


class QuotedPrintableContentEncoder:
    name = "quoted-printable"

    def encode_string(self, content, charset="utf-8", first_line_offset=0, max_line_length=0) -> bytes:
        writer = _QuotedPrintableWriter(max_line_length, first_line_offset)
        return writer.feed(_as_bytes(content, charset)) + writer.finish()

    def encode_byte_stream(self, stream, max_line_length=0) -> Iterator[bytes]:
        return _run_writer(_QuotedPrintableWriter(max_line_length), stream)


class Base64ContentEncoder:
    name = "base64"

    def encode_string(self, content, charset="utf-8", first_line_offset=0, max_line_length=0) -> bytes:
        writer = _Base64Writer(max_line_length, first_line_offset)
        return writer.feed(_as_bytes(content, charset)) + writer.finish()

    def encode_byte_stream(self, stream, max_line_length=0) -> Iterator[bytes]:
        return _run_writer(_Base64Writer(max_line_length), stream)


class EightBitContentEncoder:
    """Marker encoding for content that is already 8bit-clean: bytes pass through untouched."""

    name = "8bit"

    def encode_string(self, content, charset="utf-8", first_line_offset=0, max_line_length=0) -> bytes:
        return _as_bytes(content, charset)

    def encode_byte_stream(self, stream, max_line_length=0) -> Iterator[bytes]:
        for chunk in stream:
            yield chunk


def b64url_encode(data: str | bytes | None) -> str:
    """
    Encode bytes as the unpadded URL-safe base64 that Gmail-style APIs expect for `raw` payloads.
    """
    if not data:
        return ""
    raw = data.encode() if isinstance(data, str) else data
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def encode_header_str(value: str | bytes | None, charset: str = "utf-8") -> str:
    """
    Encode a header value as RFC 2047 encoded words when it is not plain ASCII.
    """
    if value is None:
        return ""
    if isinstance(value, bytes):
        value = value.decode(charset, "replace")
    if value.isascii():
        return value
    return Header(value, charset, maxlinelen=RFC_MAX_LINE_LENGTH).encode(linesep="\r\n")


__all__ = [
    "Base64ContentEncoder",
    "ContentEncoder",
    "EightBitContentEncoder",
    "QuotedPrintableContentEncoder",
    "RFC_MAX_LINE_LENGTH",
    "b64url_encode",
    "encode_header_str",
]
