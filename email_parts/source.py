"""
Byte sources: where the unencoded body of a part comes from.

A body is literal text, a readable stream handle or a file reference. Each
variant exposes the same two operations: `as_string()` returns the whole
content and `as_stream()` yields it in chunks. Every call to `as_stream()`
starts again from the beginning of the content.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import PurePath
from typing import IO, Iterator, Optional

from . import config
from .errors import InvalidBodyType
from .types import File

logger = logging.getLogger(__name__)


class ByteSource:
    """Common interface of the three body variants."""

    def as_string(self) -> bytes:
        return b"".join(self.as_stream())

    def as_stream(self) -> Iterator[bytes]:
        raise NotImplementedError

    def to_literal(self) -> "LiteralSource":
        """Read everything once and return it as an in-memory source."""
        return LiteralSource(self.as_string())


class LiteralSource(ByteSource):
    def __init__(self, content: bytes):
        self.content = content

    def as_string(self) -> bytes:
        return self.content

    def as_stream(self) -> Iterator[bytes]:
        size = config.CHUNK_SIZE
        for start in range(0, len(self.content), size):
            yield self.content[start:start + size]

    def to_literal(self) -> "LiteralSource":
        return self

    def __repr__(self) -> str:
        return f"LiteralSource({len(self.content)} bytes)"


class StreamSource(ByteSource):
    """
    A caller-owned readable handle, binary or text mode.

    Seekable handles are rewound before every pass. Anything else is copied once,
    on first access, into a spooled temporary file (kept in memory up to
    SPOOL_MAX_SIZE, then on disk) and later passes read that copy.
    The handle itself is never closed here. Only one pass should be consumed at
    a time since passes share the handle position.
    """

    def __init__(self, handle: IO, charset: Optional[str] = None):
        self.handle = handle
        self.charset = charset
        self._spool: Optional[IO[bytes]] = None

    def as_stream(self) -> Iterator[bytes]:
        fh = self._rewindable()
        fh.seek(0)
        yield from _read_chunks(fh, self.charset)

    def close(self) -> None:
        if self._spool is not None:
            self._spool.close()
            self._spool = None

    def _rewindable(self) -> IO:
        if self._spool is not None:
            return self._spool
        if _seekable(self.handle):
            return self.handle
        spool = tempfile.SpooledTemporaryFile(max_size=config.SPOOL_MAX_SIZE)
        for chunk in _read_chunks(self.handle, self.charset):
            spool.write(chunk)
        logger.debug("Buffered non-seekable stream (%d bytes) for re-reading", spool.tell())
        self._spool = spool
        return spool

    def __repr__(self) -> str:
        return f"StreamSource({self.handle!r})"


class FileSource(ByteSource):
    """A file on disk, opened lazily and closed again after every pass."""

    def __init__(self, file: File):
        self.file = file

    def as_string(self) -> bytes:
        logger.debug("Reading %s", self.file.path)
        with open(self.file.path, "rb") as fh:
            return fh.read()

    def as_stream(self) -> Iterator[bytes]:
        logger.debug("Opening %s for streaming", self.file.path)
        # the with block also runs when a consumer abandons the generator
        with open(self.file.path, "rb") as fh:
            yield from _read_chunks(fh)

    def __repr__(self) -> str:
        return f"FileSource({str(self.file.path)!r})"


def byte_source(body, charset: Optional[str] = None) -> ByteSource:
    """
    Wrap a part body in the matching ByteSource without doing any I/O.
    Raises InvalidBodyType for anything that is not text, a stream or a file reference.
    """
    if isinstance(body, ByteSource):
        return body
    if isinstance(body, str):
        return LiteralSource(body.encode(charset or config.DEFAULT_CHARSET))
    if isinstance(body, (bytes, bytearray, memoryview)):
        return LiteralSource(bytes(body))
    if isinstance(body, File):
        return FileSource(body)
    if isinstance(body, PurePath):
        return FileSource(File(body))
    if callable(getattr(body, "read", None)):
        return StreamSource(body, charset)
    raise InvalidBodyType(body)

# ------------------ utilities ------------------

def _seekable(handle) -> bool:
    seekable = getattr(handle, "seekable", None)
    return bool(seekable()) if callable(seekable) else False

def _read_chunks(fh, charset: Optional[str] = None) -> Iterator[bytes]:
    size = config.CHUNK_SIZE
    while True:
        data = fh.read(size)
        if not data:
            return
        if isinstance(data, str):
            data = data.encode(charset or config.DEFAULT_CHARSET)
        yield data


__all__ = [
    "ByteSource",
    "FileSource",
    "LiteralSource",
    "StreamSource",
    "byte_source",
]
