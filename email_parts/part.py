from __future__ import annotations
from typing import Iterator, Optional
import copy
import logging

from . import config
from .encoder import ContentEncoder
from .errors import EncoderSetupError, MimeError
from .registry import ContentEncoderRegistry, encoders, register_encoder
from .source import LiteralSource, byte_source
from .types import Headers

logger = logging.getLogger(__name__)

_EXHAUSTED = object()

# ------------------ Public API ------------------

class TextPart:
    """
    A text MIME part: a body (text, stream handle or file reference) plus the
    content-transfer encoding used to render it.

      part = TextPart("Hello", subtype="html", encoding="base64")
      part.body_to_string()      # encoded bytes
      part.prepared_headers()    # Content-Type + Content-Transfer-Encoding
      part.to_string()           # headers, blank line, encoded body

    Media type, charset and encoding are fixed at construction. The only mutable
    state is `headers`, the bag of custom headers the caller wants emitted with
    the part.

    Pickling or copying a part backed by a stream or a file reads the body once
    and turns it into literal content, on the original as well; the stream
    handle itself is never carried over.
    """

    media_type = "text"

    def __init__(
        self,
        body,
        charset: Optional[str] = None,
        subtype: str = "plain",
        encoding: Optional[str] = "quoted-printable",
        *,
        disposition: Optional[str] = None,
        name: Optional[str] = None,
        registry: Optional[ContentEncoderRegistry] = None,
    ):
        self._source = byte_source(body, charset)
        if charset is None and isinstance(self._source, LiteralSource):
            charset = config.DEFAULT_CHARSET
        if encoding is None:
            encoding = "quoted-printable" if charset else "base64"
        self._registry = registry
        self._encoder = self._resolve_encoder(encoding)
        self._charset = charset
        self._subtype = subtype
        self._encoding = encoding
        self._disposition = disposition
        self._name = name
        self.headers = Headers()

    @classmethod
    def add_encoder(cls, name: str, encoder: ContentEncoder) -> None:
        """Register a custom encoder process-wide (same as registry.register_encoder)."""
        register_encoder(name, encoder)

    @property
    def media_subtype(self) -> str:
        return self._subtype

    @property
    def charset(self) -> Optional[str]:
        return self._charset

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def disposition(self) -> Optional[str]:
        return self._disposition

    @property
    def name(self) -> Optional[str]:
        return self._name

    def get_body(self) -> bytes:
        """The whole body, unencoded."""
        return self._source.as_string()

    def body_to_string(self) -> bytes:
        """The whole body, encoded with the part's transfer encoding."""
        return self._encoder.encode_string(self.get_body(), self._charset)

    def body_to_iterable(self) -> Iterator[bytes]:
        """
        The encoded body as a lazy sequence of chunks. Each call starts over from
        the beginning; abandoning the iterator releases any file it opened.
        """
        chunks = self._source.as_stream()
        try:
            # generator encoders only run their setup on the first pull
            try:
                encoded = iter(self._encoder.encode_byte_stream(chunks))
                first = next(encoded, _EXHAUSTED)
            except (MimeError, OSError):
                raise
            except Exception as exc:
                raise EncoderSetupError(
                    f'Unable to set up the "{self._encoding}" content encoder: {exc}'
                ) from exc
            if first is _EXHAUSTED:
                return
            yield first
            yield from encoded
        finally:
            close = getattr(chunks, "close", None)
            if close is not None:
                close()

    render_body_to_string = body_to_string
    render_body_to_stream = body_to_iterable

    def prepared_headers(self) -> Headers:
        """
        Headers describing the body, built fresh on every call.
        Custom headers from `self.headers` are not included.
        """
        headers = Headers()
        params = {}
        if self._charset:
            params["charset"] = self._charset
        if self._name and self._disposition != "form-data":
            params["name"] = self._name
        headers.add_parameterized_header("Content-Type", f"{self.media_type}/{self._subtype}", params)
        headers.add_text_header("Content-Transfer-Encoding", self._encoder.name)
        if self._disposition:
            headers.add_parameterized_header(
                "Content-Disposition", self._disposition, {"name": self._name} if self._name else {}
            )
        return headers

    def to_string(self) -> bytes:
        """Prepared headers, custom headers, a blank line, then the encoded body."""
        return self._header_block() + b"\r\n" + self.body_to_string()

    def to_iterable(self) -> Iterator[bytes]:
        yield self._header_block() + b"\r\n"
        yield from self.body_to_iterable()

    def as_debug_string(self) -> str:
        out = f"{self.media_type}/{self._subtype}"
        if self._charset:
            out += f" charset: {self._charset}"
        if self._disposition:
            out += f" disposition: {self._disposition}"
        return out

    def __bytes__(self) -> bytes:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.as_debug_string()} encoding: {self._encoding}>"

    # ------------------ pickling / copying ------------------

    def __getstate__(self):
        self._drain_body()
        state = self.__dict__.copy()
        state["headers"] = Headers(*self.headers)
        # pickles look the encoder up again by name on restore
        del state["_encoder"]
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._encoder = self._resolve_encoder(self._encoding)

    def __copy__(self):
        self._drain_body()
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.headers = Headers(*self.headers)
        return clone

    def __deepcopy__(self, memo):
        clone = self.__copy__()
        clone.headers = copy.deepcopy(self.headers, memo)
        return clone

    def _drain_body(self) -> None:
        if isinstance(self._source, LiteralSource):
            return
        logger.debug("Reading %r into memory to serialize %s", self._source, self.as_debug_string())
        old, self._source = self._source, self._source.to_literal()
        close = getattr(old, "close", None)
        if close is not None:
            close()

    # ------------------ utilities ------------------

    def _resolve_encoder(self, encoding: str) -> ContentEncoder:
        registry = self._registry if self._registry is not None else encoders
        return registry.lookup(encoding)

    def _header_block(self) -> bytes:
        headers = self.prepared_headers()
        for h in self.headers:
            headers.add(h)
        return headers.to_string().encode("utf-8")
