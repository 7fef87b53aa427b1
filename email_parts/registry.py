"""Process-wide registry of content-transfer encoders."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from .encoder import (
    Base64ContentEncoder,
    ContentEncoder,
    EightBitContentEncoder,
    QuotedPrintableContentEncoder,
)
from .errors import DuplicateEncodingName, ReservedEncodingName, UnknownEncoding

logger = logging.getLogger(__name__)

DEFAULT_ENCODINGS = ("quoted-printable", "base64", "8bit")


class ContentEncoderRegistry:
    """
    Append-only mapping from encoding name to encoder.

    The three default encodings are seeded on creation and can never be replaced
    or removed. A custom name can be registered once; replacing it requires an
    explicit `unregister` first.

    Not thread-safe: register encoders once during application start-up.
    """

    def __init__(self):
        self._encoders: Dict[str, ContentEncoder] = {
            "quoted-printable": QuotedPrintableContentEncoder(),
            "base64": Base64ContentEncoder(),
            "8bit": EightBitContentEncoder(),
        }

    def register(self, name: str, encoder: ContentEncoder) -> None:
        if name in DEFAULT_ENCODINGS:
            raise ReservedEncodingName(DEFAULT_ENCODINGS)
        if name in self._encoders:
            raise DuplicateEncodingName(name)
        if not isinstance(encoder, ContentEncoder):
            raise TypeError(
                f'Encoder "{name}" must provide name, encode_string() and encode_byte_stream() '
                f'("{type(encoder).__name__}" given).'
            )
        if getattr(encoder, "name", None) != name:
            logger.warning("Encoder registered as %r reports its name as %r", name, encoder.name)
        self._encoders[name] = encoder
        logger.info("Registered content encoder %r", name)

    def unregister(self, name: str) -> None:
        if name in DEFAULT_ENCODINGS:
            raise ReservedEncodingName(DEFAULT_ENCODINGS)
        if self._encoders.pop(name, None) is not None:
            logger.info("Unregistered content encoder %r", name)

    def get(self, name: str) -> Optional[ContentEncoder]:
        return self._encoders.get(name)

    def lookup(self, name: str) -> ContentEncoder:
        """Return the encoder for `name` or raise UnknownEncoding listing every known name."""
        try:
            return self._encoders[name]
        except KeyError:
            raise UnknownEncoding(name, self.names()) from None

    def is_known(self, name: str) -> bool:
        return name in self._encoders

    def names(self) -> List[str]:
        # dict order: defaults first, then custom encoders in registration order
        return list(self._encoders)

    def __contains__(self, name: object) -> bool:
        return name in self._encoders

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._encoders)


encoders = ContentEncoderRegistry()


def register_encoder(name: str, encoder: ContentEncoder) -> None:
    """Register `encoder` process-wide; parts created afterwards can use `name`."""
    encoders.register(name, encoder)


def unregister_encoder(name: str) -> None:
    encoders.unregister(name)


__all__ = [
    "DEFAULT_ENCODINGS",
    "ContentEncoderRegistry",
    "encoders",
    "register_encoder",
    "unregister_encoder",
]
