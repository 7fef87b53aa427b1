"""Text MIME parts with a pluggable content-transfer-encoding pipeline."""

from .encoder import (
    Base64ContentEncoder,
    ContentEncoder,
    EightBitContentEncoder,
    QuotedPrintableContentEncoder,
)
from .errors import (
    DuplicateEncodingName,
    EncoderSetupError,
    InvalidBodyType,
    MimeError,
    ReservedEncodingName,
    UnknownEncoding,
)
from .part import TextPart
from .registry import DEFAULT_ENCODINGS, ContentEncoderRegistry, encoders, register_encoder, unregister_encoder
from .types import File, Headers, ParameterizedHeader, UnstructuredHeader

__all__ = [
    "Base64ContentEncoder",
    "ContentEncoder",
    "ContentEncoderRegistry",
    "DEFAULT_ENCODINGS",
    "DuplicateEncodingName",
    "EightBitContentEncoder",
    "EncoderSetupError",
    "File",
    "Headers",
    "InvalidBodyType",
    "MimeError",
    "ParameterizedHeader",
    "QuotedPrintableContentEncoder",
    "ReservedEncodingName",
    "TextPart",
    "UnknownEncoding",
    "UnstructuredHeader",
    "encoders",
    "register_encoder",
    "unregister_encoder",
]
