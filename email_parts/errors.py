"""Exceptions raised by email_parts."""

from __future__ import annotations

from typing import Iterable


class MimeError(Exception):
    """Base class for every error this package raises on its own."""


class InvalidBodyType(MimeError, TypeError):
    """The body is neither text, a readable stream, nor a file reference."""

    def __init__(self, body: object):
        super().__init__(
            f'The body of "email_parts.TextPart" must be a string, bytes, a readable stream '
            f'or a file reference ("{type(body).__name__}" given).'
        )


class UnknownEncoding(MimeError, ValueError):
    def __init__(self, encoding: str, known: Iterable[str]):
        self.encoding = encoding
        self.known = list(known)
        choices = ", ".join(f'"{n}"' for n in self.known)
        super().__init__(f'The encoding must be one of {choices} ("{encoding}" given).')


class ReservedEncodingName(MimeError, ValueError):
    """Raised when a caller tries to replace or remove a default encoder."""

    def __init__(self, defaults: Iterable[str]):
        names = [f'"{n}"' for n in defaults]
        listed = ", ".join(names[:-1]) + ", and " + names[-1] if len(names) > 1 else "".join(names)
        super().__init__(f"You are not allowed to change the default encoders ({listed}).")


class DuplicateEncodingName(MimeError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f'An encoder is already registered as "{name}"; unregister it first to replace it.'
        )


class EncoderSetupError(MimeError, RuntimeError):
    """A content encoder could not prepare its stream transform."""


__all__ = [
    "DuplicateEncodingName",
    "EncoderSetupError",
    "InvalidBodyType",
    "MimeError",
    "ReservedEncodingName",
    "UnknownEncoding",
]
