"""Utilities for building, summarizing and writing out text parts from tooling and scripts."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Tuple

from .encoder import b64url_encode
from .part import TextPart
from .registry import encoders
from .types import File


def parse_header_arg(value: str) -> Tuple[str, str]:
    """
    Split a "Name: value" command-line argument into (name, value).
    """
    name, sep, body = value.partition(":")
    if not sep or not name.strip():
        raise ValueError(f'Headers must look like "Name: value" ("{value}" given).')
    return name.strip(), body.strip()


def build_text_part(
    path: str | Path | None = None,
    *,
    stdin: Optional[BinaryIO] = None,
    charset: Optional[str] = None,
    subtype: str = "plain",
    encoding: str = "quoted-printable",
    disposition: Optional[str] = None,
    name: Optional[str] = None,
    headers: Iterable[str] = (),
) -> TextPart:
    """
    Build a TextPart from a file path, or from stdin when path is None or "-".
    `headers` are "Name: value" strings added to the part's custom headers.
    """
    if path is None or str(path) == "-":
        body: Any = stdin if stdin is not None else sys.stdin.buffer
    else:
        body = File(path)
    part = TextPart(
        body, charset, subtype, encoding, disposition=disposition, name=name
    )
    for raw in headers:
        part.headers.add_text_header(*parse_header_arg(raw))
    return part


def summarize_part(part: TextPart) -> Dict[str, Any]:
    """
    Reduce a TextPart down to the fields tooling usually wants to show.
    """
    headers = part.prepared_headers()
    for h in part.headers:
        headers.add(h)
    return {
        "content_type": f"{part.media_type}/{part.media_subtype}",
        "charset": part.charset,
        "encoding": part.encoding,
        "disposition": part.disposition,
        "headers": {h.name: h.body_to_string() for h in headers},
        "size": len(part.get_body()),
        "encoded_size": len(part.body_to_string()),
    }


def part_to_raw_payload(part: TextPart) -> Dict[str, str]:
    """
    Wrap the rendered part as {"raw": <base64url>}, the shape Gmail-style APIs accept.
    """
    return {"raw": b64url_encode(part.to_string())}


def write_part(part: TextPart, out: BinaryIO, *, stream: bool = True) -> int:
    """
    Write headers and encoded body to `out`. With stream=True the body is
    pulled chunk by chunk instead of being rendered in memory first.
    Returns the number of bytes written.
    """
    written = 0
    chunks = part.to_iterable() if stream else [part.to_string()]
    for chunk in chunks:
        out.write(chunk)
        written += len(chunk)
    return written


def list_encodings() -> List[str]:
    return encoders.names()


__all__ = [
    "build_text_part",
    "list_encodings",
    "parse_header_arg",
    "part_to_raw_payload",
    "summarize_part",
    "write_part",
]
