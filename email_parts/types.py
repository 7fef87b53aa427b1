from __future__ import annotations
from dataclasses import dataclass, field
from email.utils import encode_rfc2231
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union
import mimetypes
import os

from .encoder import encode_header_str

# Characters that force a parameter value into a quoted-string (RFC 2045 tspecials + space)
_TSPECIALS = set('()<>@,;:\\"/[]?= \t')

@dataclass
class File:
    """
    Reference to a file on disk used as a part body.
    - The file is not opened here; byte sources open it lazily on every read pass.
    - `content_type` and `filename` are guessed from the path when omitted.
    """
    path: Union[str, os.PathLike]
    content_type: Optional[str] = None        # e.g. "text/plain"
    filename: Optional[str] = None            # basename of `path` by default

    def __post_init__(self):
        self.path = Path(self.path)
        if self.filename is None:
            self.filename = self.path.name
        if self.content_type is None:
            guessed, _ = mimetypes.guess_type(self.path.name)
            self.content_type = guessed or "application/octet-stream"

@dataclass
class UnstructuredHeader:
    """
    A header whose body is free text, e.g. Content-Transfer-Encoding or a custom X- header.
    """
    name: str
    value: str

    def body_to_string(self) -> str:
        return encode_header_str(self.value)

    def to_string(self) -> str:
        return f"{self.name}: {self.body_to_string()}"

@dataclass
class ParameterizedHeader:
    """
    A header with a main value followed by `; key=value` parameters (Content-Type, Content-Disposition).
    """
    name: str
    value: str
    parameters: Dict[str, str] = field(default_factory=dict)

    def body_to_string(self) -> str:
        out = [self.value]
        for key, val in self.parameters.items():
            out.append(_format_parameter(key, val))
        return "; ".join(out)

    def to_string(self) -> str:
        return f"{self.name}: {self.body_to_string()}"

Header = Union[UnstructuredHeader, ParameterizedHeader]

class Headers:
    """
    Ordered, case-insensitive collection of headers.
    Several headers may share a name; `get` returns the first one.
    """

    def __init__(self, *headers: Header):
        self._headers: List[Header] = list(headers)

    def add(self, header: Header) -> "Headers":
        self._headers.append(header)
        return self

    def add_text_header(self, name: str, value: str) -> "Headers":
        return self.add(UnstructuredHeader(name, value))

    def add_parameterized_header(self, name: str, value: str, parameters: Optional[Dict[str, str]] = None) -> "Headers":
        return self.add(ParameterizedHeader(name, value, dict(parameters or {})))

    def get(self, name: str) -> Optional[Header]:
        for h in self._headers:
            if h.name.lower() == name.lower():
                return h
        return None

    def all(self, name: str) -> List[Header]:
        return [h for h in self._headers if h.name.lower() == name.lower()]

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def remove(self, name: str) -> None:
        self._headers = [h for h in self._headers if h.name.lower() != name.lower()]

    def names(self) -> List[str]:
        return [h.name for h in self._headers]

    def to_string(self) -> str:
        return "".join(h.to_string() + "\r\n" for h in self._headers)

    def __iter__(self) -> Iterator[Header]:
        return iter(list(self._headers))

    def __len__(self) -> int:
        return len(self._headers)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._headers == other._headers

    def __repr__(self) -> str:
        return f"Headers({', '.join(repr(h) for h in self._headers)})"

# ------------------ utilities ------------------

def _format_parameter(key: str, value: str) -> str:
    if not value.isascii():
        return f"{key}*={encode_rfc2231(value, 'utf-8')}"
    if not value or any(c in _TSPECIALS for c in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'{key}="{escaped}"'
    return f"{key}={value}"
