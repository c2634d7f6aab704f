# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""multipart/form-data encoding.

The byte layout produced here is what multipart-consuming servers parse, so it is
kept exact: CRLF line endings, one part per field, a closing delimiter line.
"""

from __future__ import annotations

import mimetypes
import secrets
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"
CRLF = b"\r\n"


@dataclass(frozen=True)
class MultipartField:
    """One form part: raw bytes plus the field name, MIME type and file name sent with them."""

    data: bytes
    name: str
    mime_type: str
    file_name: str

    @classmethod
    def from_path(cls, path: str | Path, name: str, *, mime_type: str | None = None) -> MultipartField:
        """Read a file from disk into a field, guessing the MIME type from its extension."""
        file_path = Path(path)
        return cls(
            data=file_path.read_bytes(),
            name=name,
            mime_type=mime_type or mime_type_for(file_path.name),
            file_name=file_path.name,
        )


def mime_type_for(file_name: str) -> str:
    """Return the MIME type registered for a file name's extension."""
    guessed, _ = mimetypes.guess_type(str(file_name or ""), strict=False)
    return guessed or DEFAULT_MIME_TYPE


def new_boundary() -> str:
    return f"Boundary-{secrets.token_hex(16).upper()}"


def multipart_content_type(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


def encode_multipart(fields: Iterable[MultipartField], boundary: str) -> bytes:
    delimiter = f"--{boundary}".encode()
    body = bytearray()
    for part in fields:
        body += delimiter + CRLF
        body += f'Content-Disposition: form-data; name="{part.name}"; filename="{part.file_name}"'.encode() + CRLF
        body += f"Content-Type: {part.mime_type}".encode() + CRLF + CRLF
        body += bytes(part.data) + CRLF
    body += delimiter + b"--" + CRLF
    return bytes(body)


__all__ = [
    "DEFAULT_MIME_TYPE",
    "MultipartField",
    "encode_multipart",
    "mime_type_for",
    "multipart_content_type",
    "new_boundary",
]
