# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across SimpleNet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .methods import HttpMethod

Headers = dict[str, str]

JSONValue = Union[str, int, float, bool, None, list["JSONValue"], dict[str, "JSONValue"]]
JSONObject = dict[str, JSONValue]


@dataclass(frozen=True)
class HttpRequest:
    """Concrete wire request materialized from an endpoint descriptor."""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        lower = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lower:
                return value
        return default


@dataclass
class HttpResponse:
    """Normalized transport response.

    ``status_code`` is None when the transport produced something that is not an
    HTTP response; the executor reports that as ``NO_RESPONSE``.
    """

    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


__all__ = ["Headers", "HttpRequest", "HttpResponse", "JSONObject", "JSONValue"]
