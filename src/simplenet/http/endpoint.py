# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Declarative endpoint descriptors and their materialization into wire requests.

An endpoint variant subclasses ``Endpoint`` and overrides what it needs (usually
``path``, ``method`` and one of the body attributes); everything else falls back
to the defaults declared on the protocol. ``StaticEndpoint`` covers the common
case where a variant is just a bag of values.

Materialization is pure: it never raises and never touches the network. A
descriptor whose URL cannot be resolved materializes to ``None``; a JSON body
that cannot be serialized is left off the request.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import httpx

from .methods import HttpMethod
from .models import HttpRequest, JSONValue
from .multipart import MultipartField, encode_multipart, multipart_content_type, new_boundary

logger = logging.getLogger(__name__)

QueryItems = list[tuple[str, str]]

# pchar sub-delims plus ":" "@" and the segment separator; "?" "#" and "%" get encoded
PATH_SAFE = "/:@!$&'()*+,;="


class Endpoint(Protocol):
    """Capability set describing one logical HTTP call."""

    path: str
    method: HttpMethod
    scheme: str = "https"
    host: str = ""
    base_url: str | None = None
    is_authenticated: bool = False
    headers: Mapping[str, str] | None = None
    json_body: Mapping[str, JSONValue] | None = None
    multipart_fields: Sequence[MultipartField] | None = None

    @property
    def request(self) -> HttpRequest | None:
        """The concrete request for this endpoint, or None when its URL is invalid."""
        return materialize(self)


@dataclass(frozen=True)
class StaticEndpoint(Endpoint):
    """Endpoint variant built from plain values."""

    path: str
    method: HttpMethod = HttpMethod.GET
    scheme: str = "https"
    host: str = ""
    base_url: str | None = None
    is_authenticated: bool = False
    headers: Mapping[str, str] | None = None
    json_body: Mapping[str, JSONValue] | None = None
    multipart_fields: Sequence[MultipartField] | None = None


def resolve_url(endpoint: Endpoint) -> str | None:
    """
    Resolve the absolute URL of an endpoint.

    A ``base_url`` is concatenated with ``path`` verbatim; otherwise the URL is
    assembled from scheme/host/path components, which percent-encodes the path.
    """
    try:
        if endpoint.base_url is not None:
            url = httpx.URL(f"{endpoint.base_url}{endpoint.path}")
        else:
            url = httpx.URL(scheme=endpoint.scheme, host=endpoint.host, path=quote(endpoint.path, safe=PATH_SAFE))
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if not url.scheme or not url.host:
        return None
    return str(url)


def _query_value(value: JSONValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def build_query_items(params: Mapping[str, JSONValue] | None) -> QueryItems:
    """
    Flatten a JSON body into query items, preserving mapping order.

    Sequence values emit one ``key[]`` item per element followed by a bare ``key``
    item carrying the whole sequence rendered as a string.
    """
    items: QueryItems = []
    for key, value in (params or {}).items():
        if isinstance(value, (list, tuple)):
            items.extend((f"{key}[]", _query_value(element)) for element in value)
        items.append((key, _query_value(value)))
    return items


def append_query_items(url: str, items: QueryItems) -> str:
    """Append query items after whatever query the URL already carries."""
    if not items:
        return url
    parts = urlsplit(url)
    encoded = urlencode(items, quote_via=quote, safe="[]")
    query = f"{parts.query}&{encoded}" if parts.query else encoded
    return urlunsplit(parts._replace(query=query))


def encode_json_body(body: Mapping[str, JSONValue]) -> bytes:
    return json.dumps(dict(body), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _set_header(headers: dict[str, str], name: str, value: str) -> None:
    lower = name.lower()
    for key in [key for key in headers if key.lower() == lower]:
        del headers[key]
    headers[name] = value


def materialize(endpoint: Endpoint) -> HttpRequest | None:
    """Turn an endpoint descriptor into a concrete request (None when the URL is invalid)."""
    url = resolve_url(endpoint)
    if url is None:
        return None

    method = HttpMethod(endpoint.method)
    json_body = endpoint.json_body
    headers = dict(endpoint.headers or {})
    body: bytes | None = None

    if method is HttpMethod.GET:
        url = append_query_items(url, build_query_items(json_body))
    elif json_body:
        try:
            body = encode_json_body(json_body)
        except (TypeError, ValueError) as exc:
            logger.debug("Dropping body of %s %s: %s", method.value, url, exc)
    elif endpoint.multipart_fields:
        boundary = new_boundary()
        body = encode_multipart(endpoint.multipart_fields, boundary)
        _set_header(headers, "Content-Type", multipart_content_type(boundary))

    return HttpRequest(url=url, method=method, headers=headers, body=body)


__all__ = [
    "Endpoint",
    "QueryItems",
    "StaticEndpoint",
    "append_query_items",
    "build_query_items",
    "encode_json_body",
    "materialize",
    "resolve_url",
]
