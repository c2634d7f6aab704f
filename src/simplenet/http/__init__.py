# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Endpoint descriptors, wire models and transports."""

from .adapters import StubTransport
from .client import Transport, create_default_transport
from .endpoint import Endpoint, StaticEndpoint, build_query_items, materialize
from .httpx_transport import HttpxTransport
from .methods import HttpMethod
from .models import Headers, HttpRequest, HttpResponse, JSONObject, JSONValue
from .multipart import MultipartField, encode_multipart, mime_type_for, new_boundary

__all__ = [
    "Endpoint",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "JSONObject",
    "JSONValue",
    "MultipartField",
    "StaticEndpoint",
    "StubTransport",
    "Transport",
    "build_query_items",
    "create_default_transport",
    "encode_multipart",
    "materialize",
    "mime_type_for",
    "new_boundary",
]
