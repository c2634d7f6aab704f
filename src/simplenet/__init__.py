# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SimpleNet package entrypoint.

Endpoints are described declaratively (``Endpoint`` subclasses or
``StaticEndpoint`` values) and executed by ``SimpleNetworkClient``, either as
awaited calls or as cold single-value streams. The wire transport is injectable;
the default one is backed by httpx.
"""

from .auth import AuthProvider, SingleFlightTokenProvider
from .client import SimpleNetworkClient
from .config import HttpSettings, load_http_settings
from .errors import (
    HTTPError,
    HTTPErrorKind,
    RequestError,
    RequestErrorKind,
    SimpleNetworkError,
)
from .http import (
    Endpoint,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    MultipartField,
    StaticEndpoint,
    StubTransport,
    Transport,
    materialize,
)
from .log import setup_logging
from .stream import RequestStream, Subscription
from .version import __version__

__all__ = [
    "AuthProvider",
    "Endpoint",
    "HTTPError",
    "HTTPErrorKind",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxTransport",
    "MultipartField",
    "RequestError",
    "RequestErrorKind",
    "RequestStream",
    "SimpleNetworkClient",
    "SimpleNetworkError",
    "SingleFlightTokenProvider",
    "StaticEndpoint",
    "StubTransport",
    "Subscription",
    "Transport",
    "__version__",
    "load_http_settings",
    "materialize",
    "setup_logging",
]
