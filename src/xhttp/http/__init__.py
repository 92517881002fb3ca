# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubTransport, serve, serve_client
from .api import get_default_client, set_default_client
from .client import Client
from .headers import header_value, media_type, normalize_headers, set_header
from .middleware import header_middleware, logging_middleware
from .models import (
    MIME_JSON,
    MIME_POST_FORM,
    MIME_XML,
    MIME_XML2,
    Headers,
    HttpRequest,
    RawResponse,
    RequestOptions,
    RequestResolver,
)
from .pipeline import Handler, Middleware, chain, compose, identity
from .registry import Listener, Registry, get_registry, listen, reset, use
from .response import SUCCESS_STATUS, Response
from .transport import HttpxTransport, Transport

__all__ = [
    "Client",
    "Handler",
    "Headers",
    "HttpRequest",
    "HttpxTransport",
    "Listener",
    "MIME_JSON",
    "MIME_POST_FORM",
    "MIME_XML",
    "MIME_XML2",
    "Middleware",
    "RawResponse",
    "Registry",
    "RequestOptions",
    "RequestResolver",
    "Response",
    "SUCCESS_STATUS",
    "StubTransport",
    "Transport",
    "chain",
    "compose",
    "get_default_client",
    "get_registry",
    "header_middleware",
    "header_value",
    "identity",
    "listen",
    "logging_middleware",
    "media_type",
    "normalize_headers",
    "reset",
    "serve",
    "serve_client",
    "set_default_client",
    "set_header",
    "use",
]
