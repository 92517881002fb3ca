# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
xhttp package entrypoint.

A synchronous HTTP client whose requests run through a composable middleware
pipeline around an injectable transport. Responses carry their error as data
and decode lazily through named bindings (JSON, XML, form); process-wide
middleware and listeners observe every request made by any Client.
"""

from .binding import FORM, JSON, XML, Binding
from .config import HttpSettings, load_http_settings
from .errors import (
    BodyReadError,
    DecodeError,
    ErrorCategory,
    RequestConstructionError,
    StatusCodeError,
    TransportError,
    XHttpError,
)
from .http import (
    Client,
    Handler,
    HttpRequest,
    HttpxTransport,
    Middleware,
    RawResponse,
    Registry,
    RequestOptions,
    Response,
    Transport,
    compose,
    get_registry,
    listen,
    reset,
    use,
)
from .http.api import get, head, post, post_form, post_json
from .log import setup_logging
from .version import __version__

__all__ = [
    "Binding",
    "BodyReadError",
    "Client",
    "DecodeError",
    "ErrorCategory",
    "FORM",
    "Handler",
    "HttpRequest",
    "HttpSettings",
    "HttpxTransport",
    "JSON",
    "Middleware",
    "RawResponse",
    "Registry",
    "RequestConstructionError",
    "RequestOptions",
    "Response",
    "StatusCodeError",
    "Transport",
    "TransportError",
    "XHttpError",
    "XML",
    "compose",
    "get",
    "get_registry",
    "head",
    "listen",
    "load_http_settings",
    "post",
    "post_form",
    "post_json",
    "reset",
    "setup_logging",
    "use",
    "__version__",
]
