# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Module-level request helpers backed by a lazily created default Client."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from .client import Body, Client
from .models import RequestOptions
from .response import Response

_default_client: Client | None = None
_default_client_lock = threading.Lock()


def get_default_client() -> Client:
    """Return the shared default Client, creating it on first use."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = Client()
        return _default_client


def set_default_client(client: Client | None) -> None:
    """Replace the shared default Client; ``None`` recreates it lazily."""
    global _default_client
    with _default_client_lock:
        _default_client = client


def head(url: str, *, options: RequestOptions | None = None) -> Response:
    return get_default_client().head(url, options=options)


def get(url: str, *, options: RequestOptions | None = None) -> Response:
    return get_default_client().get(url, options=options)


def post(url: str, body: Body = None, *, options: RequestOptions | None = None) -> Response:
    return get_default_client().post(url, body, options=options)


def post_form(url: str, data: Mapping[str, Any] | Body = None, *, options: RequestOptions | None = None) -> Response:
    return get_default_client().post_form(url, data, options=options)


def post_json(url: str, obj: Any = None, *, options: RequestOptions | None = None) -> Response:
    return get_default_client().post_json(url, obj, options=options)


__all__ = ["get", "get_default_client", "head", "post", "post_form", "post_json", "set_default_client"]
