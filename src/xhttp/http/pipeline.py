# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request pipeline primitives.

A Handler executes one request and produces a Response; a Middleware wraps a
Handler to produce another one. Cross-cutting behaviour (logging, auth
injection, telemetry) is written as Middleware without the client knowing
about it.
"""

from __future__ import annotations

from typing import Protocol

from .models import HttpRequest
from .response import Response


class Handler(Protocol):
    def __call__(self, request: HttpRequest) -> Response: ...


class Middleware(Protocol):
    def __call__(self, handler: Handler) -> Handler: ...


def identity(handler: Handler) -> Handler:
    return handler


def compose(existing: Middleware | None, *middleware: Middleware) -> Middleware:
    """
    Fold ``middleware`` into ``existing``.

    Within the new batch the first entry is outermost; the existing chain wraps
    the whole batch. Registering M1 and then M2, M3 together runs
    M1 -> M2 -> M3 -> handler -> M3 -> M2 -> M1.
    """
    if not middleware:
        return existing if existing is not None else identity

    batch = tuple(middleware)

    def composed(handler: Handler) -> Handler:
        for mw in reversed(batch):
            handler = mw(handler)
        if existing is not None:
            handler = existing(handler)
        return handler

    return composed


def chain(*middleware: Middleware) -> Middleware:
    """Compose a fresh chain with no prior middleware."""
    return compose(None, *middleware)


__all__ = ["Handler", "Middleware", "chain", "compose", "identity"]
