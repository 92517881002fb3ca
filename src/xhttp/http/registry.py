# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Process-wide middleware and listener registration.

Every Client consults a Registry on each request: its middleware wraps the
client's own chain (global effects are outermost) and its listeners receive
every finished Response. Mutators take a lock and publish immutable snapshots,
so a request in flight on another thread always sees a consistent view.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from .pipeline import Middleware, compose, identity
from .response import Response

Listener = Callable[[Response], None]


class Registry:
    """Global middleware slot plus an ordered listener list."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._middleware: Middleware = identity
        self._listeners: tuple[Listener, ...] = ()

    def use(self, *middleware: Middleware) -> None:
        """Fold ``middleware`` into the global chain (see ``compose``)."""
        with self._lock:
            self._middleware = compose(self._middleware, *middleware)

    def listen(self, *listeners: Listener) -> None:
        """Append listeners; they run in registration order after every request."""
        with self._lock:
            self._listeners = self._listeners + tuple(listeners)

    def middleware(self) -> Middleware:
        with self._lock:
            return self._middleware

    def listeners(self) -> tuple[Listener, ...]:
        with self._lock:
            return self._listeners

    def dispatch(self, response: Response) -> None:
        """Invoke each listener synchronously; exceptions propagate to the caller."""
        for listener in self.listeners():
            listener(response)

    def reset(self) -> None:
        with self._lock:
            self._middleware = identity
            self._listeners = ()


_default_registry = Registry()


def get_registry() -> Registry:
    """Return the process-wide registry shared by all clients."""
    return _default_registry


def use(*middleware: Middleware) -> None:
    _default_registry.use(*middleware)


def listen(*listeners: Listener) -> None:
    _default_registry.listen(*listeners)


def reset() -> None:
    _default_registry.reset()


__all__ = ["Listener", "Registry", "get_registry", "listen", "reset", "use"]
