# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client: verb helpers over a single middleware-wrapped request entrypoint."""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Mapping, Sequence
from typing import IO, Any
from urllib.parse import urlencode

import httpx

from ..errors import BodyReadError, RequestConstructionError, TransportError, XHttpError
from .headers import set_header
from .models import MIME_JSON, MIME_POST_FORM, HttpRequest, RawResponse, RequestOptions, RequestResolver
from .pipeline import Middleware, chain
from .registry import Registry, get_registry
from .response import Response
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

Body = bytes | bytearray | str | IO[bytes] | IO[str] | None

MIME_JSON_UTF8 = f"{MIME_JSON};charset=utf-8"

_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _wrap(error_cls: type[XHttpError], exc: BaseException) -> XHttpError:
    error = error_cls(str(exc) or type(exc).__name__)
    error.__cause__ = exc
    return error


def _read_body(body: Body) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    read = getattr(body, "read", None)
    if callable(read):
        data = read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    raise TypeError(f"unsupported body type: {type(body).__name__}")


def _form_body(data: Mapping[str, Any] | Body) -> Body:
    if isinstance(data, Mapping):
        return urlencode(data, doseq=True)
    return data


def _json_body(obj: Any) -> Body:
    if obj is None or isinstance(obj, (bytes, bytearray)) or callable(getattr(obj, "read", None)):
        return obj
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def _validate(request: Any) -> HttpRequest:
    if not isinstance(request, HttpRequest):
        raise RequestConstructionError(f"resolver returned {type(request).__name__}, expected HttpRequest")
    if not isinstance(request.method, str) or not _METHOD_TOKEN.match(request.method):
        raise RequestConstructionError(f"invalid method: {request.method!r}")
    try:
        url = httpx.URL(request.url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise _wrap(RequestConstructionError, exc) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise RequestConstructionError(f"invalid url: {request.url!r}")
    return request


class Client:
    """
    HTTP client that runs every request through a middleware pipeline.

    The effective handler for a request is
    ``registry middleware ∘ client middleware ∘ transport call``. Failures of any
    kind are recorded on the returned Response rather than raised, and the
    registry's listeners see every Response exactly once before ``request``
    returns. The client keeps no per-request state and may be shared across
    threads.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        middleware: Sequence[Middleware] = (),
        registry: Registry | None = None,
    ):
        self.transport = transport if transport is not None else HttpxTransport()
        self._middleware_list: tuple[Middleware, ...] = tuple(middleware)
        self._middleware = chain(*self._middleware_list)
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return self._registry if self._registry is not None else get_registry()

    def with_middleware(self, *middleware: Middleware) -> Client:
        """Return a client sharing this transport with ``middleware`` nested inside the current chain."""
        return Client(
            self.transport,
            middleware=self._middleware_list + tuple(middleware),
            registry=self._registry,
        )

    def request(
        self,
        method: str,
        url: str,
        body: Body = None,
        *,
        options: RequestOptions | None = None,
        resolver: RequestResolver | None = None,
    ) -> Response:
        """
        Execute one request.

        ``resolver`` replaces the default request construction from
        ``method``/``url``/``body``/``options`` when given; whatever it raises is
        recorded as a RequestConstructionError.
        """
        registry = self.registry
        try:
            request = self._resolve(method, url, body, options, resolver)
        except RequestConstructionError as exc:
            logger.debug("Request construction failed for %s %s: %s", method, url, exc)
            response = Response(error=exc)
            registry.dispatch(response)
            return response

        try:
            handler = registry.middleware()(self._middleware(self._send))
            response = handler(request)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Middleware failed for %s %s", request.method, request.url)
            response = Response(error=exc, request=request)

        registry.dispatch(response)
        return response

    def head(self, url: str, *, options: RequestOptions | None = None) -> Response:
        return self.request("HEAD", url, options=options)

    def get(self, url: str, *, options: RequestOptions | None = None) -> Response:
        return self.request("GET", url, options=options)

    def post(self, url: str, body: Body = None, *, options: RequestOptions | None = None) -> Response:
        return self.request("POST", url, body, options=options)

    def post_form(
        self,
        url: str,
        data: Mapping[str, Any] | Body = None,
        *,
        options: RequestOptions | None = None,
    ) -> Response:
        """POST ``data`` as application/x-www-form-urlencoded; mappings are url-encoded."""
        return self.request(
            "POST",
            url,
            resolver=lambda: self._build("POST", url, _form_body(data), options, content_type=MIME_POST_FORM),
        )

    def post_json(self, url: str, obj: Any = None, *, options: RequestOptions | None = None) -> Response:
        """POST ``obj`` serialized as JSON; bytes and readable streams are sent as-is."""
        return self.request(
            "POST",
            url,
            resolver=lambda: self._build("POST", url, _json_body(obj), options, content_type=MIME_JSON_UTF8),
        )

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def _resolve(
        self,
        method: str,
        url: str,
        body: Body,
        options: RequestOptions | None,
        resolver: RequestResolver | None,
    ) -> HttpRequest:
        if resolver is None:
            return self._build(method, url, body, options)
        try:
            request = resolver()
        except RequestConstructionError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise _wrap(RequestConstructionError, exc) from exc
        return _validate(request)

    @staticmethod
    def _build(
        method: str,
        url: str,
        body: Body,
        options: RequestOptions | None,
        *,
        content_type: str | None = None,
    ) -> HttpRequest:
        try:
            content = _read_body(body)
        except (TypeError, ValueError, OSError) as exc:
            raise _wrap(RequestConstructionError, exc) from exc
        headers: dict[str, str] = {}
        if content_type:
            set_header(headers, "Content-Type", content_type)
        if options is not None and options.header:
            for name, value in options.header.items():
                set_header(headers, name, value)
        return _validate(HttpRequest(url=url, method=method, headers=headers, body=content))

    def _send(self, request: HttpRequest) -> Response:
        """Terminal handler: transport call, then drain the body."""
        response = Response(request=request)
        start = time.perf_counter()
        try:
            raw = self.transport.send(request)
        except Exception as exc:  # noqa: BLE001
            response.duration = time.perf_counter() - start
            response.error = _wrap(TransportError, exc)
            logger.debug("Transport failed for %s %s: %s (%s)", request.method, request.url, exc, type(exc).__name__)
            return response
        response.duration = time.perf_counter() - start
        response.raw = raw

        try:
            response.content = self._drain(raw)
        except Exception as exc:  # noqa: BLE001
            response.error = _wrap(BodyReadError, exc)
            logger.debug("Body read failed for %s %s: %s", request.method, request.url, exc)
        return response

    @staticmethod
    def _drain(raw: RawResponse) -> bytes:
        try:
            return b"".join(raw.iter_bytes())
        finally:
            raw.close()


__all__ = ["Body", "Client", "MIME_JSON_UTF8"]
