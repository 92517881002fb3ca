# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import httpx

from xhttp.config import HttpSettings
from xhttp.errors import BodyReadError, ErrorCategory, TransportError
from xhttp.http.adapters import serve, serve_client
from xhttp.http.client import Client
from xhttp.http.models import MIME_POST_FORM, HttpRequest
from xhttp.http.transport import HttpxTransport


def mock_transport(handler, **settings):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpxTransport(HttpSettings(**settings), client=client)


def test_httpx_transport_sends_request_and_streams_body():
    captured = {}

    def handler(request):
        captured["request"] = request
        return httpx.Response(200, json={"id": 7})

    transport = mock_transport(handler, user_agent="UA/1.0")
    raw = transport.send(HttpRequest(url="https://example.test/ok", method="POST", body=b"hi", headers={"X-A": "1"}))

    assert raw.status_code == 200
    assert raw.url == "https://example.test/ok"
    assert raw.headers["content-type"] == "application/json"
    assert json.loads(b"".join(raw.iter_bytes())) == {"id": 7}
    raw.close()

    sent = captured["request"]
    assert sent.method == "POST"
    assert sent.content == b"hi"
    assert sent.headers["User-Agent"] == "UA/1.0"
    assert sent.headers["X-A"] == "1"


def test_httpx_transport_keeps_caller_user_agent():
    captured = {}

    def handler(request):
        captured["ua"] = request.headers["user-agent"]
        return httpx.Response(204)

    mock_transport(handler).send(HttpRequest(url="https://example.test/", headers={"user-agent": "Mine/2"}))
    assert captured["ua"] == "Mine/2"


def test_client_over_httpx_transport_end_to_end():
    def handler(request):  # noqa: ARG001
        return httpx.Response(200, json={"id": 7})

    response = Client(mock_transport(handler)).get("https://example.test/ok")
    target = {}
    assert response.bind(target) is None
    assert target == {"id": 7}
    assert response.status_code == 200


def test_connect_errors_become_transport_errors():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    response = Client(mock_transport(handler)).get("https://unreachable.test/")
    assert isinstance(response.error, TransportError)
    assert response.error.category is ErrorCategory.CONNECTION_ERROR


def test_timeouts_are_categorized():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    response = Client(mock_transport(handler)).get("https://slow.test/")
    assert response.error.category is ErrorCategory.TIMEOUT


def test_max_body_bytes_is_a_body_read_error():
    def handler(request):  # noqa: ARG001
        return httpx.Response(200, content=b"x" * 64)

    response = Client(mock_transport(handler, max_body_bytes=16)).get("https://example.test/big")
    assert isinstance(response.error, BodyReadError)
    assert response.status_code == 200


def echo_app(environ, start_response):
    length = int(environ.get("CONTENT_LENGTH") or 0)
    body = environ["wsgi.input"].read(length) if length else b""
    payload = {
        "method": environ["REQUEST_METHOD"],
        "path": environ["PATH_INFO"],
        "content_type": environ.get("CONTENT_TYPE", ""),
        "body": body.decode("utf-8"),
    }
    status = "200 OK" if environ["PATH_INFO"] != "/missing" else "404 Not Found"
    start_response(status, [("Content-Type", "application/json")])
    return [json.dumps(payload).encode("utf-8")]


def test_serve_dispatches_to_wsgi_app_in_process():
    client = serve_client(echo_app)
    response = client.post_form("http://testserver/echo", {"q": "1"})

    echoed = {}
    assert response.bind(echoed) is None
    assert echoed == {"method": "POST", "path": "/echo", "content_type": MIME_POST_FORM, "body": "q=1"}


def test_serve_preserves_error_bodies():
    response = Client(serve(echo_app)).get("http://testserver/missing")
    content, error = response.result()
    assert content is None
    assert error.status_code == 404
    assert json.loads(response.content)["path"] == "/missing"


def redirecting_handler(calls):
    def handler(request):
        calls.append(str(request.url))
        if request.url.path == "/start":
            return httpx.Response(302, headers={"Location": "https://example.test/end"})
        return httpx.Response(200, text="done")

    return handler


def test_redirect_setting_is_honoured_when_request_leaves_it_unset():
    calls = []
    transport = mock_transport(redirecting_handler(calls), allow_redirects=False)

    response = Client(transport).get("https://example.test/start")

    assert response.status_code == 302
    assert calls == ["https://example.test/start"]


def test_request_redirect_flag_overrides_settings():
    calls = []
    transport = mock_transport(redirecting_handler(calls), allow_redirects=False)

    raw = transport.send(HttpRequest(url="https://example.test/start", allow_redirects=True))
    raw.close()

    assert raw.status_code == 200
    assert calls == ["https://example.test/start", "https://example.test/end"]


def test_response_headers_are_normalized_to_lowercase():
    def handler(request):  # noqa: ARG001
        return httpx.Response(200, headers={"X-Request-Id": "abc"})

    raw = mock_transport(handler).send(HttpRequest(url="https://example.test/"))
    raw.close()
    assert raw.headers["x-request-id"] == "abc"
