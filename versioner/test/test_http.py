"""Tests for versioner/http.py - HTTP client abstraction."""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import pytest

from versioner.core.result import Err, Ok
from versioner.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_get_json_unknown_url(self) -> None:
        result = MockHttpClient().get_json("https://cfg/unknown")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_post_records_wire_body(self) -> None:
        client = MockHttpClient()

        result = client.post_json("https://cfg/svc", {1: {"1.0.0": "abc"}}, headers={"A": "b"})

        assert result == Ok(None)
        assert client.posts[0].body == {"1": {"1.0.0": "abc"}}
        assert client.posts[0].headers == {"A": "b"}

    def test_post_failure(self) -> None:
        client = MockHttpClient()
        error = HttpError(url="https://cfg/x", status=503, message="Unavailable")
        client.fail_post("https://cfg/x", error)

        assert client.post_json("https://cfg/x", {}) == Err(error)
        assert len(client.calls) == 1


class _Recorder(BaseHTTPRequestHandler):
    requests: list[dict[str, Any]] = []
    status = 200
    response: bytes = b"{}"

    def _reply(self) -> None:
        self.send_response(self.status)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(self.response)

    def do_GET(self) -> None:  # noqa: N802
        type(self).requests.append(
            {"method": "GET", "path": self.path, "headers": self.headers}
        )
        self._reply()

    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length", 0))
        body = json.loads(self.rfile.read(length))
        type(self).requests.append(
            {"method": "POST", "path": self.path, "headers": self.headers, "body": body}
        )
        self._reply()

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def server(monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    for var in ("http_proxy", "HTTP_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(var, raising=False)
    _Recorder.requests = []
    _Recorder.status = 200
    _Recorder.response = b"{}"
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Recorder)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}"
    finally:
        httpd.shutdown()
        httpd.server_close()


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_default_config(self) -> None:
        client = RealHttpClient()
        assert client.timeout == 30.0
        assert client.user_agent.startswith("release-versioner/")

    def test_invalid_url(self) -> None:
        result = RealHttpClient(timeout=1.0).get_json("not-a-url")
        assert isinstance(result, Err)
        assert result.error.status == 0

    def test_post_sends_json_and_headers(self, server: str) -> None:
        client = RealHttpClient(timeout=5.0)

        result = client.post_json(
            f"{server}/unloq-release-1",
            {"svc": {"version": "1.0.0"}},
            headers={"Authorization": "T"},
        )

        assert result == Ok(None)
        (request,) = _Recorder.requests
        assert request["method"] == "POST"
        assert request["path"] == "/unloq-release-1"
        assert request["body"] == {"svc": {"version": "1.0.0"}}
        assert request["headers"]["Authorization"] == "T"
        assert request["headers"]["Content-Type"] == "application/json"

    def test_get_json(self, server: str) -> None:
        _Recorder.response = b'{"svc": {"version": "2.0.0"}}'

        result = RealHttpClient(timeout=5.0).get_json(
            f"{server}/svc", headers={"Authorization": "T"}
        )

        assert result == Ok({"svc": {"version": "2.0.0"}})
        assert _Recorder.requests[0]["headers"]["Authorization"] == "T"

    def test_get_json_rejects_non_object(self, server: str) -> None:
        _Recorder.response = b"[1, 2]"

        result = RealHttpClient(timeout=5.0).get_json(f"{server}/svc")

        assert isinstance(result, Err)
        assert "Expected JSON object" in result.error.message

    def test_http_error_status(self, server: str) -> None:
        _Recorder.status = 401

        result = RealHttpClient(timeout=5.0).post_json(f"{server}/svc", {})

        assert isinstance(result, Err)
        assert result.error.status == 401
