"""HTTP client abstraction for the remote configuration store.

This module provides:
- HttpClient: Protocol for the JSON requests we make (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation recording every call
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from versioner import __version__
from versioner.core.result import Err, Ok, Result
from versioner.core.structured import as_str_dict

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
    "RecordedCall",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations against the configuration store."""

    def get_json(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> Result[dict[str, Any], HttpError]:
        """GET url and parse the response body as a JSON object."""
        ...

    def post_json(
        self,
        url: str,
        body: Mapping[str, object],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[None, HttpError]:
        """POST body as JSON. Any 2xx status is success; the body is ignored."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    No retries: a failed request is reported to the caller as-is.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = f"release-versioner/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(
        self,
        url: str,
        *,
        method: str,
        data: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Result[bytes, HttpError]:
        merged = {"User-Agent": self.user_agent, **(headers or {})}
        try:
            req = urllib.request.Request(url, data=data, headers=merged, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get_json(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> Result[dict[str, Any], HttpError]:
        result = self._request(url, method="GET", headers=headers)
        if isinstance(result, Err):
            return result

        try:
            data_obj: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))

    def post_json(
        self,
        url: str,
        body: Mapping[str, object],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[None, HttpError]:
        payload = json.dumps(body).encode("utf-8")
        merged = {"Content-Type": "application/json", **(headers or {})}
        result = self._request(url, method="POST", data=payload, headers=merged)
        if isinstance(result, Err):
            return result
        return Ok(None)


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """One request seen by MockHttpClient."""

    method: str
    url: str
    headers: dict[str, str]
    body: dict[str, object] | None = None


class MockHttpClient:
    """Mock HTTP client for testing.

    Unknown GET URLs answer 404; POSTs succeed unless an error was set for
    the URL.

    Usage:
        client = MockHttpClient()
        client.fail_post("https://cfg/x", HttpError("https://cfg/x", 500, "boom"))
        client.set_json("https://cfg/pkg", {"svc": {"version": "1.0.0"}})
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._post_errors: dict[str, HttpError] = {}
        self.calls: list[RecordedCall] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def fail_post(self, url: str, error: HttpError) -> None:
        self._post_errors[url] = error

    @property
    def posts(self) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == "POST"]

    def get_json(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> Result[dict[str, Any], HttpError]:
        self.calls.append(RecordedCall("GET", url, dict(headers or {})))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def post_json(
        self,
        url: str,
        body: Mapping[str, object],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[None, HttpError]:
        # Record the body as it would be serialized.
        wire = cast(dict[str, object], json.loads(json.dumps(body)))
        self.calls.append(RecordedCall("POST", url, dict(headers or {}), wire))

        error = self._post_errors.get(url)
        if error is not None:
            return Err(error)
        return Ok(None)
