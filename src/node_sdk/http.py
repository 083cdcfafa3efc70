"""
HTTP transport for nodes.

Every request carries an explicit timeout (sync-Celery requirement).
Network failures, timeouts, non-2xx statuses and undecodable bodies all
surface as TransportError, so nodes can capture them per item like any
other operation error.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException, Timeout

from .errors import TransportError


logger = logging.getLogger(__name__)

# Seconds; callers normally pass the configured value
DEFAULT_TIMEOUT = 30

# Longest response body kept on errors
MAX_ERROR_BODY = 1000


class NodeTimeoutError(TransportError):
    """The server did not answer within the timeout."""

    def __init__(self, timeout: float, url: str):
        super().__init__(f"Request timed out after {timeout}s")
        self.timeout = timeout
        self.url = url


class HttpResponse:
    """Response of one request, remembering what was asked for."""

    def __init__(self, response: requests.Response, method: str, path: str):
        self._response = response
        self.method = method
        self.path = path

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def ok(self) -> bool:
        return self._response.ok

    @property
    def text(self) -> str:
        return self._response.text

    @property
    def is_empty(self) -> bool:
        """True when the body is missing or whitespace only."""
        content = self._response.content
        return not content or not content.strip()

    def json(self) -> Any:
        """
        Decode the body.

        Raises:
            TransportError: If the body is not JSON
        """
        try:
            return self._response.json()
        except ValueError as e:
            raise TransportError(
                message=f"Invalid JSON in response to {self.method} {self.path}",
                status_code=self.status_code,
                response_body=self.text[:MAX_ERROR_BODY],
            ) from e

    def raise_for_status(self) -> None:
        """Raise TransportError for a non-2xx status, keeping the body."""
        if self.ok:
            return
        raise TransportError(
            message=f"HTTP {self.status_code}: {self._response.reason}",
            status_code=self.status_code,
            response_body=self.text[:MAX_ERROR_BODY] if self.text else None,
        )


class HttpClient:
    """
    Requests against one base URL with shared headers and a fixed timeout.

    Usage:
        client = HttpClient("https://api.example.com", bearer_token="...", timeout=10)
        response = client.request("GET", "/users", params={"limit": 10})
        response.raise_for_status()
    """

    def __init__(
        self,
        base_url: str = "",
        headers: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        bearer_token: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers: Dict[str, str] = dict(headers or {})
        if bearer_token:
            self.headers["Authorization"] = f"Bearer {bearer_token}"

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}" if self.base_url else path

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> HttpResponse:
        """
        Send one request. Non-2xx statuses are returned, not raised.

        Raises:
            NodeTimeoutError: If the request times out
            TransportError: If the request could not be sent
        """
        url = self.url_for(path)
        started = time.monotonic()
        try:
            response = requests.request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=self.headers,
                timeout=self.timeout,
            )
        except Timeout as e:
            raise NodeTimeoutError(self.timeout, url) from e
        except RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        logger.debug(
            "%s %s -> %s in %.0fms",
            method, path, response.status_code, (time.monotonic() - started) * 1000,
        )
        return HttpResponse(response, method, path)
