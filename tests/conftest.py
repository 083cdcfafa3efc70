"""Pytest configuration and fixtures."""
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

# Set test environment variables
os.environ["DOCROUTER_ENV"] = "test"
os.environ["DOCROUTER_LOG_JSON"] = "false"
os.environ.pop("DOCROUTER_API_TOKEN", None)
os.environ.pop("DOCROUTER_DEFAULT_BASE_URL", None)

from node_sdk import NodeExecutionContext  # noqa: E402

from docrouter_nodes.config import reset_settings  # noqa: E402


BASE_URL = "https://docrouter.test/fastapi"
TOKEN = "T"
ORG_ID = "org-1"
TOKEN_PATH = "/v0/account/token/organization"


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        text: Optional[str] = None,
        reason: str = "OK",
    ):
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")
        self.reason = reason
        self.headers = {"Content-Type": "application/json"}

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return json.loads(self.text)


@dataclass
class RecordedCall:
    method: str
    path: str
    params: Optional[Dict[str, Any]]
    body: Any
    headers: Dict[str, str]
    timeout: Any


class FakeTransport:
    """
    Recording replacement for requests.request.

    Responses are registered per (method, path); unregistered token
    lookups answer with ORG_ID and everything else with {"ok": true}.
    """

    def __init__(self):
        self.calls: List[RecordedCall] = []
        self.routes: Dict[tuple, FakeResponse] = {}

    def add(self, method: str, path: str, body: Any = None, status: int = 200, text: Optional[str] = None, reason: str = "OK"):
        self.routes[(method, path)] = FakeResponse(status, body, text, reason)

    def __call__(self, method, url, params=None, json=None, data=None, headers=None, timeout=None, **kwargs):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append(RecordedCall(method, path, params, json, headers or {}, timeout))
        if (method, path) in self.routes:
            return self.routes[(method, path)]
        if path == TOKEN_PATH:
            return FakeResponse(200, {"organization_id": ORG_ID})
        return FakeResponse(200, {"ok": True})

    @property
    def api_calls(self) -> List[RecordedCall]:
        """Calls other than the organization lookup."""
        return [call for call in self.calls if call.path != TOKEN_PATH]

    @property
    def lookups(self) -> List[RecordedCall]:
        return [call for call in self.calls if call.path == TOKEN_PATH]


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def transport(monkeypatch):
    """Patch the HTTP layer; no real requests are made."""
    fake = FakeTransport()
    monkeypatch.setattr("node_sdk.http.requests.request", fake)
    return fake


@pytest.fixture
def run_node(transport):
    """Execute a node class and return its single output branch."""

    def _run(
        node_class,
        parameters: Dict[str, Any],
        items: Optional[List[Dict[str, Any]]] = None,
        credentials: Optional[Dict[str, Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
    ) -> List[Dict[str, Any]]:
        if credentials is None:
            credentials = {
                node_class.credential_type: {"baseUrl": BASE_URL, "apiToken": TOKEN},
            }
        context = NodeExecutionContext(
            parameters=parameters,
            credentials=credentials,
            input_data=items if items is not None else [{"json": {}}],
            continue_on_fail=continue_on_fail,
        )
        return node_class().run(context)[0]

    return _run


def items(count: int) -> List[Dict[str, Any]]:
    """`count` empty input items."""
    return [{"json": {"n": i}} for i in range(count)]
