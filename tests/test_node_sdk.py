"""Tests for the node SDK: items, context, errors and HTTP client."""
import base64
import zlib

import pytest
import requests

from node_sdk import (
    BinaryData,
    ConfigurationError,
    HttpClient,
    NodeApiError,
    NodeExecutionContext,
    NodeOperationError,
    NodeTimeoutError,
    TransportError,
    ValidationError,
    decode_binary_string,
    make_item,
)

from conftest import FakeResponse


class TestBinaryData:
    """Test binary attachment normalization."""

    def test_from_entry_with_base64_text(self):
        entry = {
            "data": base64.b64encode(b"%PDF-1.7").decode(),
            "fileName": "invoice.pdf",
            "mimeType": "application/pdf",
        }
        binary = BinaryData.from_entry(entry)

        assert binary.data == b"%PDF-1.7"
        assert binary.file_name == "invoice.pdf"
        assert binary.mime_type == "application/pdf"
        assert binary.size == 8

    def test_from_entry_with_raw_bytes_and_snake_case(self):
        binary = BinaryData.from_entry({"data": b"abc", "file_name": "a.txt"})

        assert binary.data == b"abc"
        assert binary.file_name == "a.txt"
        assert binary.mime_type == "application/octet-stream"

    def test_from_entry_passes_instances_through(self):
        binary = BinaryData(data=b"x")
        assert BinaryData.from_entry(binary) is binary

    def test_from_entry_rejects_other_types(self):
        with pytest.raises(ValidationError, match="Unsupported binary entry: str"):
            BinaryData.from_entry("not-an-entry")

    def test_from_entry_rejects_invalid_base64(self):
        with pytest.raises(ValidationError, match="not valid base64"):
            BinaryData.from_entry({"data": "abcde"})

    def test_from_entry_rejects_non_bytes_data(self):
        with pytest.raises(ValidationError, match="Invalid binary entry"):
            BinaryData.from_entry({"data": [1, 2]})

    def test_to_base64(self):
        assert BinaryData(data=b"hello").to_base64() == "aGVsbG8="


class TestDecodeBinaryString:
    """Test decoding of the base64 shapes produced by other nodes."""

    def test_standard_base64(self):
        assert decode_binary_string(base64.b64encode(b"raw bytes").decode()) == b"raw bytes"

    def test_urlsafe_without_padding(self):
        raw = b"\xfb\xff\xfe data"
        encoded = base64.urlsafe_b64encode(raw).decode().rstrip("=")
        assert decode_binary_string(encoded) == raw

    def test_zlib_wrapped_base64(self):
        inner = base64.b64encode(b"compressed content")
        encoded = base64.b64encode(zlib.compress(inner)).decode()
        assert decode_binary_string(encoded) == b"compressed content"

    def test_plain_zlib_payload_is_not_inflated(self):
        archive = zlib.compress(b"payload of a .zz archive")
        encoded = base64.b64encode(archive).decode()
        assert decode_binary_string(encoded) == archive

    def test_empty(self):
        assert decode_binary_string("") == b""


def test_make_item_pairs_with_source_index():
    assert make_item({"a": 1}, 3) == {"json": {"a": 1}, "pairedItem": {"item": 3}}


class TestNodeExecutionContext:
    """Test the execution context."""

    def test_parameters_and_defaults(self):
        context = NodeExecutionContext(
            parameters={"limit": 5, "name": ""},
            credentials={},
            input_data=[],
        )

        assert context.get_node_parameter("limit") == 5
        assert context.get_node_parameter("missing", 0, "fallback") == "fallback"
        assert context.has_node_parameter("name")
        assert not context.has_node_parameter("missing")

    def test_missing_credentials_raise_configuration_error(self):
        context = NodeExecutionContext(parameters={}, credentials={}, input_data=[])

        with pytest.raises(ConfigurationError, match="docRouterOrgApi"):
            context.get_credentials("docRouterOrgApi")


class TestErrors:
    """Test the error taxonomy."""

    def test_validation_error_is_node_operation_error(self):
        error = ValidationError("Name is required", item_index=2)

        assert isinstance(error, NodeOperationError)
        assert error.to_dict() == {
            "type": "ValidationError",
            "message": "Name is required",
            "itemIndex": 2,
        }

    def test_transport_error_carries_status_and_body(self):
        error = TransportError("HTTP 404: Not Found", status_code=404, response_body='{"detail":"x"}')

        assert isinstance(error, NodeApiError)
        detail = error.to_dict()
        assert detail["statusCode"] == 404
        assert detail["responseBody"] == '{"detail":"x"}'


class TestHttpClient:
    """Test the timeout-bounded HTTP client."""

    def test_request_sends_bearer_and_timeout(self, monkeypatch):
        captured = {}

        def fake_request(**kwargs):
            captured.update(kwargs)
            return FakeResponse(200, {"ok": True})

        monkeypatch.setattr("node_sdk.http.requests.request", fake_request)
        client = HttpClient(base_url="https://api.test/", bearer_token="abc", timeout=12)

        response = client.request("GET", "/items", params={"limit": 1})

        assert response.json() == {"ok": True}
        assert captured["url"] == "https://api.test/items"
        assert captured["headers"]["Authorization"] == "Bearer abc"
        assert captured["timeout"] == 12
        assert captured["params"] == {"limit": 1}

    def test_timeout_becomes_node_timeout_error(self, monkeypatch):
        def fake_request(**kwargs):
            raise requests.exceptions.Timeout("slow")

        monkeypatch.setattr("node_sdk.http.requests.request", fake_request)

        with pytest.raises(NodeTimeoutError) as exc_info:
            HttpClient(base_url="https://api.test", timeout=3).request("GET", "/x")

        assert exc_info.value.timeout == 3
        assert exc_info.value.url == "https://api.test/x"
        assert isinstance(exc_info.value, TransportError)

    def test_connection_failure_becomes_transport_error(self, monkeypatch):
        def fake_request(**kwargs):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr("node_sdk.http.requests.request", fake_request)

        with pytest.raises(TransportError, match="Request failed"):
            HttpClient(base_url="https://api.test").request("GET", "/x")

    def test_raise_for_status_truncates_body(self, monkeypatch):
        monkeypatch.setattr(
            "node_sdk.http.requests.request",
            lambda **kwargs: FakeResponse(500, text="e" * 5000, reason="Server Error"),
        )
        response = HttpClient(base_url="https://api.test").request("GET", "/x")

        with pytest.raises(TransportError) as exc_info:
            response.raise_for_status()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "HTTP 500: Server Error"
        assert len(exc_info.value.response_body) == 1000
