"""Tests for the DocRouter transport and request models."""
import pytest

from node_sdk import ConfigurationError, TransportError, ValidationError

from docrouter_nodes.client import DocRouterClient, build_request, encode_query
from docrouter_nodes.client.documents import DocumentUpdate
from docrouter_nodes.client.knowledge_bases import KnowledgeBaseCreate
from docrouter_nodes.client.tags import TagCreate
from docrouter_nodes.credentials import DocRouterOrgApiCredential

from conftest import BASE_URL, ORG_ID, TOKEN, TOKEN_PATH


@pytest.fixture
def client(transport):
    return DocRouterClient(BASE_URL, TOKEN)


def test_encode_query_drops_none_and_encodes_booleans():
    assert encode_query({"a": None, "force": True, "fallback": False, "limit": 10}) == {
        "force": "true",
        "fallback": "false",
        "limit": 10,
    }
    assert encode_query(None) == {}


class TestCall:
    """Test DocRouterClient.call."""

    def test_sends_auth_and_json(self, client, transport):
        transport.add("POST", "/v0/orgs/o/tags", {"id": "t1"})

        result = client.call("POST", "/v0/orgs/o/tags", params={"x": None}, body={"name": "A"})

        assert result == {"id": "t1"}
        call = transport.calls[0]
        assert call.headers["Authorization"] == f"Bearer {TOKEN}"
        assert call.headers["Accept"] == "application/json"
        assert call.body == {"name": "A"}
        assert call.params == {}
        assert call.timeout == 30

    def test_timeout_comes_from_settings(self, monkeypatch, transport):
        monkeypatch.setenv("DOCROUTER_HTTP_TIMEOUT_S", "7")

        DocRouterClient(BASE_URL, TOKEN).call("GET", "/x")

        assert transport.calls[0].timeout == 7

    def test_empty_body_returns_none(self, client, transport):
        transport.add("DELETE", "/v0/orgs/o/tags/t1", text="")

        assert client.call("DELETE", "/v0/orgs/o/tags/t1") is None

    def test_non_json_body_is_transport_error(self, client, transport):
        transport.add("GET", "/x", text="<html>oops</html>")

        with pytest.raises(TransportError, match="Invalid JSON") as exc_info:
            client.call("GET", "/x")

        assert exc_info.value.response_body == "<html>oops</html>"

    def test_http_error_preserves_status_and_body(self, client, transport):
        transport.add("GET", "/x", {"detail": "Not found"}, status=404, reason="Not Found")

        with pytest.raises(TransportError) as exc_info:
            client.call("GET", "/x")

        assert exc_info.value.status_code == 404
        assert exc_info.value.response_body == '{"detail": "Not found"}'
        assert exc_info.value.message == "HTTP 404: Not Found"


class TestOrganizationLookup:
    """Test organization resolution from the token."""

    def test_resolves_organization(self, client, transport):
        assert client.resolve_organization_id() == ORG_ID
        assert transport.calls[0].path == TOKEN_PATH
        assert transport.calls[0].params == {"token": TOKEN}

    @pytest.mark.parametrize("body", [{}, {"organization_id": None}, {"organization_id": ""}])
    def test_missing_organization_is_configuration_error(self, client, transport, body):
        transport.add("GET", TOKEN_PATH, body)

        with pytest.raises(ConfigurationError, match="organization-level API token"):
            client.resolve_organization_id()


def test_from_credential_validates(transport):
    with pytest.raises(ConfigurationError):
        DocRouterClient.from_credential(DocRouterOrgApiCredential({"baseUrl": BASE_URL}))

    client = DocRouterClient.from_credential(
        DocRouterOrgApiCredential({"baseUrl": BASE_URL + "/", "apiToken": TOKEN})
    )
    assert client.base_url == BASE_URL


class TestRequestModels:
    """Test request model construction."""

    def test_optional_fields_are_excluded(self):
        tag = build_request(TagCreate, name="Invoices", color=None, description=None)

        assert tag.to_payload() == {"name": "Invoices"}

    def test_constraint_failures_become_validation_errors(self):
        with pytest.raises(ValidationError, match="reconcile_interval_seconds"):
            build_request(KnowledgeBaseCreate, name="kb", reconcile_interval_seconds=30)

    def test_sparse_update_requires_a_field(self):
        with pytest.raises(ValidationError, match="Provide at least one field to update"):
            build_request(DocumentUpdate, document_name=None, tag_ids=None, metadata=None)

    def test_sparse_update_keeps_only_given_fields(self):
        update = build_request(DocumentUpdate, tag_ids=["a"])

        assert update.to_payload() == {"tag_ids": ["a"]}
