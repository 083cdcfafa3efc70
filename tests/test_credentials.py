"""Tests for credential types."""
import pytest

from node_sdk import ConfigurationError

from docrouter_nodes.config import DEFAULT_BASE_URL
from docrouter_nodes.credentials import (
    CREDENTIAL_TYPES,
    DocRouterAccountApiCredential,
    DocRouterOrgApiCredential,
    get_credential_class,
    get_credential_definitions,
)

from conftest import BASE_URL, ORG_ID, TOKEN, TOKEN_PATH


class TestRegistry:
    """Test the credential registry."""

    def test_known_types(self):
        assert get_credential_class("docRouterOrgApi") is DocRouterOrgApiCredential
        assert get_credential_class("docRouterAccountApi") is DocRouterAccountApiCredential
        assert set(CREDENTIAL_TYPES) == {"docRouterOrgApi", "docRouterAccountApi"}

    def test_unknown_type(self):
        with pytest.raises(KeyError, match="Unknown credential type"):
            get_credential_class("slackApi")

    def test_definitions(self):
        names = [definition["name"] for definition in get_credential_definitions()]
        assert names == ["docRouterOrgApi", "docRouterAccountApi"]


class TestBaseCredential:
    """Test shared credential behaviour."""

    def test_blank_base_url_falls_back_to_default(self):
        credential = DocRouterOrgApiCredential({"baseUrl": "  ", "apiToken": TOKEN})
        assert credential.base_url == DEFAULT_BASE_URL

    def test_base_url_trailing_slash_dropped(self):
        credential = DocRouterOrgApiCredential({"baseUrl": BASE_URL + "/", "apiToken": TOKEN})
        assert credential.base_url == BASE_URL

    def test_auth_header(self):
        credential = DocRouterOrgApiCredential({"apiToken": " abc "})
        assert credential.get_auth_header() == {
            "Authorization": "Bearer abc",
            "Accept": "application/json",
        }

    def test_validate_reports_missing_token(self):
        result = DocRouterOrgApiCredential({"baseUrl": BASE_URL}).validate()

        assert result == {"valid": False, "message": "Missing required fields: apiToken"}

    def test_ensure_valid_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="DocRouter Organization API credentials are incomplete"):
            DocRouterOrgApiCredential({"apiToken": ""}).ensure_valid()


class TestConnectionTests:
    """Test credential connection checks against a fake transport."""

    def test_org_credential_success(self, transport):
        result = DocRouterOrgApiCredential({"baseUrl": BASE_URL, "apiToken": TOKEN}).test()

        assert result["success"] is True
        assert result["organization_id"] == ORG_ID
        assert transport.calls[0].path == TOKEN_PATH
        assert transport.calls[0].params == {"token": TOKEN}
        assert transport.calls[0].headers["Authorization"] == f"Bearer {TOKEN}"

    def test_org_credential_not_org_scoped(self, transport):
        transport.add("GET", TOKEN_PATH, {})

        result = DocRouterOrgApiCredential({"baseUrl": BASE_URL, "apiToken": TOKEN}).test()

        assert result["success"] is False
        assert "not organization-scoped" in result["message"]

    def test_unauthorized(self, transport):
        transport.add("GET", TOKEN_PATH, {"detail": "bad token"}, status=401, reason="Unauthorized")

        result = DocRouterOrgApiCredential({"baseUrl": BASE_URL, "apiToken": TOKEN}).test()

        assert result == {"success": False, "message": "Authentication failed. Check your API token."}

    def test_account_credential_forbidden(self, transport):
        transport.add("GET", "/v0/account/users", {}, status=403, reason="Forbidden")

        result = DocRouterAccountApiCredential({"baseUrl": BASE_URL, "apiToken": TOKEN}).test()

        assert result["success"] is False
        assert result["message"].startswith("Forbidden")
        assert transport.calls[0].params == {"limit": 1}

    def test_missing_token_skips_request(self, transport):
        result = DocRouterAccountApiCredential({"baseUrl": BASE_URL}).test()

        assert result["success"] is False
        assert transport.calls == []
