"""Tests for the account administration node."""
import pytest

from node_sdk import ConfigurationError, ValidationError

from docrouter_nodes.nodes import DocRouterAccountNode

from conftest import BASE_URL, TOKEN, items


USERS = "/v0/account/users"
ORGANIZATIONS = "/v0/account/organizations"


class TestUsers:
    """Test user administration."""

    def test_no_organization_lookup(self, run_node, transport):
        run_node(DocRouterAccountNode, {"operation": "listUsers"}, items=items(3))

        assert transport.lookups == []
        assert len(transport.calls) == 1
        assert transport.calls[0].params == {"limit": 50, "skip": 0}

    def test_list_users_filters(self, run_node, transport):
        run_node(
            DocRouterAccountNode,
            {"operation": "listUsers", "organizationIdFilter": "org-2", "searchName": "ann"},
        )

        assert transport.calls[0].params == {
            "limit": 50,
            "skip": 0,
            "organization_id": "org-2",
            "search_name": "ann",
        }

    def test_get_user_uses_query(self, run_node, transport):
        run_node(DocRouterAccountNode, {"operation": "getUser", "userId": "u1"})

        assert transport.calls[0].path == USERS
        assert transport.calls[0].params == {"user_id": "u1"}

    def test_create_user(self, run_node, transport):
        run_node(
            DocRouterAccountNode,
            {"operation": "createUser", "email": "ann@example.com", "userName": "Ann", "password": " s3cret "},
        )

        assert transport.calls[0].method == "POST"
        assert transport.calls[0].body == {"email": "ann@example.com", "name": "Ann", "password": " s3cret "}

    def test_create_user_requires_password(self, run_node, transport):
        with pytest.raises(ValidationError, match="password"):
            run_node(DocRouterAccountNode, {"operation": "createUser", "email": "a@b.c", "userName": "A"})

        assert transport.calls == []

    def test_update_user(self, run_node, transport):
        run_node(
            DocRouterAccountNode,
            {"operation": "updateUser", "userId": "u1", "role": "admin", "emailVerified": True},
        )

        call = transport.calls[0]
        assert call.method == "PUT"
        assert call.path == f"{USERS}/u1"
        assert call.body == {"role": "admin", "email_verified": True}

    def test_update_user_invalid_role(self, run_node, transport):
        with pytest.raises(ValidationError, match="role"):
            run_node(DocRouterAccountNode, {"operation": "updateUser", "userId": "u1", "role": "owner"})

    def test_update_user_without_fields(self, run_node, transport):
        with pytest.raises(ValidationError, match="Provide at least one field to update"):
            run_node(DocRouterAccountNode, {"operation": "updateUser", "userId": "u1"})

    def test_delete_user(self, run_node, transport):
        output = run_node(DocRouterAccountNode, {"operation": "deleteUser", "userId": "u1"})

        assert output[0]["json"] == {"success": True, "user_id": "u1"}
        assert transport.calls[0].path == f"{USERS}/u1"


class TestOrganizations:
    """Test organization administration."""

    def test_list_organizations(self, run_node, transport):
        run_node(DocRouterAccountNode, {"operation": "listOrganizations", "memberSearch": "ann"})

        assert transport.calls[0].path == ORGANIZATIONS
        assert transport.calls[0].params == {"limit": 10, "skip": 0, "member_search": "ann"}

    def test_get_organization(self, run_node, transport):
        run_node(DocRouterAccountNode, {"operation": "getOrganization", "organizationId": "org-2"})

        assert transport.calls[0].params == {"organization_id": "org-2"}

    def test_create_organization_default_type(self, run_node, transport):
        run_node(DocRouterAccountNode, {"operation": "createOrganization", "orgName": "Acme"})

        assert transport.calls[0].body == {"name": "Acme", "type": "individual"}

    def test_update_members(self, run_node, transport):
        run_node(
            DocRouterAccountNode,
            {
                "operation": "updateOrganization",
                "organizationId": "org-2",
                "members": '[{"user_id": "u1", "role": "admin"}]',
            },
        )

        call = transport.calls[0]
        assert call.path == f"{ORGANIZATIONS}/org-2"
        assert call.body == {"members": [{"user_id": "u1", "role": "admin"}]}

    def test_members_must_be_array(self, run_node, transport):
        with pytest.raises(ValidationError, match="Members must be an array"):
            run_node(
                DocRouterAccountNode,
                {"operation": "updateOrganization", "organizationId": "org-2", "members": "{}"},
            )

    def test_delete_organization(self, run_node, transport):
        output = run_node(DocRouterAccountNode, {"operation": "deleteOrganization", "organizationId": "org-2"})

        assert output[0]["json"] == {"success": True, "organization_id": "org-2"}


def test_requires_account_credential(run_node, transport):
    with pytest.raises(ConfigurationError, match="docRouterAccountApi"):
        run_node(
            DocRouterAccountNode,
            {"operation": "listUsers"},
            credentials={"docRouterOrgApi": {"baseUrl": BASE_URL, "apiToken": TOKEN}},
        )
