"""Tests for the schema node."""
import pytest

from node_sdk import ValidationError

from docrouter_nodes.nodes import DocRouterSchemaNode

from conftest import items


SCHEMAS = "/v0/orgs/org-1/schemas"

INVOICE_SCHEMA = {
    "type": "object",
    "properties": {"total": {"type": "number"}},
}


class TestReads:
    """Test list, get and version listing."""

    def test_list(self, run_node, transport):
        run_node(DocRouterSchemaNode, {"operation": "list", "nameSearch": "inv"}, items=items(2))

        assert len(transport.api_calls) == 1
        assert transport.api_calls[0].params == {"limit": 10, "skip": 0, "name_search": "inv"}

    def test_get_by_revision(self, run_node, transport):
        run_node(DocRouterSchemaNode, {"operation": "get", "schemaRevid": "rev-3"})

        assert transport.api_calls[0].path == f"{SCHEMAS}/rev-3"

    def test_list_versions_runs_once(self, run_node, transport):
        output = run_node(DocRouterSchemaNode, {"operation": "listVersions", "schemaId": "s1"}, items=items(3))

        assert len(output) == 1
        assert transport.api_calls[0].path == f"{SCHEMAS}/s1/versions"


class TestWrites:
    """Test create, update and delete."""

    def test_create(self, run_node, transport):
        run_node(
            DocRouterSchemaNode,
            {"operation": "create", "name": "Invoice", "jsonSchema": INVOICE_SCHEMA},
        )

        call = transport.api_calls[0]
        assert call.method == "POST"
        assert call.body == {"name": "Invoice", "json_schema": INVOICE_SCHEMA}

    def test_create_rejects_empty_schema(self, run_node, transport):
        with pytest.raises(ValidationError, match="JSON schema must not be empty"):
            run_node(DocRouterSchemaNode, {"operation": "create", "name": "Invoice", "jsonSchema": "{}"})

        assert transport.api_calls == []

    def test_create_requires_name(self, run_node, transport):
        with pytest.raises(ValidationError, match="Name is required"):
            run_node(DocRouterSchemaNode, {"operation": "create", "jsonSchema": INVOICE_SCHEMA})

    def test_update_name_only(self, run_node, transport):
        run_node(DocRouterSchemaNode, {"operation": "update", "schemaId": "s1", "name": "Invoice v2"})

        call = transport.api_calls[0]
        assert call.method == "PUT"
        assert call.path == f"{SCHEMAS}/s1"
        assert call.body == {"name": "Invoice v2"}

    def test_update_needs_a_field(self, run_node, transport):
        with pytest.raises(ValidationError, match="Provide at least one field to update"):
            run_node(DocRouterSchemaNode, {"operation": "update", "schemaId": "s1"})

    def test_delete(self, run_node, transport):
        output = run_node(DocRouterSchemaNode, {"operation": "delete", "schemaId": "s1"})

        assert output[0]["json"] == {"success": True, "schemaId": "s1"}


class TestValidate:
    """Test validating data against a schema revision."""

    def test_validate_object(self, run_node, transport):
        transport.add("POST", f"{SCHEMAS}/rev-1/validate", {"valid": True})

        output = run_node(
            DocRouterSchemaNode,
            {"operation": "validate", "schemaRevid": "rev-1", "validateData": '{"total": 12.5}'},
            items=items(2),
        )

        assert output == [{"json": {"valid": True}, "pairedItem": {"item": 0}}]
        assert transport.api_calls[0].body == {"total": 12.5}

    def test_validate_array(self, run_node, transport):
        run_node(DocRouterSchemaNode, {"operation": "validate", "schemaRevid": "rev-1", "validateData": "[1, 2]"})

        assert transport.api_calls[0].body == [1, 2]

    def test_validate_rejects_scalars(self, run_node, transport):
        with pytest.raises(ValidationError, match="Data to Validate must be an object or an array"):
            run_node(DocRouterSchemaNode, {"operation": "validate", "schemaRevid": "rev-1", "validateData": "7"})
