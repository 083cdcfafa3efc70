"""Tests for the tag node."""
import pytest

from node_sdk import ValidationError

from docrouter_nodes.nodes import DocRouterTagNode


TAGS = "/v0/orgs/org-1/tags"


def test_list_query(run_node, transport):
    run_node(DocRouterTagNode, {"operation": "list", "limit": 50, "skip": 10, "nameSearch": "inv"})

    assert transport.api_calls[0].params == {"limit": 50, "skip": 10, "name_search": "inv"}


def test_list_defaults(run_node, transport):
    run_node(DocRouterTagNode, {"operation": "list"})

    assert transport.api_calls[0].params == {"limit": 10, "skip": 0}


def test_create(run_node, transport):
    transport.add("POST", TAGS, {"id": "t1", "name": "Invoices"})

    output = run_node(
        DocRouterTagNode,
        {"operation": "create", "tagName": " Invoices ", "color": "#3B82F6", "description": ""},
    )

    assert transport.api_calls[0].body == {"name": "Invoices", "color": "#3B82F6"}
    assert output[0]["json"] == {"id": "t1", "name": "Invoices"}


def test_create_requires_name(run_node, transport):
    with pytest.raises(ValidationError, match="Tag Name is required"):
        run_node(DocRouterTagNode, {"operation": "create", "color": "#fff"})

    assert transport.api_calls == []


def test_update_sends_only_given_fields(run_node, transport):
    run_node(DocRouterTagNode, {"operation": "update", "tagId": "t1", "description": "Q3 bills"})

    call = transport.api_calls[0]
    assert call.method == "PUT"
    assert call.path == f"{TAGS}/t1"
    assert call.body == {"description": "Q3 bills"}


def test_update_without_fields(run_node, transport):
    with pytest.raises(ValidationError, match="Provide at least one field to update"):
        run_node(DocRouterTagNode, {"operation": "update", "tagId": "t1"})


def test_delete(run_node, transport):
    transport.add("DELETE", f"{TAGS}/t1", text="")

    output = run_node(DocRouterTagNode, {"operation": "delete", "tagId": "t1"})

    assert output[0]["json"] == {"success": True, "tagId": "t1"}
