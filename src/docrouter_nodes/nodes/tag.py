"""
DocRouter Tag node.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from docrouter_nodes.client import TagsApi, build_request
from docrouter_nodes.client.tags import TagCreate, TagListQuery, TagUpdate

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .params import optional_str, require_str


class TagOperation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class DocRouterTagNode(DocRouterBaseNode):
    """List, create, update, and delete tags."""

    type = "docRouterTag"
    version = 1

    description = {
        "displayName": "DocRouter Tag",
        "name": "docRouterTag",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Manage tags in DocRouter",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties = {
        "parameters": [
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "noDataExpression": True,
                "options": [
                    operation_option("list", "List", "List tags"),
                    operation_option("get", "Get", "Get a tag by ID"),
                    operation_option("create", "Create", "Create a tag"),
                    operation_option("update", "Update", "Update a tag"),
                    operation_option("delete", "Delete", "Delete a tag"),
                ],
                "default": "list",
            },
            {
                "displayName": "Limit",
                "name": "limit",
                "type": "number",
                "default": 10,
                "typeOptions": {"minValue": 1, "maxValue": 100},
                "displayOptions": show_for(TagOperation.LIST),
                "description": "Maximum number of tags to return",
            },
            {
                "displayName": "Skip",
                "name": "skip",
                "type": "number",
                "default": 0,
                "typeOptions": {"minValue": 0},
                "displayOptions": show_for(TagOperation.LIST),
                "description": "Number of tags to skip",
            },
            {
                "displayName": "Name Search",
                "name": "nameSearch",
                "type": "string",
                "default": "",
                "displayOptions": show_for(TagOperation.LIST),
                "description": "Filter tags by name",
            },
            {
                "displayName": "Tag ID",
                "name": "tagId",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(TagOperation.GET, TagOperation.UPDATE, TagOperation.DELETE),
                "description": "The ID of the tag",
            },
            {
                "displayName": "Tag Name",
                "name": "tagName",
                "type": "string",
                "default": "",
                "displayOptions": show_for(TagOperation.CREATE, TagOperation.UPDATE),
                "description": "Name of the tag (required for Create)",
            },
            {
                "displayName": "Color",
                "name": "color",
                "type": "color",
                "default": "",
                "displayOptions": show_for(TagOperation.CREATE, TagOperation.UPDATE),
                "description": "Tag color (e.g. #3B82F6)",
            },
            {
                "displayName": "Description",
                "name": "description",
                "type": "string",
                "default": "",
                "displayOptions": show_for(TagOperation.CREATE, TagOperation.UPDATE),
                "description": "Optional tag description",
            },
        ],
        "credentials": [
            {"name": "docRouterOrgApi", "required": True},
        ],
    }

    operations = TagOperation
    batch_operations = frozenset({TagOperation.LIST})
    api_class = TagsApi

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {
            TagOperation.LIST: self._list,
            TagOperation.GET: self._get,
            TagOperation.CREATE: self._create,
            TagOperation.UPDATE: self._update,
            TagOperation.DELETE: self._delete,
        }

    def _tag_id(self, item_index: int) -> str:
        return require_str(self.get_node_parameter("tagId", item_index), "Tag ID")

    def _tag_fields(self, item_index: int) -> Dict[str, Any]:
        return {
            "name": optional_str(self.get_node_parameter("tagName", item_index, "")),
            "color": optional_str(self.get_node_parameter("color", item_index, "")),
            "description": optional_str(self.get_node_parameter("description", item_index, "")),
        }

    def _list(self, api: TagsApi, item_index: int) -> Any:
        query = build_request(
            TagListQuery,
            limit=self.get_node_parameter("limit", item_index, 10),
            skip=self.get_node_parameter("skip", item_index, 0),
            name_search=optional_str(self.get_node_parameter("nameSearch", item_index, "")),
        )
        return api.list(query)

    def _get(self, api: TagsApi, item_index: int) -> Any:
        return api.get(self._tag_id(item_index))

    def _create(self, api: TagsApi, item_index: int) -> Any:
        fields = self._tag_fields(item_index)
        fields["name"] = require_str(fields["name"], "Tag Name")
        return api.create(build_request(TagCreate, **fields))

    def _update(self, api: TagsApi, item_index: int) -> Any:
        tag_id = self._tag_id(item_index)
        return api.update(tag_id, build_request(TagUpdate, **self._tag_fields(item_index)))

    def _delete(self, api: TagsApi, item_index: int) -> Any:
        return api.delete(self._tag_id(item_index))
