"""
DocRouter Schema node - manage extraction schemas and validate data.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from docrouter_nodes.client import SchemasApi, build_request
from docrouter_nodes.client.schemas import SchemaCreate, SchemaListQuery, SchemaUpdate

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .params import optional_object, optional_str, parse_json, require_str


class SchemaOperation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    VALIDATE = "validate"
    LIST_VERSIONS = "listVersions"


class DocRouterSchemaNode(DocRouterBaseNode):
    """
    Schemas are addressed by revision ID for get and validate, and by
    schema ID for update, delete and version listings.
    """

    type = "docRouterSchema"
    version = 1

    description = {
        "displayName": "DocRouter Schema",
        "name": "docRouterSchema",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Manage DocRouter schemas and validate data against them",
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
                    operation_option("list", "List", "List schemas"),
                    operation_option("get", "Get", "Get a schema revision"),
                    operation_option("create", "Create", "Create a schema"),
                    operation_option("update", "Update", "Update a schema"),
                    operation_option("delete", "Delete", "Delete a schema"),
                    operation_option("validate", "Validate", "Validate data against a schema"),
                    operation_option("listVersions", "List Versions", "List all versions of a schema"),
                ],
                "default": "list",
            },
            {
                "displayName": "Limit",
                "name": "limit",
                "type": "number",
                "default": 10,
                "typeOptions": {"minValue": 1, "maxValue": 100},
                "displayOptions": show_for(SchemaOperation.LIST),
                "description": "Maximum number of schemas to return",
            },
            {
                "displayName": "Skip",
                "name": "skip",
                "type": "number",
                "default": 0,
                "typeOptions": {"minValue": 0},
                "displayOptions": show_for(SchemaOperation.LIST),
                "description": "Number of schemas to skip",
            },
            {
                "displayName": "Name Search",
                "name": "nameSearch",
                "type": "string",
                "default": "",
                "displayOptions": show_for(SchemaOperation.LIST),
                "description": "Filter schemas by name",
            },
            {
                "displayName": "Schema Revision ID",
                "name": "schemaRevid",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(SchemaOperation.GET, SchemaOperation.VALIDATE),
                "description": "The schema revision ID",
            },
            {
                "displayName": "Schema ID",
                "name": "schemaId",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(
                    SchemaOperation.UPDATE, SchemaOperation.DELETE, SchemaOperation.LIST_VERSIONS
                ),
                "description": "The schema ID",
            },
            {
                "displayName": "Name",
                "name": "name",
                "type": "string",
                "default": "",
                "displayOptions": show_for(SchemaOperation.CREATE, SchemaOperation.UPDATE),
                "description": "Schema name (required for Create)",
            },
            {
                "displayName": "JSON Schema",
                "name": "jsonSchema",
                "type": "json",
                "default": "{}",
                "displayOptions": show_for(SchemaOperation.CREATE, SchemaOperation.UPDATE),
                "description": "JSON Schema definition (required for Create)",
            },
            {
                "displayName": "Data to Validate",
                "name": "validateData",
                "type": "json",
                "default": "{}",
                "required": True,
                "displayOptions": show_for(SchemaOperation.VALIDATE),
                "description": "JSON data to validate against the schema",
            },
        ],
        "credentials": [
            {"name": "docRouterOrgApi", "required": True},
        ],
    }

    operations = SchemaOperation
    batch_operations = frozenset({
        SchemaOperation.LIST,
        SchemaOperation.LIST_VERSIONS,
        SchemaOperation.VALIDATE,
    })
    api_class = SchemasApi

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {
            SchemaOperation.LIST: self._list,
            SchemaOperation.GET: self._get,
            SchemaOperation.CREATE: self._create,
            SchemaOperation.UPDATE: self._update,
            SchemaOperation.DELETE: self._delete,
            SchemaOperation.VALIDATE: self._validate,
            SchemaOperation.LIST_VERSIONS: self._list_versions,
        }

    def _schema_id(self, item_index: int) -> str:
        return require_str(self.get_node_parameter("schemaId", item_index), "Schema ID")

    def _schema_revid(self, item_index: int) -> str:
        return require_str(
            self.get_node_parameter("schemaRevid", item_index), "Schema Revision ID"
        )

    def _list(self, api: SchemasApi, item_index: int) -> Any:
        query = build_request(
            SchemaListQuery,
            limit=self.get_node_parameter("limit", item_index, 10),
            skip=self.get_node_parameter("skip", item_index, 0),
            name_search=optional_str(self.get_node_parameter("nameSearch", item_index, "")),
        )
        return api.list(query)

    def _get(self, api: SchemasApi, item_index: int) -> Any:
        return api.get(self._schema_revid(item_index))

    def _create(self, api: SchemasApi, item_index: int) -> Any:
        schema = build_request(
            SchemaCreate,
            name=require_str(self.get_node_parameter("name", item_index), "Name"),
            json_schema=parse_json(
                self.get_node_parameter("jsonSchema", item_index, "{}"), "JSON Schema"
            ),
        )
        return api.create(schema)

    def _update(self, api: SchemasApi, item_index: int) -> Any:
        schema_id = self._schema_id(item_index)
        update = build_request(
            SchemaUpdate,
            name=optional_str(self.get_node_parameter("name", item_index, "")),
            json_schema=optional_object(
                self.get_node_parameter("jsonSchema", item_index, "{}"), "JSON Schema"
            ),
        )
        return api.update(schema_id, update)

    def _delete(self, api: SchemasApi, item_index: int) -> Any:
        return api.delete(self._schema_id(item_index))

    def _validate(self, api: SchemasApi, item_index: int) -> Any:
        schema_revid = self._schema_revid(item_index)
        data = parse_json(
            self.get_node_parameter("validateData", item_index, "{}"),
            "Data to Validate",
            expected=(dict, list),
        )
        return api.validate(schema_revid, data)

    def _list_versions(self, api: SchemasApi, item_index: int) -> Any:
        return api.list_versions(self._schema_id(item_index))
