"""
DocRouter Document node - upload, list, get, update and delete documents.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict

from node_sdk import BaseNode, MissingInputError

from docrouter_nodes.client import DocumentsApi, build_request
from docrouter_nodes.client.documents import (
    DocumentGetQuery,
    DocumentListQuery,
    DocumentUpdate,
    DocumentUpload,
)

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .params import join_ids, optional_object, optional_str, require_str, split_ids


logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_NAME = "document"


class DocumentOperation(str, Enum):
    UPLOAD = "upload"
    LIST = "list"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"


def build_upload(node: BaseNode, item_index: int) -> DocumentUpload:
    """
    Build the upload payload for one input item from its binary attachment.

    The document name falls back to the attachment's file name, then to
    "document". Empty tag lists and metadata are left out of the body.

    Raises:
        MissingInputError: If the item has no attachment under the property
        ValidationError: If metadata is not a JSON object
    """
    property_name = optional_str(
        node.get_node_parameter("binaryPropertyName", item_index, "data")
    ) or "data"
    binary = node.get_binary_data(item_index, property_name)
    if binary is None:
        raise MissingInputError(
            f'No binary data found on property "{property_name}"',
            item_index=item_index,
        )

    name = (
        optional_str(node.get_node_parameter("documentName", item_index, ""))
        or binary.file_name
        or DEFAULT_DOCUMENT_NAME
    )
    logger.debug("Uploading %s (%d bytes)", name, binary.size)
    return build_request(
        DocumentUpload,
        name=name,
        content=binary.to_base64(),
        tag_ids=split_ids(node.get_node_parameter("tagIds", item_index, "")),
        metadata=optional_object(
            node.get_node_parameter("metadata", item_index, "{}"), "Metadata"
        ),
    )


UPLOAD_PARAMETERS = [
    {
        "displayName": "Binary Property",
        "name": "binaryPropertyName",
        "type": "string",
        "default": "data",
        "required": True,
        "displayOptions": show_for(DocumentOperation.UPLOAD),
        "description": 'Name of the binary property containing the file data (e.g. "data" from a previous node)',
    },
    {
        "displayName": "Document Name",
        "name": "documentName",
        "type": "string",
        "default": "",
        "displayOptions": show_for(DocumentOperation.UPLOAD),
        "description": "File name for the document. Leave empty to use the binary property file name.",
    },
]


class DocRouterDocumentNode(DocRouterBaseNode):
    """
    Manage documents of the organization the API token belongs to.

    List runs once per batch; the other operations run per input item.
    """

    type = "docRouterDocument"
    version = 1

    description = {
        "displayName": "DocRouter Document",
        "name": "docRouterDocument",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Upload, list, get, update, and delete documents in DocRouter",
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
                    operation_option("upload", "Upload", "Upload a document"),
                    operation_option("list", "List", "List documents in the organization"),
                    operation_option("get", "Get", "Get a document by ID"),
                    operation_option("update", "Update", "Update a document"),
                    operation_option("delete", "Delete", "Delete a document"),
                ],
                "default": "upload",
            },
            *UPLOAD_PARAMETERS,
            {
                "displayName": "Tag IDs",
                "name": "tagIds",
                "type": "string",
                "default": "",
                "displayOptions": show_for(DocumentOperation.UPLOAD, DocumentOperation.UPDATE),
                "description": "Comma-separated tag IDs to associate with the document",
            },
            {
                "displayName": "Metadata",
                "name": "metadata",
                "type": "json",
                "default": "{}",
                "displayOptions": show_for(DocumentOperation.UPLOAD, DocumentOperation.UPDATE),
                "description": "Optional key-value metadata for the document",
            },
            {
                "displayName": "Limit",
                "name": "limit",
                "type": "number",
                "default": 10,
                "typeOptions": {"minValue": 1, "maxValue": 100},
                "displayOptions": show_for(DocumentOperation.LIST),
                "description": "Maximum number of documents to return (1-100)",
            },
            {
                "displayName": "Skip",
                "name": "skip",
                "type": "number",
                "default": 0,
                "typeOptions": {"minValue": 0},
                "displayOptions": show_for(DocumentOperation.LIST),
                "description": "Number of documents to skip (for pagination)",
            },
            {
                "displayName": "Filter by Tag IDs",
                "name": "filterTagIds",
                "type": "string",
                "default": "",
                "displayOptions": show_for(DocumentOperation.LIST),
                "description": "Comma-separated tag IDs to filter documents",
            },
            {
                "displayName": "Name Search",
                "name": "nameSearch",
                "type": "string",
                "default": "",
                "displayOptions": show_for(DocumentOperation.LIST),
                "description": "Search term for document names",
            },
            {
                "displayName": "Metadata Search",
                "name": "metadataSearch",
                "type": "string",
                "default": "",
                "displayOptions": show_for(DocumentOperation.LIST),
                "description": 'Metadata search as comma-separated key=value pairs (e.g. "author=John,type=invoice")',
            },
            {
                "displayName": "Document ID",
                "name": "documentId",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(
                    DocumentOperation.GET, DocumentOperation.UPDATE, DocumentOperation.DELETE
                ),
                "description": "The ID of the document",
            },
            {
                "displayName": "File Type",
                "name": "fileType",
                "type": "options",
                "options": [
                    {"name": "Original", "value": "original"},
                    {"name": "PDF", "value": "pdf"},
                ],
                "default": "original",
                "displayOptions": show_for(DocumentOperation.GET),
                "description": "Which file to retrieve: original or PDF version",
            },
            {
                "displayName": "New Document Name",
                "name": "newDocumentName",
                "type": "string",
                "default": "",
                "displayOptions": show_for(DocumentOperation.UPDATE),
                "description": "New name for the document (leave empty to keep current)",
            },
        ],
        "credentials": [
            {"name": "docRouterOrgApi", "required": True},
        ],
    }

    operations = DocumentOperation
    batch_operations = frozenset({DocumentOperation.LIST})
    api_class = DocumentsApi

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {
            DocumentOperation.UPLOAD: self._upload,
            DocumentOperation.LIST: self._list,
            DocumentOperation.GET: self._get,
            DocumentOperation.UPDATE: self._update,
            DocumentOperation.DELETE: self._delete,
        }

    def _document_id(self, item_index: int) -> str:
        return require_str(self.get_node_parameter("documentId", item_index), "Document ID")

    def _upload(self, api: DocumentsApi, item_index: int) -> Any:
        return api.upload(build_upload(self, item_index))

    def _list(self, api: DocumentsApi, item_index: int) -> Any:
        query = build_request(
            DocumentListQuery,
            limit=self.get_node_parameter("limit", item_index, 10),
            skip=self.get_node_parameter("skip", item_index, 0),
            tag_ids=join_ids(self.get_node_parameter("filterTagIds", item_index, "")),
            name_search=optional_str(self.get_node_parameter("nameSearch", item_index, "")),
            metadata_search=optional_str(
                self.get_node_parameter("metadataSearch", item_index, "")
            ),
        )
        return api.list(query)

    def _get(self, api: DocumentsApi, item_index: int) -> Any:
        document_id = self._document_id(item_index)
        query = build_request(
            DocumentGetQuery,
            file_type=optional_str(self.get_node_parameter("fileType", item_index, "original")),
        )
        return api.get(document_id, query)

    def _update(self, api: DocumentsApi, item_index: int) -> Any:
        document_id = self._document_id(item_index)
        update = build_request(
            DocumentUpdate,
            document_name=optional_str(
                self.get_node_parameter("newDocumentName", item_index, "")
            ),
            tag_ids=split_ids(self.get_node_parameter("tagIds", item_index, "")),
            metadata=optional_object(
                self.get_node_parameter("metadata", item_index, "{}"), "Metadata"
            ),
        )
        return api.update(document_id, update)

    def _delete(self, api: DocumentsApi, item_index: int) -> Any:
        return api.delete(self._document_id(item_index))
