"""
DocRouter node - the original single-operation upload node.

Unlike the resource nodes, the organization is given as a parameter
instead of being looked up from the token.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from docrouter_nodes.client import DocRouterClient, DocumentsApi

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .document import UPLOAD_PARAMETERS, build_upload
from .params import require_str


class UploadOperation(str, Enum):
    UPLOAD = "upload"


class DocRouterNode(DocRouterBaseNode):
    """Upload documents to a DocRouter organization."""

    type = "docRouter"
    version = 1

    description = {
        "displayName": "DocRouter",
        "name": "docRouter",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Upload documents to DocRouter.ai",
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
                    operation_option("upload", "Upload Document", "Upload a document"),
                ],
                "default": "upload",
            },
            {
                "displayName": "Organization ID",
                "name": "organizationId",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(UploadOperation.UPLOAD),
                "description": "DocRouter organization ID",
            },
            *UPLOAD_PARAMETERS,
            {
                "displayName": "Tag IDs",
                "name": "tagIds",
                "type": "string",
                "default": "",
                "displayOptions": show_for(UploadOperation.UPLOAD),
                "description": "Comma-separated tag IDs to associate with the document",
            },
            {
                "displayName": "Metadata",
                "name": "metadata",
                "type": "json",
                "default": "{}",
                "displayOptions": show_for(UploadOperation.UPLOAD),
                "description": "Optional key-value metadata",
            },
        ],
        "credentials": [
            {"name": "docRouterOrgApi", "required": True},
        ],
    }

    operations = UploadOperation

    def open_api(self, client: DocRouterClient) -> DocumentsApi:
        organization_id = require_str(
            self.get_node_parameter("organizationId", 0), "Organization ID"
        )
        return DocumentsApi(client, organization_id)

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {UploadOperation.UPLOAD: self._upload}

    def _upload(self, api: DocumentsApi, item_index: int) -> Any:
        return api.upload(build_upload(self, item_index))
