"""Documents API: upload, list, get, update, delete."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import OrganizationApi, RequestModel, SparseUpdate


class FileType(str, Enum):
    ORIGINAL = "original"
    PDF = "pdf"


class DocumentUpload(RequestModel):
    name: str = Field(..., min_length=1)
    content: str = Field(..., description="Base64-encoded file content")
    tag_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


class DocumentListQuery(RequestModel):
    limit: int = Field(10, ge=1, le=100)
    skip: int = Field(0, ge=0)
    tag_ids: Optional[str] = None
    name_search: Optional[str] = None
    metadata_search: Optional[str] = None


class DocumentGetQuery(RequestModel):
    file_type: FileType = FileType.ORIGINAL


class DocumentUpdate(SparseUpdate):
    document_name: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


class DocumentsApi(OrganizationApi):
    """Document endpoints of one organization."""

    def upload(self, document: DocumentUpload) -> Any:
        return self.client.call(
            "POST",
            self._path("documents"),
            body={"documents": [document.to_payload()]},
        )

    def list(self, query: DocumentListQuery) -> Any:
        return self.client.call("GET", self._path("documents"), params=query.to_payload())

    def get(self, document_id: str, query: DocumentGetQuery) -> Any:
        return self.client.call(
            "GET", self._path("documents", document_id), params=query.to_payload()
        )

    def update(self, document_id: str, update: DocumentUpdate) -> Any:
        response = self.client.call(
            "PUT", self._path("documents", document_id), body=update.to_payload()
        )
        return response if response is not None else {"success": True}

    def delete(self, document_id: str) -> Dict[str, Any]:
        self.client.call("DELETE", self._path("documents", document_id))
        return {"success": True, "documentId": document_id}
