"""
Knowledge bases API.

Covers knowledge base CRUD, indexed document and chunk listings, vector
search, retrieval-augmented chat and reconciliation.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import OrganizationApi, RequestModel, SparseUpdate

MIN_RECONCILE_INTERVAL = 60
DEFAULT_CHAT_MODEL = "gpt-4o-mini"


class PageQuery(RequestModel):
    limit: int = Field(10, ge=1, le=100)
    skip: int = Field(0, ge=0)


class KnowledgeBaseListQuery(PageQuery):
    name_search: Optional[str] = None


class ChunkPageQuery(RequestModel):
    limit: int = Field(100, ge=1, le=1000)
    skip: int = Field(0, ge=0)


class KnowledgeBaseCreate(RequestModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    chunker_type: Optional[str] = None
    chunk_size: Optional[int] = Field(None, ge=1)
    chunk_overlap: Optional[int] = Field(None, ge=0)
    embedding_model: Optional[str] = None
    coalesce_neighbors: Optional[int] = Field(None, ge=0, le=5)
    reconcile_enabled: Optional[bool] = None
    reconcile_interval_seconds: Optional[int] = Field(None, ge=MIN_RECONCILE_INTERVAL)


class KnowledgeBaseUpdate(SparseUpdate):
    name: Optional[str] = None
    description: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    coalesce_neighbors: Optional[int] = Field(None, ge=0, le=5)
    reconcile_enabled: Optional[bool] = None
    reconcile_interval_seconds: Optional[int] = Field(None, ge=MIN_RECONCILE_INTERVAL)


class KnowledgeBaseSearch(RequestModel):
    query: str = Field(..., min_length=1)
    top_k: int = Field(5, ge=1, le=20)
    skip: int = Field(0, ge=0)
    metadata_filter: Optional[Dict[str, Any]] = None
    coalesce_neighbors: Optional[int] = Field(None, ge=0, le=5)


class KnowledgeBaseChat(RequestModel):
    model: str = Field(DEFAULT_CHAT_MODEL, min_length=1)
    messages: List[Dict[str, Any]] = Field(..., min_length=1)
    temperature: float = Field(0.7, ge=0, le=2)
    # Forwarded as-is; the reply is always read as one JSON body
    stream: bool = True
    max_tokens: Optional[int] = Field(None, ge=1)
    metadata_filter: Optional[Dict[str, Any]] = None


class KnowledgeBasesApi(OrganizationApi):

    def list(self, query: KnowledgeBaseListQuery) -> Any:
        return self.client.call(
            "GET", self._path("knowledge-bases"), params=query.to_payload()
        )

    def get(self, kb_id: str) -> Any:
        return self.client.call("GET", self._path("knowledge-bases", kb_id))

    def create(self, kb: KnowledgeBaseCreate) -> Any:
        return self.client.call("POST", self._path("knowledge-bases"), body=kb.to_payload())

    def update(self, kb_id: str, update: KnowledgeBaseUpdate) -> Any:
        return self.client.call(
            "PUT", self._path("knowledge-bases", kb_id), body=update.to_payload()
        )

    def delete(self, kb_id: str) -> Dict[str, Any]:
        self.client.call("DELETE", self._path("knowledge-bases", kb_id))
        return {"success": True, "kbId": kb_id}

    def list_documents(self, kb_id: str, query: PageQuery) -> Any:
        return self.client.call(
            "GET",
            self._path("knowledge-bases", kb_id, "documents"),
            params=query.to_payload(),
        )

    def list_chunks(self, kb_id: str, document_id: str, query: ChunkPageQuery) -> Any:
        return self.client.call(
            "GET",
            self._path("knowledge-bases", kb_id, "documents", document_id, "chunks"),
            params=query.to_payload(),
        )

    def search(self, kb_id: str, search: KnowledgeBaseSearch) -> Any:
        return self.client.call(
            "POST", self._path("knowledge-bases", kb_id, "search"), body=search.to_payload()
        )

    def chat(self, kb_id: str, chat: KnowledgeBaseChat) -> Any:
        return self.client.call(
            "POST", self._path("knowledge-bases", kb_id, "chat"), body=chat.to_payload()
        )

    def reconcile(self, kb_id: str, dry_run: bool = False) -> Any:
        return self.client.call(
            "POST",
            self._path("knowledge-bases", kb_id, "reconcile"),
            params={"dry_run": dry_run},
        )

    def reconcile_all(self, dry_run: bool = False) -> Any:
        return self.client.call(
            "POST",
            self._path("knowledge-bases", "reconcile-all"),
            params={"dry_run": dry_run},
        )
