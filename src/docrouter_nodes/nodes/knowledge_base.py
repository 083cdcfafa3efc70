"""
DocRouter Knowledge Base node.

CRUD runs per input item. Listings, search, chat and reconciliation act
on one knowledge base (or all of them) and run once per batch.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from docrouter_nodes.client import KnowledgeBasesApi, build_request
from docrouter_nodes.client.knowledge_bases import (
    DEFAULT_CHAT_MODEL,
    ChunkPageQuery,
    KnowledgeBaseChat,
    KnowledgeBaseCreate,
    KnowledgeBaseListQuery,
    KnowledgeBaseSearch,
    KnowledgeBaseUpdate,
    PageQuery,
)

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .params import (
    optional_bool,
    optional_number,
    optional_object,
    optional_str,
    parse_json,
    require_str,
    split_ids,
)


class KnowledgeBaseOperation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LIST_DOCUMENTS = "listDocuments"
    LIST_CHUNKS = "listChunks"
    SEARCH = "search"
    CHAT = "chat"
    RECONCILE = "reconcile"
    RECONCILE_ALL = "reconcileAll"


Op = KnowledgeBaseOperation


def _param(name: str, display_name: str, type_: str, default: Any, *operations: Op, **extra: Any) -> Dict[str, Any]:
    param = {
        "displayName": display_name,
        "name": name,
        "type": type_,
        "default": default,
        "displayOptions": show_for(*operations),
    }
    param.update(extra)
    return param


class DocRouterKnowledgeBaseNode(DocRouterBaseNode):
    """Manage, search and chat with knowledge bases."""

    type = "docRouterKnowledgeBase"
    version = 1

    description = {
        "displayName": "DocRouter Knowledge Base",
        "name": "docRouterKnowledgeBase",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Manage DocRouter knowledge bases: search, chat, and reconcile",
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
                    operation_option("list", "List", "List knowledge bases"),
                    operation_option("get", "Get", "Get a knowledge base by ID"),
                    operation_option("create", "Create", "Create a knowledge base"),
                    operation_option("update", "Update", "Update a knowledge base"),
                    operation_option("delete", "Delete", "Delete a knowledge base"),
                    operation_option("listDocuments", "List Documents", "List documents in a knowledge base"),
                    operation_option("listChunks", "List Chunks", "List chunks for a document in a knowledge base"),
                    operation_option("search", "Search", "Vector search in a knowledge base"),
                    operation_option("chat", "Chat", "Chat with a knowledge base"),
                    operation_option("reconcile", "Reconcile", "Reconcile one knowledge base"),
                    operation_option("reconcileAll", "Reconcile All", "Reconcile all knowledge bases"),
                ],
                "default": "list",
            },
            # List
            _param("limit", "Limit", "number", 10, Op.LIST,
                   typeOptions={"minValue": 1, "maxValue": 100},
                   description="Maximum number of knowledge bases to return"),
            _param("skip", "Skip", "number", 0, Op.LIST, typeOptions={"minValue": 0},
                   description="Number to skip (pagination)"),
            _param("nameSearch", "Name Search", "string", "", Op.LIST,
                   description="Filter knowledge bases by name"),
            # Knowledge base selection
            _param("kbId", "Knowledge Base ID", "string", "",
                   Op.GET, Op.UPDATE, Op.DELETE, Op.LIST_DOCUMENTS, Op.LIST_CHUNKS,
                   Op.SEARCH, Op.CHAT, Op.RECONCILE,
                   required=True, description="The ID of the knowledge base"),
            # Create / update
            _param("name", "Name", "string", "", Op.CREATE, Op.UPDATE,
                   description="Knowledge base name (required for Create)"),
            _param("description", "Description", "string", "", Op.CREATE, Op.UPDATE,
                   description="Optional description"),
            _param("tagIds", "Tag IDs", "string", "", Op.CREATE, Op.UPDATE,
                   description="Comma-separated tag IDs for auto-indexing"),
            _param("chunkerType", "Chunker Type", "string", "recursive", Op.CREATE,
                   description="Chunker used to split documents"),
            _param("chunkSize", "Chunk Size", "number", 512, Op.CREATE,
                   typeOptions={"minValue": 1}, description="Target tokens per chunk"),
            _param("chunkOverlap", "Chunk Overlap", "number", 128, Op.CREATE,
                   typeOptions={"minValue": 0}, description="Overlap tokens between chunks"),
            _param("embeddingModel", "Embedding Model", "string", "text-embedding-3-small", Op.CREATE,
                   description="Embedding model used for indexing"),
            _param("coalesceNeighbors", "Coalesce Neighbors", "number", 0, Op.CREATE, Op.UPDATE,
                   typeOptions={"minValue": 0, "maxValue": 5},
                   description="Neighboring chunks to include (0-5)"),
            _param("reconcileEnabled", "Reconcile Enabled", "boolean", False, Op.CREATE, Op.UPDATE,
                   description="Enable periodic automatic reconciliation"),
            _param("reconcileIntervalSeconds", "Reconcile Interval (seconds)", "number", None,
                   Op.CREATE, Op.UPDATE, typeOptions={"minValue": 60},
                   description="Reconciliation interval when Reconcile Enabled is true (minimum 60)"),
            # List documents
            _param("listLimit", "Limit", "number", 10, Op.LIST_DOCUMENTS,
                   typeOptions={"minValue": 1, "maxValue": 100},
                   description="Maximum number of documents to return"),
            _param("listSkip", "Skip", "number", 0, Op.LIST_DOCUMENTS,
                   typeOptions={"minValue": 0}, description="Number of documents to skip"),
            # List chunks
            _param("documentId", "Document ID", "string", "", Op.LIST_CHUNKS,
                   required=True, description="The ID of the document"),
            _param("chunksLimit", "Limit", "number", 100, Op.LIST_CHUNKS,
                   typeOptions={"minValue": 1, "maxValue": 1000},
                   description="Maximum number of chunks to return"),
            _param("chunksSkip", "Skip", "number", 0, Op.LIST_CHUNKS,
                   typeOptions={"minValue": 0}, description="Number of chunks to skip"),
            # Search
            _param("searchQuery", "Query", "string", "", Op.SEARCH,
                   required=True, description="Search query text"),
            _param("topK", "Top K", "number", 5, Op.SEARCH,
                   typeOptions={"minValue": 1, "maxValue": 20},
                   description="Number of results to return (1-20)"),
            _param("searchSkip", "Skip", "number", 0, Op.SEARCH,
                   typeOptions={"minValue": 0}, description="Number of results to skip"),
            _param("metadataFilter", "Metadata Filter", "json", "{}", Op.SEARCH,
                   description="Optional metadata filter as a JSON object"),
            _param("coalesceNeighborsSearch", "Coalesce Neighbors", "number", None, Op.SEARCH,
                   typeOptions={"minValue": 0, "maxValue": 5},
                   description="Override the knowledge base's neighbor setting (0-5)"),
            # Chat
            _param("chatModel", "Model", "string", DEFAULT_CHAT_MODEL, Op.CHAT,
                   required=True, description="LLM model used to answer"),
            _param("messages", "Messages", "json", '[{"role": "user", "content": "Hello"}]', Op.CHAT,
                   required=True, description="Conversation as a JSON array of {role, content}"),
            _param("temperature", "Temperature", "number", 0.7, Op.CHAT,
                   typeOptions={"minValue": 0, "maxValue": 2}, description="Sampling temperature (0-2)"),
            _param("maxTokens", "Max Tokens", "number", None, Op.CHAT,
                   typeOptions={"minValue": 1}, description="Maximum tokens in the reply"),
            _param("stream", "Stream", "boolean", True, Op.CHAT,
                   description="Ask the server to stream its reply"),
            _param("chatMetadataFilter", "Metadata Filter", "json", "{}", Op.CHAT,
                   description="Optional metadata filter as a JSON object"),
            # Reconcile
            _param("dryRun", "Dry Run", "boolean", False, Op.RECONCILE, Op.RECONCILE_ALL,
                   description="Report what would change without applying it"),
        ],
        "credentials": [
            {"name": "docRouterOrgApi", "required": True},
        ],
    }

    operations = KnowledgeBaseOperation
    batch_operations = frozenset({
        Op.LIST,
        Op.LIST_DOCUMENTS,
        Op.LIST_CHUNKS,
        Op.SEARCH,
        Op.CHAT,
        Op.RECONCILE,
        Op.RECONCILE_ALL,
    })
    api_class = KnowledgeBasesApi

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {
            Op.LIST: self._list,
            Op.GET: self._get,
            Op.CREATE: self._create,
            Op.UPDATE: self._update,
            Op.DELETE: self._delete,
            Op.LIST_DOCUMENTS: self._list_documents,
            Op.LIST_CHUNKS: self._list_chunks,
            Op.SEARCH: self._search,
            Op.CHAT: self._chat,
            Op.RECONCILE: self._reconcile,
            Op.RECONCILE_ALL: self._reconcile_all,
        }

    def _kb_id(self, item_index: int) -> str:
        return require_str(self.get_node_parameter("kbId", item_index), "Knowledge Base ID")

    def _reconcile_fields(self, item_index: int) -> Dict[str, Any]:
        enabled = optional_bool(self.get_node_parameter("reconcileEnabled", item_index, None))
        interval: Optional[Any] = None
        if enabled:
            interval = optional_number(
                self.get_node_parameter("reconcileIntervalSeconds", item_index, None)
            )
        return {"reconcile_enabled": enabled, "reconcile_interval_seconds": interval}

    def _shared_fields(self, item_index: int) -> Dict[str, Any]:
        return {
            "description": optional_str(self.get_node_parameter("description", item_index, "")),
            "tag_ids": split_ids(self.get_node_parameter("tagIds", item_index, "")),
            "coalesce_neighbors": optional_number(
                self.get_node_parameter("coalesceNeighbors", item_index, None)
            ),
            **self._reconcile_fields(item_index),
        }

    def _list(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        query = build_request(
            KnowledgeBaseListQuery,
            limit=self.get_node_parameter("limit", item_index, 10),
            skip=self.get_node_parameter("skip", item_index, 0),
            name_search=optional_str(self.get_node_parameter("nameSearch", item_index, "")),
        )
        return api.list(query)

    def _get(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        return api.get(self._kb_id(item_index))

    def _create(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        kb = build_request(
            KnowledgeBaseCreate,
            name=require_str(self.get_node_parameter("name", item_index), "Name"),
            chunker_type=optional_str(self.get_node_parameter("chunkerType", item_index, "")),
            chunk_size=optional_number(self.get_node_parameter("chunkSize", item_index, None)),
            chunk_overlap=optional_number(
                self.get_node_parameter("chunkOverlap", item_index, None)
            ),
            embedding_model=optional_str(
                self.get_node_parameter("embeddingModel", item_index, "")
            ),
            **self._shared_fields(item_index),
        )
        return api.create(kb)

    def _update(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        kb_id = self._kb_id(item_index)
        update = build_request(
            KnowledgeBaseUpdate,
            name=optional_str(self.get_node_parameter("name", item_index, "")),
            **self._shared_fields(item_index),
        )
        return api.update(kb_id, update)

    def _delete(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        return api.delete(self._kb_id(item_index))

    def _list_documents(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        query = build_request(
            PageQuery,
            limit=self.get_node_parameter("listLimit", item_index, 10),
            skip=self.get_node_parameter("listSkip", item_index, 0),
        )
        return api.list_documents(self._kb_id(item_index), query)

    def _list_chunks(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        kb_id = self._kb_id(item_index)
        document_id = require_str(self.get_node_parameter("documentId", item_index), "Document ID")
        query = build_request(
            ChunkPageQuery,
            limit=self.get_node_parameter("chunksLimit", item_index, 100),
            skip=self.get_node_parameter("chunksSkip", item_index, 0),
        )
        return api.list_chunks(kb_id, document_id, query)

    def _search(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        kb_id = self._kb_id(item_index)
        search = build_request(
            KnowledgeBaseSearch,
            query=require_str(self.get_node_parameter("searchQuery", item_index), "Query"),
            top_k=self.get_node_parameter("topK", item_index, 5),
            skip=self.get_node_parameter("searchSkip", item_index, 0),
            metadata_filter=optional_object(
                self.get_node_parameter("metadataFilter", item_index, "{}"), "Metadata Filter"
            ),
            coalesce_neighbors=optional_number(
                self.get_node_parameter("coalesceNeighborsSearch", item_index, None)
            ),
        )
        return api.search(kb_id, search)

    def _chat(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        kb_id = self._kb_id(item_index)
        chat = build_request(
            KnowledgeBaseChat,
            model=optional_str(self.get_node_parameter("chatModel", item_index, "")),
            messages=parse_json(
                self.get_node_parameter("messages", item_index, "[]"),
                "Messages",
                expected=list,
                default="[]",
            ),
            temperature=optional_number(self.get_node_parameter("temperature", item_index, None)),
            max_tokens=optional_number(self.get_node_parameter("maxTokens", item_index, None)),
            stream=optional_bool(self.get_node_parameter("stream", item_index, True)),
            metadata_filter=optional_object(
                self.get_node_parameter("chatMetadataFilter", item_index, "{}"),
                "Metadata Filter",
            ),
        )
        return api.chat(kb_id, chat)

    def _reconcile(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        kb_id = self._kb_id(item_index)
        dry_run = bool(optional_bool(self.get_node_parameter("dryRun", item_index, False)))
        return api.reconcile(kb_id, dry_run=dry_run)

    def _reconcile_all(self, api: KnowledgeBasesApi, item_index: int) -> Any:
        dry_run = bool(optional_bool(self.get_node_parameter("dryRun", item_index, False)))
        return api.reconcile_all(dry_run=dry_run)
