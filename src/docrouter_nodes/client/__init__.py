"""
DocRouter resource client.

DocRouterClient is the transport; each resource area has an API class
with one method per remote operation and typed request models.
"""
from .account import AccountApi
from .base import (
    DocRouterClient,
    OrganizationApi,
    RequestModel,
    SparseUpdate,
    build_request,
    encode_query,
)
from .documents import DocumentsApi
from .knowledge_bases import KnowledgeBasesApi
from .llm import LlmApi
from .schemas import SchemasApi
from .tags import TagsApi

__all__ = [
    "AccountApi",
    "DocRouterClient",
    "DocumentsApi",
    "KnowledgeBasesApi",
    "LlmApi",
    "OrganizationApi",
    "RequestModel",
    "SchemasApi",
    "SparseUpdate",
    "TagsApi",
    "build_request",
    "encode_query",
]
