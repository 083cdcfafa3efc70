"""DocRouter node implementations."""
from .account import DocRouterAccountNode
from .base import CUSTOM_API_CALL, DocRouterBaseNode
from .document import DocRouterDocumentNode
from .knowledge_base import DocRouterKnowledgeBaseNode
from .llm import DocRouterLLMNode
from .schema import DocRouterSchemaNode
from .tag import DocRouterTagNode
from .upload import DocRouterNode

__all__ = [
    "CUSTOM_API_CALL",
    "DocRouterAccountNode",
    "DocRouterBaseNode",
    "DocRouterDocumentNode",
    "DocRouterKnowledgeBaseNode",
    "DocRouterLLMNode",
    "DocRouterNode",
    "DocRouterSchemaNode",
    "DocRouterTagNode",
]
