"""
DocRouter Node Pack Manifest - Registration function for entry-points.
"""

from typing import Dict, List, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from node_sdk import BaseNode

from docrouter_nodes.credentials import CREDENTIAL_TYPES
from docrouter_nodes.nodes import (
    DocRouterAccountNode,
    DocRouterDocumentNode,
    DocRouterKnowledgeBaseNode,
    DocRouterLLMNode,
    DocRouterNode,
    DocRouterSchemaNode,
    DocRouterTagNode,
)


class NodePackManifest(BaseModel):
    """
    Manifest for a node pack (collection of nodes).

    Used for discovery and registration of bundled nodes.
    """
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Pack name")
    version: str = Field("1.0.0", description="Pack version")
    description: str = Field("", description="Pack description")
    author: str = Field("", description="Author name")
    license: str = Field("MIT", description="License type")
    nodes: List[str] = Field(default_factory=list, description="Node types in this pack")
    credentials: List[str] = Field(default_factory=list, description="Credential types in this pack")
    entry_point: str = Field("", description="Module path for node discovery")


# Node classes by type
NODE_CLASSES: Dict[str, Type[BaseNode]] = {
    node_class.type: node_class
    for node_class in (
        DocRouterNode,
        DocRouterDocumentNode,
        DocRouterLLMNode,
        DocRouterTagNode,
        DocRouterAccountNode,
        DocRouterSchemaNode,
        DocRouterKnowledgeBaseNode,
    )
}


MANIFEST = NodePackManifest(
    name="docrouter",
    version="1.0.0",
    description="Nodes for the DocRouter document-processing service",
    author="docrouter",
    license="MIT",
    nodes=list(NODE_CLASSES),
    credentials=list(CREDENTIAL_TYPES),
    entry_point="docrouter_nodes.nodes",
)


def register_nodes() -> Tuple[NodePackManifest, Dict[str, Type[BaseNode]]]:
    """
    Entry point function for node pack discovery.

    Returns tuple of (manifest, node_classes).
    """
    return MANIFEST, NODE_CLASSES


def get_node_class(node_type: str) -> Type[BaseNode]:
    """Look up a node class by type, raising KeyError with the known types."""
    try:
        return NODE_CLASSES[node_type]
    except KeyError:
        known = ", ".join(sorted(NODE_CLASSES))
        raise KeyError(f"Unknown node type '{node_type}'. Known types: {known}") from None


__all__ = [
    "MANIFEST",
    "NODE_CLASSES",
    "NodePackManifest",
    "get_node_class",
    "register_nodes",
]
