"""Observability package."""
from docrouter_nodes.observability.logging import (
    node_context,
    setup_logging,
)

__all__ = ["node_context", "setup_logging"]
