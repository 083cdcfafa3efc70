"""
Node SDK - the contract between a workflow host and Python nodes.

- BaseNode / NodeExecutionContext: node declarations and what the host binds
- BinaryData: binary attachment carried by an input item
- errors: the NodeOperationError taxonomy hosts capture per item
- HttpClient: timeout-bounded HTTP transport

All nodes execute synchronously (sync-Celery safe).
"""

from .items import BinaryData, decode_binary_string, make_item
from .errors import (
    ConfigurationError,
    MissingInputError,
    NodeApiError,
    NodeOperationError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)
from .basenode import (
    BaseNode,
    NodeExecutionContext,
    NodeExecutionData,
    NodeParameter,
    ParameterType,
)
from .http import HttpClient, HttpResponse, NodeTimeoutError

__all__ = [
    # Items
    "BinaryData",
    "decode_binary_string",
    "make_item",
    "NodeExecutionData",
    # Nodes
    "BaseNode",
    "NodeExecutionContext",
    "NodeParameter",
    "ParameterType",
    # Errors
    "NodeOperationError",
    "NodeApiError",
    "ValidationError",
    "MissingInputError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "TransportError",
    "NodeTimeoutError",
    # HTTP
    "HttpClient",
    "HttpResponse",
]
