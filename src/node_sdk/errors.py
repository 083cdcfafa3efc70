"""
Node error taxonomy.

Every failure a node reports to its host is a NodeOperationError. Hosts
that run with continue-on-fail turn one into an error item via to_dict();
anything else escaping a node is a bug and is never captured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .basenode import BaseNode


class NodeOperationError(Exception):
    """Base for errors a node reports against an input item."""

    def __init__(
        self,
        message: str,
        node: Optional["BaseNode"] = None,
        item_index: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        self.message = message
        self.node = node
        self.item_index = item_index
        self.description = description
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Error detail attached to captured output items."""
        detail: Dict[str, Any] = {
            "type": type(self).__name__,
            "message": self.message,
            "itemIndex": self.item_index,
        }
        if self.description:
            detail["description"] = self.description
        return detail


class NodeApiError(NodeOperationError):
    """The remote service could not be reached or refused the request."""

    def __init__(
        self,
        message: str,
        node: Optional["BaseNode"] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        item_index: Optional[int] = None,
    ) -> None:
        super().__init__(message, node, item_index)
        self.status_code = status_code
        self.response_body = response_body

    def to_dict(self) -> Dict[str, Any]:
        detail = super().to_dict()
        if self.status_code is not None:
            detail["statusCode"] = self.status_code
        if self.response_body:
            detail["responseBody"] = self.response_body
        return detail


class ValidationError(NodeOperationError):
    """Bad or missing input, detected before any request is sent."""


class MissingInputError(NodeOperationError):
    """A required binary attachment is not present on the input item."""


class ConfigurationError(NodeOperationError):
    """Credentials are missing or do not fit the node (e.g. not org-scoped)."""


class UnsupportedOperationError(NodeOperationError):
    """The requested operation is not one the node declares."""


class TransportError(NodeApiError):
    """Network or HTTP failure talking to the remote service."""
