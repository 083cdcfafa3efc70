"""
DocRouterBaseNode - shared execution flow for every DocRouter node.

A concrete node declares:
- operations: a str Enum of the operations it supports
- batch_operations: operations that run once per batch (paired with item 0)
- api_class: the resource API it talks to
- get_handlers(): operation -> handler(api, item_index)

execute() then:
1. rejects unknown operations before touching credentials,
2. builds the client from the node's credential,
3. opens the resource API once per batch (resolving the organization),
4. runs the handler once or per item, in input order,
5. captures per-item failures when continue-on-fail is enabled.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, ClassVar, Dict, FrozenSet, List, Optional, Type

from node_sdk import (
    BaseNode,
    NodeExecutionData,
    NodeOperationError,
    UnsupportedOperationError,
    make_item,
)

from docrouter_nodes.client import DocRouterClient, OrganizationApi
from docrouter_nodes.credentials import BaseCredential, get_credential_class
from docrouter_nodes.observability import node_context


CUSTOM_API_CALL = "__CUSTOM_API_CALL__"

Handler = Callable[[Any, int], Any]


def operation_option(value: str, name: str, description: str) -> Dict[str, str]:
    """One entry of an operation options list."""
    return {"name": name, "value": value, "description": description, "action": description}


def show_for(*operations: Enum) -> Dict[str, Any]:
    """displayOptions restricting a parameter to some operations."""
    return {"show": {"operation": [op.value for op in operations]}}


class DocRouterBaseNode(BaseNode):
    """Base class for DocRouter nodes."""

    credential_type: ClassVar[str] = "docRouterOrgApi"
    operations: ClassVar[Type[Enum]]
    batch_operations: ClassVar[FrozenSet[Enum]] = frozenset()
    api_class: ClassVar[Optional[Type[OrganizationApi]]] = None

    def execute(self) -> List[List[NodeExecutionData]]:
        operation = self.get_operation()
        handler = self.get_handlers()[operation]

        client = DocRouterClient.from_credential(self.load_credential())
        api = self.open_api(client)

        items = self.get_input_data()
        indexes = [0] if operation in self.batch_operations else range(len(items))

        self.logger.info(
            "Executing %s",
            operation.value,
            extra=node_context(self.type, operation.value, organization_id=getattr(api, "organization_id", None)),
        )
        return [[self._execute_item(handler, api, operation, i) for i in indexes]]

    # ==== Hooks ====

    def get_handlers(self) -> Dict[Enum, Handler]:
        """Map every declared operation to its handler."""
        raise NotImplementedError

    def open_api(self, client: DocRouterClient) -> Any:
        """
        Create the resource API for this batch.

        Organization-scoped nodes exchange the token for its organization
        once here; ConfigurationError from the lookup is never captured
        per item.
        """
        organization_id = client.resolve_organization_id()
        return self.api_class(client, organization_id)

    # ==== Helpers ====

    def get_operation(self) -> Enum:
        """
        Read and check the operation parameter.

        Raises:
            UnsupportedOperationError: If the node does not declare it
        """
        default = next(iter(self.operations)).value
        value = self.get_node_parameter("operation", 0, default)
        try:
            return self.operations(value)
        except ValueError:
            pass

        node_name = self.description.get("displayName", self.type)
        if value == CUSTOM_API_CALL:
            supported = ", ".join(op.value for op in self.operations)
            message = (
                "For custom API calls, use the HTTP Request node with the "
                f"'{self.credential_type}' credential type. "
                f"{node_name} only supports: {supported}."
            )
        else:
            message = f"Unknown operation for {node_name}: {value}"
        raise UnsupportedOperationError(message, node=self)

    def load_credential(self) -> BaseCredential:
        data = self.get_credentials(self.credential_type)
        return get_credential_class(self.credential_type)(data)

    def _execute_item(
        self,
        handler: Handler,
        api: Any,
        operation: Enum,
        item_index: int,
    ) -> NodeExecutionData:
        extra = node_context(self.type, operation.value, item_index)
        try:
            result = handler(api, item_index)
        except NodeOperationError as e:
            if e.item_index is None:
                e.item_index = item_index
            if e.node is None:
                e.node = self
            if self.should_continue_on_fail():
                self.logger.warning("Item failed, continuing: %s", e.message, extra=extra)
                item = make_item({"error": e.message}, item_index)
                item["error"] = e.to_dict()
                return item
            self.logger.error("Operation failed: %s", e.message, extra=extra)
            raise

        self.logger.debug("Item succeeded", extra=extra)
        return make_item(_as_json(result), item_index)


def _as_json(result: Any) -> Dict[str, Any]:
    """Item json must be an object; empty bodies become {}."""
    if result is None:
        return {}
    if isinstance(result, dict):
        return result
    return {"data": result}
