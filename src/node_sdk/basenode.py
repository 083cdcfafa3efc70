"""
BaseNode - what a node class declares and what the host hands it.

A node class carries n8n-style `description` and `properties` dicts and
implements execute(). The host binds a NodeExecutionContext (parameters,
credentials, input items, continue-on-fail) and calls run().

SYNC-CELERY SAFE: execute() is synchronous.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError, ValidationError
from .items import BinaryData


ParameterType = Literal[
    "string", "number", "boolean", "options", "multiOptions",
    "color", "json", "collection", "notice",
]


class NodeParameter(BaseModel):
    """
    Schema for one entry of properties["parameters"].

    Nodes keep declaring parameters as dicts; this model only checks them.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    display_name: str = Field(..., alias="displayName")
    type: ParameterType
    default: Any = None
    required: bool = False
    description: Optional[str] = None
    options: Optional[List[Dict[str, Any]]] = None
    display_options: Optional[Dict[str, Any]] = Field(None, alias="displayOptions")
    type_options: Optional[Dict[str, Any]] = Field(None, alias="typeOptions")


class NodeExecutionData(TypedDict, total=False):
    """
    One output item: {"json": {...}, "pairedItem": {"item": i}}.

    Items captured under continue-on-fail also carry "error"
    (see NodeOperationError.to_dict).
    """
    json: Dict[str, Any]
    binary: Optional[Dict[str, Any]]
    pairedItem: Optional[Dict[str, int]]
    error: Optional[Dict[str, Any]]


class NodeExecutionContext:
    """Everything a node reads during one execution."""

    def __init__(
        self,
        parameters: Dict[str, Any],
        credentials: Dict[str, Dict[str, Any]],
        input_data: List[Dict[str, Any]],
        workflow_id: Optional[str] = None,
        node_name: Optional[str] = None,
        continue_on_fail: bool = False,
    ) -> None:
        self._parameters = parameters
        self._credentials = credentials
        self._input_data = input_data
        self.workflow_id = workflow_id
        self.node_name = node_name
        self.continue_on_fail = continue_on_fail

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = None) -> Any:
        # Expressions are resolved by the host before execution
        return self._parameters.get(name, default)

    def has_node_parameter(self, name: str) -> bool:
        return name in self._parameters

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """
        Raises:
            ConfigurationError: If no credential of that type was supplied
        """
        if name not in self._credentials:
            raise ConfigurationError(f"Credentials '{name}' not found")
        return self._credentials[name]

    def get_input_data(self) -> List[Dict[str, Any]]:
        return self._input_data


class BaseNode(ABC):
    """
    Base class for node implementations.

    Subclasses set `type`, `version`, `description` and `properties`
    and implement execute(), returning one list of items per output.
    """

    type: str = "base"
    version: int = 1

    description: Dict[str, Any] = {
        "displayName": "Base Node",
        "name": "base",
        "group": [],
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties: Dict[str, Any] = {
        "parameters": [],
        "credentials": [],
    }

    # Capture per-item failures even when the host does not ask to
    continue_on_fail: bool = False

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"node.{self.type}")
        self._context: Optional[NodeExecutionContext] = None

    @abstractmethod
    def execute(self) -> List[List[NodeExecutionData]]:
        """
        Process the bound input items.

        Raises:
            NodeOperationError: When the node aborts
        """
        raise NotImplementedError

    def run(self, context: NodeExecutionContext) -> List[List[NodeExecutionData]]:
        """Bind a context and execute."""
        self._context = context
        return self.execute()

    # ==== Context accessors ====

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = None) -> Any:
        if self._context is None:
            return default
        return self._context.get_node_parameter(name, item_index, default)

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """
        Raises:
            ConfigurationError: If no context is bound or the credential is absent
        """
        if self._context is None:
            raise ConfigurationError("No context set", node=self)
        return self._context.get_credentials(name)

    def get_input_data(self) -> List[Dict[str, Any]]:
        if self._context is None:
            return []
        return self._context.get_input_data()

    def get_binary_data(self, item_index: int, property_name: str) -> Optional[BinaryData]:
        """
        Attachment stored under `property_name` on an input item, or None.

        Raises:
            ValidationError: If the attachment is malformed
        """
        items = self.get_input_data()
        if item_index >= len(items):
            return None
        entry = (items[item_index].get("binary") or {}).get(property_name)
        if entry is None:
            return None
        try:
            return BinaryData.from_entry(entry)
        except ValidationError as e:
            raise ValidationError(
                f'Invalid binary data on property "{property_name}": {e.message}',
                node=self,
                item_index=item_index,
                description=e.description,
            ) from e

    def should_continue_on_fail(self) -> bool:
        if self.continue_on_fail:
            return True
        return bool(self._context and self._context.continue_on_fail)

    # ==== Declarations ====

    @classmethod
    def get_parameter_definitions(cls) -> List[NodeParameter]:
        """Validate and return the declared parameters."""
        return [
            NodeParameter.model_validate(param)
            for param in cls.properties.get("parameters", [])
        ]

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Definition handed to the host at registration."""
        return {
            "type": cls.type,
            "version": cls.version,
            "description": cls.description,
            "properties": cls.properties,
        }


__all__ = [
    "BaseNode",
    "NodeExecutionContext",
    "NodeExecutionData",
    "NodeParameter",
    "ParameterType",
]
