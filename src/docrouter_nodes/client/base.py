"""
DocRouter transport - one authenticated HTTP call per operation.

DocRouterClient wraps the node SDK HttpClient with the DocRouter
conventions: bearer auth, JSON in and out, booleans in query strings
sent as true/false, empty bodies returned as None, and every failure
surfaced as TransportError with status and body preserved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from node_sdk import (
    ConfigurationError,
    HttpClient,
    ValidationError,
)

from docrouter_nodes.config import get_settings
from docrouter_nodes.credentials import BaseCredential


logger = logging.getLogger(__name__)

TOKEN_ORGANIZATION_PATH = "/v0/account/token/organization"

ModelT = TypeVar("ModelT", bound=BaseModel)


# ==============================================================================
# Request models
# ==============================================================================

class RequestModel(BaseModel):
    """Base for typed operation inputs; unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        """Body or query dict with absent (None) fields left out."""
        return self.model_dump(mode="json", exclude_none=True)


class SparseUpdate(RequestModel):
    """Update body where only provided fields are sent; at least one is required."""

    @model_validator(mode="after")
    def require_one_field(self) -> "SparseUpdate":
        if not self.model_dump(exclude_none=True):
            fields = ", ".join(type(self).model_fields)
            raise ValueError(f"Provide at least one field to update ({fields}).")
        return self


def build_request(model_cls: Type[ModelT], **values: Any) -> ModelT:
    """
    Instantiate a request model, reporting constraint failures as ValidationError.

    None values are dropped so model defaults apply.
    """
    try:
        return model_cls(**{k: v for k, v in values.items() if v is not None})
    except PydanticValidationError as e:
        raise ValidationError(_format_validation_error(e)) from e


def _format_validation_error(error: PydanticValidationError) -> str:
    messages = []
    for detail in error.errors():
        message = str(detail.get("msg", "")).removeprefix("Value error, ")
        location = ".".join(str(part) for part in detail.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


# ==============================================================================
# Transport
# ==============================================================================

def encode_query(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop None values and encode booleans the way the API expects."""
    encoded: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[key] = value
    return encoded


def path_segment(value: Any) -> str:
    """Quote one identifier for use inside a URL path."""
    return quote(str(value), safe="")


class DocRouterClient:
    """
    Authenticated DocRouter API client.

    Usage:
        client = DocRouterClient("https://app.docrouter.ai/fastapi", token)
        organization_id = client.resolve_organization_id()
        tags = client.call("GET", f"/v0/orgs/{organization_id}/tags")
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_token = api_token
        self.http = HttpClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout or get_settings().http_timeout_s,
            bearer_token=api_token,
        )

    @classmethod
    def from_credential(
        cls,
        credential: BaseCredential,
        timeout: Optional[float] = None,
    ) -> "DocRouterClient":
        """Build a client from a validated credential."""
        credential.ensure_valid()
        return cls(credential.base_url, credential.api_token, timeout=timeout)

    def call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Returns:
            Parsed JSON, or None when the response has no body

        Raises:
            TransportError: On network failure, non-2xx status or invalid JSON
        """
        response = self.http.request(method, path, params=encode_query(params), json=body)

        if not response.ok:
            logger.error(
                "DocRouter API error %s on %s %s", response.status_code, method, path
            )
        response.raise_for_status()

        if response.is_empty:
            return None
        return response.json()

    def resolve_organization_id(self) -> str:
        """
        Exchange the bearer token for its organization ID.

        Raises:
            ConfigurationError: If the token is not organization-scoped
        """
        info = self.call(
            "GET", TOKEN_ORGANIZATION_PATH, params={"token": self._api_token}
        )
        organization_id = info.get("organization_id") if isinstance(info, dict) else None
        if not organization_id:
            raise ConfigurationError(
                "Could not determine organization ID from token. "
                "Use an organization-level API token."
            )
        return str(organization_id)


class OrganizationApi:
    """Base for resource APIs living under /v0/orgs/{organization_id}."""

    def __init__(self, client: DocRouterClient, organization_id: str) -> None:
        self.client = client
        self.organization_id = organization_id

    def _path(self, *parts: Any) -> str:
        segments = [f"/v0/orgs/{path_segment(self.organization_id)}"]
        segments.extend(path_segment(part) for part in parts)
        return "/".join(segments)
