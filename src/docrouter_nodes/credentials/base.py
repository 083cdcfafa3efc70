"""
Base credential class that all credential types should inherit from.
"""
from typing import Any, ClassVar, Dict, List, Optional

from node_sdk import ConfigurationError, HttpClient, NodeOperationError

from docrouter_nodes.config import get_settings


class BaseCredential:
    """Base class for all DocRouter credential types"""

    # Class variables to be overridden by subclasses
    name: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    properties: ClassVar[List[Dict[str, Any]]] = [
        {
            "name": "baseUrl",
            "displayName": "Base URL",
            "type": "string",
            "required": False,
            "default": "https://app.docrouter.ai/fastapi",
            "description": "DocRouter API base URL (leave empty for the hosted service)",
        },
        {
            "name": "apiToken",
            "displayName": "API Token",
            "type": "password",
            "required": True,
            "description": "DocRouter API token",
        },
    ]

    def __init__(self, data: Dict[str, Any]):
        """
        Initialize with credential data

        Args:
            data: Dictionary containing credential values
        """
        self.data = data or {}

    @classmethod
    def get_definition(cls) -> Dict[str, Any]:
        """Get the credential type definition"""
        return {
            "name": cls.name,
            "display_name": cls.display_name,
            "properties": cls.properties,
        }

    @property
    def base_url(self) -> str:
        """Configured base URL, or the default when blank."""
        base_url = str(self.data.get("baseUrl") or "").strip()
        return (base_url or get_settings().default_base_url).rstrip("/")

    @property
    def api_token(self) -> str:
        return str(self.data.get("apiToken") or "").strip()

    def get_auth_header(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Accept": "application/json",
        }

    def validate(self) -> Dict[str, Any]:
        """
        Validate that all required properties are provided

        Returns:
            Dictionary with validation results
        """
        missing_fields = []

        for prop in self.properties:
            value = self.data.get(prop["name"])
            if prop.get("required", False) and not str(value or "").strip():
                missing_fields.append(prop["name"])

        if missing_fields:
            return {
                "valid": False,
                "message": f"Missing required fields: {', '.join(missing_fields)}"
            }

        return {"valid": True}

    def ensure_valid(self) -> None:
        """Raise ConfigurationError if required fields are missing."""
        validation = self.validate()
        if not validation["valid"]:
            raise ConfigurationError(
                f"{self.display_name} credentials are incomplete. {validation['message']}"
            )

    def http_client(self, timeout: Optional[float] = None) -> HttpClient:
        """Timeout-bounded client carrying this credential's auth header."""
        return HttpClient(
            base_url=self.base_url,
            headers=self.get_auth_header(),
            timeout=timeout or get_settings().http_timeout_s,
        )

    def test(self) -> Dict[str, Any]:
        """
        Test if the credential is valid

        Returns:
            Dictionary with test results (success, message)
        """
        validation = self.validate()
        if not validation["valid"]:
            return {
                "success": False,
                "message": validation["message"]
            }

        try:
            return self._test_connection()
        except NodeOperationError as e:
            status = getattr(e, "status_code", None)
            if status == 401:
                return {"success": False, "message": "Authentication failed. Check your API token."}
            if status == 403:
                return {"success": False, "message": "Forbidden. Your API token does not have permission."}
            return {"success": False, "message": f"Connection error: {e.message}"}

    def _test_connection(self) -> Dict[str, Any]:
        raise NotImplementedError("Test method not implemented")
