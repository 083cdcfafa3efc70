"""
DocRouter organization API credential (organization-level API token).
"""
from typing import Any, Dict

from .base import BaseCredential

TOKEN_ORGANIZATION_PATH = "/v0/account/token/organization"


class DocRouterOrgApiCredential(BaseCredential):
    """Organization-scoped token; nodes derive the organization ID from it."""

    name = "docRouterOrgApi"
    display_name = "DocRouter Organization API"

    def _test_connection(self) -> Dict[str, Any]:
        """Exchange the token for its organization ID."""
        response = self.http_client().request(
            "GET", TOKEN_ORGANIZATION_PATH, params={"token": self.api_token}
        )
        response.raise_for_status()
        organization_id = (response.json() or {}).get("organization_id")
        if not organization_id:
            return {
                "success": False,
                "message": "Token is valid but not organization-scoped. Use an organization-level API token.",
            }
        return {
            "success": True,
            "message": f"Connected to organization {organization_id}",
            "organization_id": organization_id,
        }
