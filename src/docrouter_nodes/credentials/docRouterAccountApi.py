"""
DocRouter account API credential (account-level API token).
"""
from typing import Any, Dict

from .base import BaseCredential


class DocRouterAccountApiCredential(BaseCredential):
    """Account-level token used for user and organization administration."""

    name = "docRouterAccountApi"
    display_name = "DocRouter Account API"

    def _test_connection(self) -> Dict[str, Any]:
        """List a single user to prove the token has account access."""
        response = self.http_client().request("GET", "/v0/account/users", params={"limit": 1})
        response.raise_for_status()
        return {
            "success": True,
            "message": "Successfully connected to DocRouter account API",
        }
