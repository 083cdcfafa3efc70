"""
Credentials package for the DocRouter node pack.
Each credential type has its own file with definition and testing capabilities.
"""
from typing import Dict, List, Type

from .base import BaseCredential
from .docRouterAccountApi import DocRouterAccountApiCredential
from .docRouterOrgApi import DocRouterOrgApiCredential

# Registry of all available credential types
CREDENTIAL_TYPES: Dict[str, Type[BaseCredential]] = {
    "docRouterOrgApi": DocRouterOrgApiCredential,
    "docRouterAccountApi": DocRouterAccountApiCredential,
}


def get_credential_class(credential_type: str) -> Type[BaseCredential]:
    """Look up a credential class by type name."""
    if credential_type not in CREDENTIAL_TYPES:
        raise KeyError(f"Unknown credential type: {credential_type}")
    return CREDENTIAL_TYPES[credential_type]


def get_credential_definitions() -> List[Dict]:
    """Definitions for every registered credential type."""
    return [cls.get_definition() for cls in CREDENTIAL_TYPES.values()]


__all__ = [
    "BaseCredential",
    "CREDENTIAL_TYPES",
    "DocRouterAccountApiCredential",
    "DocRouterOrgApiCredential",
    "get_credential_class",
    "get_credential_definitions",
]
