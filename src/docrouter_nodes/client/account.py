"""
Account administration API (users and organizations).

These endpoints are account-scoped: they take no organization prefix
and need an account-level token.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import DocRouterClient, RequestModel, SparseUpdate, path_segment

USERS_PATH = "/v0/account/users"
ORGANIZATIONS_PATH = "/v0/account/organizations"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class OrganizationType(str, Enum):
    INDIVIDUAL = "individual"
    TEAM = "team"
    ENTERPRISE = "enterprise"


class UserListQuery(RequestModel):
    limit: int = Field(50, ge=1, le=100)
    skip: int = Field(0, ge=0)
    organization_id: Optional[str] = None
    search_name: Optional[str] = None


class UserCreate(RequestModel):
    email: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(SparseUpdate):
    name: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
    email_verified: Optional[bool] = None
    has_seen_tour: Optional[bool] = None


class OrganizationListQuery(RequestModel):
    limit: int = Field(10, ge=1, le=100)
    skip: int = Field(0, ge=0)
    user_id: Optional[str] = None
    name_search: Optional[str] = None
    member_search: Optional[str] = None


class OrganizationCreate(RequestModel):
    name: str = Field(..., min_length=1)
    type: OrganizationType = OrganizationType.INDIVIDUAL


class OrganizationUpdate(SparseUpdate):
    name: Optional[str] = None
    type: Optional[OrganizationType] = None
    members: Optional[List[Dict[str, Any]]] = None


class AccountApi:
    """User and organization administration."""

    def __init__(self, client: DocRouterClient) -> None:
        self.client = client

    # ==== Users ====

    def list_users(self, query: UserListQuery) -> Any:
        return self.client.call("GET", USERS_PATH, params=query.to_payload())

    def get_user(self, user_id: str) -> Any:
        return self.client.call("GET", USERS_PATH, params={"user_id": user_id})

    def create_user(self, user: UserCreate) -> Any:
        return self.client.call("POST", USERS_PATH, body=user.to_payload())

    def update_user(self, user_id: str, update: UserUpdate) -> Any:
        return self.client.call(
            "PUT", f"{USERS_PATH}/{path_segment(user_id)}", body=update.to_payload()
        )

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        self.client.call("DELETE", f"{USERS_PATH}/{path_segment(user_id)}")
        return {"success": True, "user_id": user_id}

    # ==== Organizations ====

    def list_organizations(self, query: OrganizationListQuery) -> Any:
        return self.client.call("GET", ORGANIZATIONS_PATH, params=query.to_payload())

    def get_organization(self, organization_id: str) -> Any:
        return self.client.call(
            "GET", ORGANIZATIONS_PATH, params={"organization_id": organization_id}
        )

    def create_organization(self, organization: OrganizationCreate) -> Any:
        return self.client.call("POST", ORGANIZATIONS_PATH, body=organization.to_payload())

    def update_organization(self, organization_id: str, update: OrganizationUpdate) -> Any:
        return self.client.call(
            "PUT",
            f"{ORGANIZATIONS_PATH}/{path_segment(organization_id)}",
            body=update.to_payload(),
        )

    def delete_organization(self, organization_id: str) -> Dict[str, Any]:
        self.client.call("DELETE", f"{ORGANIZATIONS_PATH}/{path_segment(organization_id)}")
        return {"success": True, "organization_id": organization_id}
