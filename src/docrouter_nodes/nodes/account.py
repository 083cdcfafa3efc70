"""
DocRouter Account node - user and organization administration.

Uses an account-level token; no organization lookup is made. Listing and
lookups run once per batch, mutations per input item.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from docrouter_nodes.client import AccountApi, DocRouterClient, build_request
from docrouter_nodes.client.account import (
    OrganizationCreate,
    OrganizationListQuery,
    OrganizationUpdate,
    UserCreate,
    UserListQuery,
    UserUpdate,
)

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .params import optional_array, optional_bool, optional_str, require_str


class AccountOperation(str, Enum):
    LIST_USERS = "listUsers"
    GET_USER = "getUser"
    CREATE_USER = "createUser"
    UPDATE_USER = "updateUser"
    DELETE_USER = "deleteUser"
    LIST_ORGANIZATIONS = "listOrganizations"
    GET_ORGANIZATION = "getOrganization"
    CREATE_ORGANIZATION = "createOrganization"
    UPDATE_ORGANIZATION = "updateOrganization"
    DELETE_ORGANIZATION = "deleteOrganization"


Op = AccountOperation

ORGANIZATION_TYPES = [
    {"name": "Individual", "value": "individual"},
    {"name": "Team", "value": "team"},
    {"name": "Enterprise", "value": "enterprise"},
]


class DocRouterAccountNode(DocRouterBaseNode):
    """Manage DocRouter users and organizations."""

    type = "docRouterAccount"
    version = 1

    description = {
        "displayName": "DocRouter Account",
        "name": "docRouterAccount",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Manage DocRouter users and organizations (account-level token)",
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties = {
        "parameters": [
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "noDataExpression": True,
                "options": [
                    operation_option("listUsers", "List Users", "List users"),
                    operation_option("getUser", "Get User", "Get a user by ID"),
                    operation_option("createUser", "Create User", "Create a user"),
                    operation_option("updateUser", "Update User", "Update a user"),
                    operation_option("deleteUser", "Delete User", "Delete a user"),
                    operation_option("listOrganizations", "List Organizations", "List organizations"),
                    operation_option("getOrganization", "Get Organization", "Get an organization by ID"),
                    operation_option("createOrganization", "Create Organization", "Create an organization"),
                    operation_option("updateOrganization", "Update Organization", "Update an organization"),
                    operation_option("deleteOrganization", "Delete Organization", "Delete an organization"),
                ],
                "default": "listUsers",
            },
            # Users
            {
                "displayName": "Limit",
                "name": "limit",
                "type": "number",
                "default": 50,
                "typeOptions": {"minValue": 1, "maxValue": 100},
                "displayOptions": show_for(Op.LIST_USERS),
            },
            {
                "displayName": "Skip",
                "name": "skip",
                "type": "number",
                "default": 0,
                "displayOptions": show_for(Op.LIST_USERS),
            },
            {
                "displayName": "Organization ID (Filter)",
                "name": "organizationIdFilter",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.LIST_USERS),
                "description": "Only list members of this organization",
            },
            {
                "displayName": "Search Name",
                "name": "searchName",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.LIST_USERS),
            },
            {
                "displayName": "User ID",
                "name": "userId",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(Op.GET_USER, Op.UPDATE_USER, Op.DELETE_USER),
            },
            {
                "displayName": "Email",
                "name": "email",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(Op.CREATE_USER),
            },
            {
                "displayName": "Name",
                "name": "userName",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(Op.CREATE_USER),
            },
            {
                "displayName": "Password",
                "name": "password",
                "type": "string",
                "typeOptions": {"password": True},
                "default": "",
                "required": True,
                "displayOptions": show_for(Op.CREATE_USER),
            },
            {
                "displayName": "Name",
                "name": "userNameUpdate",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.UPDATE_USER),
                "description": "New name (leave empty to keep current)",
            },
            {
                "displayName": "Password",
                "name": "passwordUpdate",
                "type": "string",
                "typeOptions": {"password": True},
                "default": "",
                "displayOptions": show_for(Op.UPDATE_USER),
                "description": "New password (leave empty to keep current)",
            },
            {
                "displayName": "Role",
                "name": "role",
                "type": "options",
                "options": [
                    {"name": "User", "value": "user"},
                    {"name": "Admin", "value": "admin"},
                ],
                "default": "user",
                "displayOptions": show_for(Op.UPDATE_USER),
            },
            {
                "displayName": "Email Verified",
                "name": "emailVerified",
                "type": "boolean",
                "default": False,
                "displayOptions": show_for(Op.UPDATE_USER),
            },
            {
                "displayName": "Has Seen Tour",
                "name": "hasSeenTour",
                "type": "boolean",
                "default": False,
                "displayOptions": show_for(Op.UPDATE_USER),
            },
            # Organizations
            {
                "displayName": "Limit",
                "name": "orgLimit",
                "type": "number",
                "default": 10,
                "typeOptions": {"minValue": 1, "maxValue": 100},
                "displayOptions": show_for(Op.LIST_ORGANIZATIONS),
            },
            {
                "displayName": "Skip",
                "name": "orgSkip",
                "type": "number",
                "default": 0,
                "displayOptions": show_for(Op.LIST_ORGANIZATIONS),
            },
            {
                "displayName": "User ID (Filter)",
                "name": "orgUserId",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.LIST_ORGANIZATIONS),
                "description": "Only list organizations this user belongs to",
            },
            {
                "displayName": "Name Search",
                "name": "nameSearch",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.LIST_ORGANIZATIONS),
            },
            {
                "displayName": "Member Search",
                "name": "memberSearch",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.LIST_ORGANIZATIONS),
            },
            {
                "displayName": "Organization ID",
                "name": "organizationId",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(
                    Op.GET_ORGANIZATION, Op.UPDATE_ORGANIZATION, Op.DELETE_ORGANIZATION
                ),
            },
            {
                "displayName": "Name",
                "name": "orgName",
                "type": "string",
                "default": "",
                "required": True,
                "displayOptions": show_for(Op.CREATE_ORGANIZATION),
            },
            {
                "displayName": "Type",
                "name": "orgType",
                "type": "options",
                "options": ORGANIZATION_TYPES,
                "default": "individual",
                "displayOptions": show_for(Op.CREATE_ORGANIZATION),
            },
            {
                "displayName": "Name",
                "name": "orgNameUpdate",
                "type": "string",
                "default": "",
                "displayOptions": show_for(Op.UPDATE_ORGANIZATION),
                "description": "New name (leave empty to keep current)",
            },
            {
                "displayName": "Type",
                "name": "orgTypeUpdate",
                "type": "options",
                "options": ORGANIZATION_TYPES,
                "default": "individual",
                "displayOptions": show_for(Op.UPDATE_ORGANIZATION),
            },
            {
                "displayName": "Members",
                "name": "members",
                "type": "json",
                "default": "",
                "displayOptions": show_for(Op.UPDATE_ORGANIZATION),
                "description": 'JSON array of members, e.g. [{"user_id": "...", "role": "admin"}]',
            },
        ],
        "credentials": [
            {"name": "docRouterAccountApi", "required": True},
        ],
    }

    credential_type = "docRouterAccountApi"
    operations = AccountOperation
    batch_operations = frozenset({
        Op.LIST_USERS,
        Op.GET_USER,
        Op.LIST_ORGANIZATIONS,
        Op.GET_ORGANIZATION,
    })

    def open_api(self, client: DocRouterClient) -> AccountApi:
        return AccountApi(client)

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {
            Op.LIST_USERS: self._list_users,
            Op.GET_USER: self._get_user,
            Op.CREATE_USER: self._create_user,
            Op.UPDATE_USER: self._update_user,
            Op.DELETE_USER: self._delete_user,
            Op.LIST_ORGANIZATIONS: self._list_organizations,
            Op.GET_ORGANIZATION: self._get_organization,
            Op.CREATE_ORGANIZATION: self._create_organization,
            Op.UPDATE_ORGANIZATION: self._update_organization,
            Op.DELETE_ORGANIZATION: self._delete_organization,
        }

    def _user_id(self, item_index: int) -> str:
        return require_str(self.get_node_parameter("userId", item_index), "User ID")

    def _organization_id(self, item_index: int) -> str:
        return require_str(
            self.get_node_parameter("organizationId", item_index), "Organization ID"
        )

    # ==== Users ====

    def _list_users(self, api: AccountApi, item_index: int) -> Any:
        query = build_request(
            UserListQuery,
            limit=self.get_node_parameter("limit", item_index, 50),
            skip=self.get_node_parameter("skip", item_index, 0),
            organization_id=optional_str(
                self.get_node_parameter("organizationIdFilter", item_index, "")
            ),
            search_name=optional_str(self.get_node_parameter("searchName", item_index, "")),
        )
        return api.list_users(query)

    def _get_user(self, api: AccountApi, item_index: int) -> Any:
        return api.get_user(self._user_id(item_index))

    def _create_user(self, api: AccountApi, item_index: int) -> Any:
        user = build_request(
            UserCreate,
            email=require_str(self.get_node_parameter("email", item_index), "Email"),
            name=require_str(self.get_node_parameter("userName", item_index), "Name"),
            # Passwords are sent untrimmed
            password=self.get_node_parameter("password", item_index) or None,
        )
        return api.create_user(user)

    def _update_user(self, api: AccountApi, item_index: int) -> Any:
        user_id = self._user_id(item_index)
        update = build_request(
            UserUpdate,
            name=optional_str(self.get_node_parameter("userNameUpdate", item_index, "")),
            password=self.get_node_parameter("passwordUpdate", item_index, "") or None,
            role=optional_str(self.get_node_parameter("role", item_index, None)),
            email_verified=optional_bool(
                self.get_node_parameter("emailVerified", item_index, None)
            ),
            has_seen_tour=optional_bool(self.get_node_parameter("hasSeenTour", item_index, None)),
        )
        return api.update_user(user_id, update)

    def _delete_user(self, api: AccountApi, item_index: int) -> Any:
        return api.delete_user(self._user_id(item_index))

    # ==== Organizations ====

    def _list_organizations(self, api: AccountApi, item_index: int) -> Any:
        query = build_request(
            OrganizationListQuery,
            limit=self.get_node_parameter("orgLimit", item_index, 10),
            skip=self.get_node_parameter("orgSkip", item_index, 0),
            user_id=optional_str(self.get_node_parameter("orgUserId", item_index, "")),
            name_search=optional_str(self.get_node_parameter("nameSearch", item_index, "")),
            member_search=optional_str(self.get_node_parameter("memberSearch", item_index, "")),
        )
        return api.list_organizations(query)

    def _get_organization(self, api: AccountApi, item_index: int) -> Any:
        return api.get_organization(self._organization_id(item_index))

    def _create_organization(self, api: AccountApi, item_index: int) -> Any:
        organization = build_request(
            OrganizationCreate,
            name=require_str(self.get_node_parameter("orgName", item_index), "Name"),
            type=optional_str(self.get_node_parameter("orgType", item_index, "individual")),
        )
        return api.create_organization(organization)

    def _update_organization(self, api: AccountApi, item_index: int) -> Any:
        organization_id = self._organization_id(item_index)
        update = build_request(
            OrganizationUpdate,
            name=optional_str(self.get_node_parameter("orgNameUpdate", item_index, "")),
            type=optional_str(self.get_node_parameter("orgTypeUpdate", item_index, None)),
            members=optional_array(self.get_node_parameter("members", item_index, ""), "Members"),
        )
        return api.update_organization(organization_id, update)

    def _delete_organization(self, api: AccountApi, item_index: int) -> Any:
        return api.delete_organization(self._organization_id(item_index))
