"""
Schemas API.

Schemas are versioned: reads and validation address a revision ID
(schemaRevid), while updates, deletes and version listings address the
stable schema ID.
"""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from .base import OrganizationApi, RequestModel, SparseUpdate


def _non_empty_schema(value: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if value is not None and not value:
        raise ValueError("JSON schema must not be empty")
    return value


class SchemaListQuery(RequestModel):
    limit: int = Field(10, ge=1, le=100)
    skip: int = Field(0, ge=0)
    name_search: Optional[str] = None


class SchemaCreate(RequestModel):
    name: str = Field(..., min_length=1)
    json_schema: Dict[str, Any]

    @field_validator("json_schema")
    @classmethod
    def check_schema(cls, value):
        return _non_empty_schema(value)


class SchemaUpdate(SparseUpdate):
    name: Optional[str] = None
    json_schema: Optional[Dict[str, Any]] = None

    @field_validator("json_schema")
    @classmethod
    def check_schema(cls, value):
        return _non_empty_schema(value)


class SchemasApi(OrganizationApi):

    def list(self, query: SchemaListQuery) -> Any:
        return self.client.call("GET", self._path("schemas"), params=query.to_payload())

    def get(self, schema_revid: str) -> Any:
        return self.client.call("GET", self._path("schemas", schema_revid))

    def create(self, schema: SchemaCreate) -> Any:
        return self.client.call("POST", self._path("schemas"), body=schema.to_payload())

    def update(self, schema_id: str, update: SchemaUpdate) -> Any:
        return self.client.call(
            "PUT", self._path("schemas", schema_id), body=update.to_payload()
        )

    def delete(self, schema_id: str) -> Dict[str, Any]:
        self.client.call("DELETE", self._path("schemas", schema_id))
        return {"success": True, "schemaId": schema_id}

    def validate(self, schema_revid: str, data: Any) -> Any:
        """Validate `data` against one schema revision."""
        return self.client.call(
            "POST", self._path("schemas", schema_revid, "validate"), body=data
        )

    def list_versions(self, schema_id: str) -> Any:
        return self.client.call("GET", self._path("schemas", schema_id, "versions"))
