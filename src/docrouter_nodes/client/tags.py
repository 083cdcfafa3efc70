"""Tags API."""

from typing import Any, Dict, Optional

from pydantic import Field

from .base import OrganizationApi, RequestModel, SparseUpdate


class TagListQuery(RequestModel):
    limit: int = Field(10, ge=1, le=100)
    skip: int = Field(0, ge=0)
    name_search: Optional[str] = None


class TagCreate(RequestModel):
    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    description: Optional[str] = None


class TagUpdate(SparseUpdate):
    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class TagsApi(OrganizationApi):

    def list(self, query: TagListQuery) -> Any:
        return self.client.call("GET", self._path("tags"), params=query.to_payload())

    def get(self, tag_id: str) -> Any:
        return self.client.call("GET", self._path("tags", tag_id))

    def create(self, tag: TagCreate) -> Any:
        return self.client.call("POST", self._path("tags"), body=tag.to_payload())

    def update(self, tag_id: str, update: TagUpdate) -> Any:
        return self.client.call("PUT", self._path("tags", tag_id), body=update.to_payload())

    def delete(self, tag_id: str) -> Dict[str, Any]:
        self.client.call("DELETE", self._path("tags", tag_id))
        return {"success": True, "tagId": tag_id}
