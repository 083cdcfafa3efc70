"""LLM extraction runs and their stored results."""

from typing import Any, Dict

from pydantic import Field

from .base import OrganizationApi, RequestModel

DEFAULT_PROMPT_REVID = "default"


class LlmRunQuery(RequestModel):
    prompt_revid: str = Field(DEFAULT_PROMPT_REVID, min_length=1)
    force: bool = False


class LlmResultQuery(RequestModel):
    prompt_revid: str = Field(DEFAULT_PROMPT_REVID, min_length=1)
    fallback: bool = False


class LlmResultUpdate(RequestModel):
    updated_llm_result: Dict[str, Any]
    is_verified: bool = False


class LlmApi(OrganizationApi):
    """Run prompts against a document and manage the results."""

    def run(self, document_id: str, query: LlmRunQuery) -> Any:
        return self.client.call(
            "POST", self._path("llm", "run", document_id), params=query.to_payload()
        )

    def get_result(self, document_id: str, query: LlmResultQuery) -> Any:
        return self.client.call(
            "GET", self._path("llm", "result", document_id), params=query.to_payload()
        )

    def update_result(
        self,
        document_id: str,
        prompt_revid: str,
        update: LlmResultUpdate,
    ) -> Any:
        return self.client.call(
            "PUT",
            self._path("llm", "result", document_id),
            params={"prompt_revid": prompt_revid},
            body=update.to_payload(),
        )

    def delete_result(self, document_id: str, prompt_revid: str) -> Dict[str, Any]:
        self.client.call(
            "DELETE",
            self._path("llm", "result", document_id),
            params={"prompt_revid": prompt_revid},
        )
        return {"success": True, "documentId": document_id, "promptRevid": prompt_revid}
