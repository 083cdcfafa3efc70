"""
DocRouter LLM node - run prompts on documents and manage their results.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from node_sdk import ValidationError

from docrouter_nodes.client import LlmApi, build_request
from docrouter_nodes.client.llm import (
    DEFAULT_PROMPT_REVID,
    LlmResultQuery,
    LlmResultUpdate,
    LlmRunQuery,
)

from .base import DocRouterBaseNode, Handler, operation_option, show_for
from .params import clean_str, optional_bool, parse_json, require_str


class LlmOperation(str, Enum):
    RUN = "run"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"


class DocRouterLLMNode(DocRouterBaseNode):
    """Every operation runs per input item."""

    type = "docRouterLLM"
    version = 1

    description = {
        "displayName": "DocRouter LLM",
        "name": "docRouterLLM",
        "icon": "file:docrouter.svg",
        "group": ["transform"],
        "description": "Run LLM extraction on documents and manage the results",
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
                    operation_option("run", "Run", "Run LLM analysis on a document"),
                    operation_option("get", "Get", "Get the LLM result for a document"),
                    operation_option("update", "Update", "Update an LLM result"),
                    operation_option("delete", "Delete", "Delete an LLM result"),
                ],
                "default": "run",
            },
            {
                "displayName": "Document ID",
                "name": "documentId",
                "type": "string",
                "default": "",
                "required": True,
                "description": "The ID of the document",
            },
            {
                "displayName": "Prompt Revision ID",
                "name": "promptRevid",
                "type": "string",
                "default": DEFAULT_PROMPT_REVID,
                "description": 'Prompt revision to use ("default" for the default prompt)',
            },
            {
                "displayName": "Force",
                "name": "force",
                "type": "boolean",
                "default": False,
                "displayOptions": show_for(LlmOperation.RUN),
                "description": "Re-run even if a result already exists",
            },
            {
                "displayName": "Fallback",
                "name": "fallback",
                "type": "boolean",
                "default": False,
                "displayOptions": show_for(LlmOperation.GET),
                "description": "Fall back to the most recent available prompt revision",
            },
            {
                "displayName": "Updated LLM Result",
                "name": "updatedLlmResult",
                "type": "json",
                "default": "{}",
                "required": True,
                "displayOptions": show_for(LlmOperation.UPDATE),
                "description": "The corrected extraction result as a JSON object",
            },
            {
                "displayName": "Is Verified",
                "name": "isVerified",
                "type": "boolean",
                "default": False,
                "displayOptions": show_for(LlmOperation.UPDATE),
                "description": "Mark the result as verified",
            },
        ],
        "credentials": [
            {"name": "docRouterOrgApi", "required": True},
        ],
    }

    operations = LlmOperation
    api_class = LlmApi

    def get_handlers(self) -> Dict[Enum, Handler]:
        return {
            LlmOperation.RUN: self._run,
            LlmOperation.GET: self._get,
            LlmOperation.UPDATE: self._update,
            LlmOperation.DELETE: self._delete,
        }

    def _document_id(self, item_index: int) -> str:
        return require_str(self.get_node_parameter("documentId", item_index), "Document ID")

    def _prompt_revid(self, item_index: int) -> str:
        return clean_str(
            self.get_node_parameter("promptRevid", item_index, DEFAULT_PROMPT_REVID)
        ) or DEFAULT_PROMPT_REVID

    def _required_prompt_revid(self, item_index: int, action: str) -> str:
        # Update and delete target one stored result; no default revision
        prompt_revid = clean_str(self.get_node_parameter("promptRevid", item_index, ""))
        if not prompt_revid:
            raise ValidationError(f"Prompt Revision ID is required for {action}.")
        return prompt_revid

    def _run(self, api: LlmApi, item_index: int) -> Any:
        query = build_request(
            LlmRunQuery,
            prompt_revid=self._prompt_revid(item_index),
            force=optional_bool(self.get_node_parameter("force", item_index, False)),
        )
        return api.run(self._document_id(item_index), query)

    def _get(self, api: LlmApi, item_index: int) -> Any:
        query = build_request(
            LlmResultQuery,
            prompt_revid=self._prompt_revid(item_index),
            fallback=optional_bool(self.get_node_parameter("fallback", item_index, False)),
        )
        return api.get_result(self._document_id(item_index), query)

    def _update(self, api: LlmApi, item_index: int) -> Any:
        document_id = self._document_id(item_index)
        prompt_revid = self._required_prompt_revid(item_index, "Update")
        update = build_request(
            LlmResultUpdate,
            updated_llm_result=parse_json(
                self.get_node_parameter("updatedLlmResult", item_index, "{}"),
                "Updated LLM Result",
            ),
            is_verified=optional_bool(self.get_node_parameter("isVerified", item_index, False)),
        )
        return api.update_result(document_id, prompt_revid, update)

    def _delete(self, api: LlmApi, item_index: int) -> Any:
        document_id = self._document_id(item_index)
        prompt_revid = self._required_prompt_revid(item_index, "Delete")
        return api.delete_result(document_id, prompt_revid)
