"""Client for the tenant's generative AI assistant endpoints."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from xcsh.infrastructure.api_client import APIClient

logger = logging.getLogger(__name__)

NEGATIVE_FEEDBACK_TYPES = {
    "other": "OTHER",
    "inaccurate": "INACCURATE_DATA",
    "irrelevant": "IRRELEVANT_CONTENT",
    "format": "POOR_FORMAT",
    "slow": "SLOW_RESPONSE",
}


def query_path(namespace: str) -> str:
    return f"/api/gen-ai/namespaces/{namespace}/query"


def feedback_path(namespace: str) -> str:
    return f"/api/gen-ai/namespaces/{namespace}/query_feedback"


class AIQueryResponse(BaseModel):
    """Answer to one assistant query."""

    model_config = {"frozen": True}

    query_id: str = ""
    text: str = ""
    follow_up_queries: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)


def _answer_text(data: dict[str, Any]) -> str:
    """The response body nests the answer under one of several keys."""
    for key in ("generic_response", "explain_log", "response"):
        value = data.get(key)
        if isinstance(value, dict):
            text = value.get("summary") or value.get("text") or ""
            if text:
                return str(text)
        elif isinstance(value, str) and value:
            return value
    return str(data.get("text", ""))


def parse_query_response(data: Any) -> AIQueryResponse:
    if not isinstance(data, dict):
        return AIQueryResponse(text=str(data or ""))
    links: list[str] = []
    generic = data.get("generic_response")
    if isinstance(generic, dict):
        links = [
            link.get("url", "")
            for link in generic.get("links", [])
            if isinstance(link, dict) and link.get("url")
        ]
    follow_ups = data.get("follow_up_queries") or []
    return AIQueryResponse(
        query_id=str(data.get("query_id", "")),
        text=_answer_text(data),
        follow_up_queries=[str(q) for q in follow_ups if q],
        links=links,
    )


class GenAIClient:
    """Query the assistant and submit feedback on its answers."""

    def __init__(self, api: APIClient) -> None:
        self._api = api

    async def query(self, namespace: str, question: str) -> AIQueryResponse:
        """Ask *question* in *namespace*.

        Raises:
            APIError: When the request fails.
        """
        logger.debug("AI query in namespace %s", namespace)
        response = await self._api.post(
            query_path(namespace),
            {"current_query": question, "namespace": namespace},
        )
        return parse_query_response(response.data)

    async def feedback(
        self,
        namespace: str,
        query_id: str,
        query: str,
        *,
        positive: bool,
        remark: str | None = None,
        comment: str | None = None,
    ) -> None:
        """Rate the answer to a previous query.

        Raises:
            APIError: When the request fails.
        """
        body: dict[str, Any] = {"namespace": namespace, "query": query, "query_id": query_id}
        if positive:
            body["positive_feedback"] = {}
        else:
            body["negative_feedback"] = {
                "remarks": [NEGATIVE_FEEDBACK_TYPES.get(remark or "", "OTHER")]
            }
        if comment:
            body["comment"] = comment
        await self._api.post(feedback_path(namespace), body)
