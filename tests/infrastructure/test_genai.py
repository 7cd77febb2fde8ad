"""Tests for the generative AI client."""

from __future__ import annotations

from tests.conftest import Recorder, mock_client, run
from xcsh.infrastructure.genai import GenAIClient, parse_query_response

QUERY = "POST /api/gen-ai/namespaces/prod/query"
FEEDBACK = "POST /api/gen-ai/namespaces/prod/query_feedback"


class TestParseQueryResponse:
    def test_generic_response(self) -> None:
        response = parse_query_response(
            {
                "query_id": "q-1",
                "generic_response": {
                    "summary": "Use an origin pool.",
                    "links": [{"url": "https://docs.example/pools"}, {"title": "no url"}],
                },
                "follow_up_queries": ["How do I add a health check?", ""],
            }
        )
        assert response.query_id == "q-1"
        assert response.text == "Use an origin pool."
        assert response.links == ["https://docs.example/pools"]
        assert response.follow_up_queries == ["How do I add a health check?"]

    def test_explain_log(self) -> None:
        response = parse_query_response({"explain_log": {"text": "The request was blocked."}})
        assert response.text == "The request was blocked."

    def test_plain_text(self) -> None:
        assert parse_query_response({"text": "hello"}).text == "hello"
        assert parse_query_response("raw").text == "raw"
        assert parse_query_response(None).text == ""


class TestGenAIClient:
    def test_query(self) -> None:
        recorder = Recorder({QUERY: {"query_id": "q-9", "text": "answer"}})
        response = run(GenAIClient(mock_client(recorder)).query("prod", "what is a vK8s?"))
        assert response.query_id == "q-9"
        assert recorder.bodies() == [{"current_query": "what is a vK8s?", "namespace": "prod"}]

    def test_positive_feedback(self) -> None:
        recorder = Recorder({FEEDBACK: {}})
        run(GenAIClient(mock_client(recorder)).feedback("prod", "q-1", "question", positive=True))
        assert recorder.bodies() == [
            {
                "namespace": "prod",
                "query": "question",
                "query_id": "q-1",
                "positive_feedback": {},
            }
        ]

    def test_negative_feedback_with_remark(self) -> None:
        recorder = Recorder({FEEDBACK: {}})
        client = GenAIClient(mock_client(recorder))
        run(client.feedback("prod", "q-1", "q", positive=False, remark="slow", comment="took ages"))
        body = recorder.bodies()[0]
        assert body["negative_feedback"] == {"remarks": ["SLOW_RESPONSE"]}
        assert body["comment"] == "took ages"

    def test_unknown_remark_maps_to_other(self) -> None:
        recorder = Recorder({FEEDBACK: {}})
        run(GenAIClient(mock_client(recorder)).feedback("prod", "q", "q", positive=False, remark="meh"))
        assert recorder.bodies()[0]["negative_feedback"] == {"remarks": ["OTHER"]}
