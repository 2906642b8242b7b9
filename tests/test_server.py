"""Tests for the HTTP server."""
import json

import pytest
from fastapi.testclient import TestClient

from aminebuddy.agent import AgentRuntime, KnowledgeBaseTool, PortfolioAgent
from aminebuddy.chat import ChunkEvent, parse_event_line
from aminebuddy.config import ServerSettings
from aminebuddy.errors import ConfigurationError
from aminebuddy.server import STREAM_ERROR_MESSAGE, create_app, encode_event, query_portfolio_agent
from conftest import FakeEmbedder, FakeLLM, FakeStore, make_passage


def build_runtime(llm: FakeLLM | None = None) -> tuple[AgentRuntime, FakeLLM, FakeStore]:
    llm = llm or FakeLLM()
    store = FakeStore(results=[make_passage("Amine built a portfolio copilot.", source="projects.md")])

    async def factory() -> PortfolioAgent:
        tool = KnowledgeBaseTool(store, FakeEmbedder())
        return PortfolioAgent(tool, llm, system_prompt="You are Amine Buddy.")

    return AgentRuntime(factory), llm, store


def records(body: str) -> list[dict]:
    return [
        json.loads(line[len("data: "):])
        for line in body.splitlines()
        if line.startswith("data: ")
    ]


class TestEncodeEvent:
    """Tests for SSE framing."""

    def test_model_payload(self):
        assert encode_event(ChunkEvent(content="Hi")) == 'data: {"type":"chunk","content":"Hi"}\n\n'

    def test_dict_payload(self):
        frame = encode_event({"type": "error", "message": "é"})
        assert frame == 'data: {"type": "error", "message": "é"}\n\n'

    def test_round_trips_through_parser(self):
        frame = encode_event(ChunkEvent(content="Hello"))
        assert parse_event_line(frame.strip()) == ChunkEvent(content="Hello")


class TestRagStream:
    """Tests for POST /api/rag-stream."""

    def test_streams_chunks_then_suggestions(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag-stream", json={"question": "What projects has Amine built?"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")

        events = records(response.text)
        chunks = [e["content"] for e in events if e["type"] == "chunk"]
        assert "".join(chunks) == "Amine is a software engineer. "
        assert events[-1] == {
            "type": "suggestions",
            "pages": [{"title": "Projects", "href": "/projects", "description": "View Amine's projects"}],
        }

    def test_no_suggestions_record_without_matches(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag-stream", json={"question": "hello there"})

        assert all(e["type"] == "chunk" for e in records(response.text))

    def test_generation_failure_sends_generic_error(self):
        runtime, _, _ = build_runtime(FakeLLM(fail=True))

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag-stream", json={"question": "Who is Amine?"})

        assert response.status_code == 200
        assert records(response.text) == [{"type": "error", "message": STREAM_ERROR_MESSAGE}]
        assert "model unavailable" not in response.text

    def test_configuration_failure_sends_generic_error(self):
        async def factory():
            raise ConfigurationError("OPENAI_API_KEY is not set in environment variables")

        with TestClient(create_app(AgentRuntime(factory))) as client:
            response = client.post("/api/rag-stream", json={"question": "Who is Amine?"})

        assert records(response.text) == [{"type": "error", "message": STREAM_ERROR_MESSAGE}]

    def test_blank_question_rejected(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag-stream", json={"question": "   "})

        assert response.status_code == 400

    def test_missing_question_rejected(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag-stream", json={})

        assert response.status_code == 422


class TestRagAction:
    """Tests for POST /api/rag."""

    def test_success_uses_camel_case(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag", json={"question": "What projects has Amine built?"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "answer": "Amine is a software engineer.",
            "suggestedPages": [
                {"title": "Projects", "href": "/projects", "description": "View Amine's projects"}
            ],
        }

    def test_blank_question(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag", json={"question": ""})

        assert response.json() == {"success": False, "error": "Question is required"}

    def test_failure_reports_error(self):
        runtime, _, _ = build_runtime(FakeLLM(fail=True))

        with TestClient(create_app(runtime)) as client:
            response = client.post("/api/rag", json={"question": "Who is Amine?"})

        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Failed to query RAG agent: model unavailable"
        assert "answer" not in body


class TestHealth:
    """Tests for GET /api/health."""

    def test_before_first_question(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            response = client.get("/api/health")

        assert response.json() == {"status": "ok", "agent_ready": False}

    def test_after_first_question(self):
        runtime, _, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            client.post("/api/rag", json={"question": "Hi"})
            response = client.get("/api/health")

        assert response.json() == {"status": "ok", "agent_ready": True, "knowledge_base": "ok"}


class TestLifecycle:
    """Tests for runtime ownership."""

    def test_shutdown_closes_agent(self):
        runtime, llm, _ = build_runtime()

        with TestClient(create_app(runtime)) as client:
            client.post("/api/rag", json={"question": "Hi"})
            assert runtime.is_ready

        assert llm.closed is True
        assert runtime.is_ready is False

    def test_cors_headers(self):
        runtime, _, _ = build_runtime()
        app = create_app(runtime, ServerSettings(cors_origins=["https://aminehachemi.com"]))

        with TestClient(app) as client:
            response = client.options(
                "/api/rag",
                headers={
                    "Origin": "https://aminehachemi.com",
                    "Access-Control-Request-Method": "POST",
                },
            )

        assert response.headers["access-control-allow-origin"] == "https://aminehachemi.com"


class TestQueryPortfolioAgent:
    """Tests for the in-process action."""

    @pytest.mark.asyncio
    async def test_success(self):
        runtime, _, store = build_runtime()

        result = await query_portfolio_agent(runtime, "  What are Amine's key skills?  ")

        assert result.success is True
        assert result.answer == "Amine is a software engineer."
        assert [p.href for p in result.suggested_pages] == ["/skills-tools"]
        assert store.searches == [{"limit": 5, "namespace": None}]
        await runtime.close()

    @pytest.mark.asyncio
    async def test_no_suggestions_is_none(self):
        runtime, _, _ = build_runtime()

        result = await query_portfolio_agent(runtime, "hello there")

        assert result.suggested_pages is None
        assert "suggestedPages" not in result.to_wire()
        await runtime.close()
