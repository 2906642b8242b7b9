"""FastAPI application serving the portfolio agent.

Hidden design decisions:
- The agent is owned by an AgentRuntime passed in by the caller and closed
  when the application shuts down.
- Streaming answers never carry raw error text; failures are logged and a
  generic error record ends the stream.
- Page suggestions are computed here once per question, after the answer.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..agent import AgentRuntime, PortfolioAgent, create_portfolio_agent
from ..chat.events import ActionResult, ChunkEvent, ErrorEvent, SuggestionsEvent
from ..config import ServerSettings, load_settings
from ..logging_setup import configure_logging
from ..suggestions import suggest_pages
from .actions import query_portfolio_agent
from .sse import MEDIA_TYPE, STREAM_HEADERS, encode_event

log = logging.getLogger(__name__)

STREAM_ERROR_MESSAGE = "Failed to generate a response"


class QuestionRequest(BaseModel):
    question: str = Field(description="Visitor's question")


def create_app(runtime: AgentRuntime, settings: ServerSettings | None = None) -> FastAPI:
    """Build the HTTP application.

    Args:
        runtime: Handle owning the portfolio agent
        settings: Server settings (CORS origins)

    Returns:
        Configured FastAPI application
    """
    settings = settings or ServerSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await runtime.close()

    app = FastAPI(title="Amine Buddy", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.post("/api/rag-stream")
    async def rag_stream(request: QuestionRequest) -> StreamingResponse:
        question = request.question.strip()
        if not question:
            raise HTTPException(status_code=400, detail="Question is required")

        async def generate() -> AsyncIterator[str]:
            try:
                agent = await runtime.get()
                async for fragment in agent.stream(question):
                    yield encode_event(ChunkEvent(content=fragment))

                pages = suggest_pages(question)
                if pages:
                    yield encode_event(SuggestionsEvent(pages=pages))
            except Exception:
                log.exception("Streaming answer failed")
                yield encode_event(ErrorEvent(message=STREAM_ERROR_MESSAGE))

        return StreamingResponse(generate(), media_type=MEDIA_TYPE, headers=STREAM_HEADERS)

    @app.post(
        "/api/rag",
        response_model=ActionResult,
        response_model_by_alias=True,
        response_model_exclude_none=True
    )
    async def rag(request: QuestionRequest) -> ActionResult:
        return await query_portfolio_agent(runtime, request.question)

    @app.get("/api/health")
    async def health() -> dict:
        status = {"status": "ok", "agent_ready": runtime.is_ready}
        if runtime.is_ready:
            agent = await runtime.get()
            healthy = await agent.health_check()
            status["knowledge_base"] = "ok" if healthy else "unavailable"
        return status

    return app


def create_default_app() -> FastAPI:
    """Application factory for uvicorn, configured from the environment."""
    settings = load_settings()
    configure_logging(settings.log_level)

    async def build_agent() -> PortfolioAgent:
        return await create_portfolio_agent(settings)

    return create_app(AgentRuntime(build_agent), settings.server)
