import logging

from ..agent import AgentRuntime
from ..chat.events import ActionResult

log = logging.getLogger(__name__)


async def query_portfolio_agent(runtime: AgentRuntime, question: str) -> ActionResult:
    """Answer a question in one piece.

    Failures are reported in the result rather than raised, with the
    error message of the agent or its configuration.

    Args:
        runtime: Handle owning the portfolio agent
        question: Visitor's question

    Returns:
        ActionResult with the answer and page suggestions, or the error
    """
    question = question.strip()
    if not question:
        return ActionResult(success=False, error="Question is required")

    try:
        agent = await runtime.get()
        result = await agent.query(question)
    except Exception as e:
        log.error("RAG agent query error: %s", e)
        return ActionResult(success=False, error=str(e) or "Unknown error occurred")

    return ActionResult(
        success=True,
        answer=result.answer,
        suggested_pages=result.suggested_pages
    )
