"""HTTP surface: streaming and one-shot question endpoints."""

from .actions import query_portfolio_agent
from .app import STREAM_ERROR_MESSAGE, QuestionRequest, create_app, create_default_app
from .sse import encode_event

__all__ = [
    "STREAM_ERROR_MESSAGE",
    "QuestionRequest",
    "create_app",
    "create_default_app",
    "encode_event",
    "query_portfolio_agent",
]
