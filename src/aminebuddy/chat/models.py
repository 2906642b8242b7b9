"""Conversation data held by the chat controller."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..suggestions import PageSuggestion

NO_RESPONSE_MESSAGE = (
    "I apologize, but I could not generate a response. "
    "Please try rephrasing your question."
)

ERROR_MESSAGE = (
    "I apologize, but I encountered an error while processing your request. "
    "Please try again, or feel free to explore the portfolio pages for more information."
)

WELCOME_MESSAGE = """Hey! 👋 I'm **Amine Buddy**, your friendly guide to Amine's portfolio.

I know all about his:
- **Skills** & technologies
- **Experience** at Intelswift
- **Projects** & achievements

Whether you're a *CEO*, *recruiter*, or just exploring, ask me anything!"""

QUICK_QUESTIONS = (
    "What are Amine's key skills?",
    "Tell me about Amine's experience at Intelswift",
    "What projects has Amine worked on?",
    "What technologies does Amine specialize in?",
)


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """One entry of the conversation log."""

    role: Role
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    suggested_pages: list[PageSuggestion] | None = None
    is_streaming: bool = False
