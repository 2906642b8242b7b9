"""Terminal UI module for aminebuddy.

Provides a Textual rendition of the portfolio copilot widget.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message bubbles, page links, input bar)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- config.py: Geometry conversions and UI text
- app.py: Application orchestration (open/close, turns, focus)
"""

from .app import CopilotApp, run_copilot
from .widgets import ChatInputBar, ChatLog, ChatPanel, MessageBubble, PageLinks, QuickQuestions

__all__ = [
    "ChatInputBar",
    "ChatLog",
    "ChatPanel",
    "CopilotApp",
    "MessageBubble",
    "PageLinks",
    "QuickQuestions",
    "run_copilot",
]
