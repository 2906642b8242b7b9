"""Chat controller: conversation log, answer stream decoding and widget state."""

from .controller import ChatController
from .events import (
    ActionResult,
    ChunkEvent,
    ErrorEvent,
    SuggestionsEvent,
    parse_event_line,
)
from .models import (
    ERROR_MESSAGE,
    NO_RESPONSE_MESSAGE,
    QUICK_QUESTIONS,
    WELCOME_MESSAGE,
    Message,
    Role,
)
from .scroll import ScrollPolicy, is_near_bottom
from .transport import ActionTransport, ChatTransport, RemoteAction, StreamingTransport
from .widget_state import FocusRequest, WidgetState

__all__ = [
    "ERROR_MESSAGE",
    "NO_RESPONSE_MESSAGE",
    "QUICK_QUESTIONS",
    "WELCOME_MESSAGE",
    "ActionResult",
    "ActionTransport",
    "ChatController",
    "ChatTransport",
    "ChunkEvent",
    "ErrorEvent",
    "FocusRequest",
    "Message",
    "RemoteAction",
    "Role",
    "ScrollPolicy",
    "StreamingTransport",
    "SuggestionsEvent",
    "WidgetState",
    "is_near_bottom",
    "parse_event_line",
]
