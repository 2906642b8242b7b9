"""Turn-by-turn driver of the conversation log.

Hidden design decisions:
- One turn at a time: ``submit`` is a no-op while a turn is in flight, so
  chunks of two answers can never interleave.
- The assistant placeholder is mutated in place; observers are notified
  after every change and re-read ``messages``.
- Visitors only ever see two failure texts. The underlying error is logged.
- Cancelling a turn keeps whatever text already arrived.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from ..errors import ChatStreamError
from ..suggestions import PageSuggestion
from .events import ChunkEvent, ErrorEvent, SuggestionsEvent
from .models import ERROR_MESSAGE, NO_RESPONSE_MESSAGE, WELCOME_MESSAGE, Message, Role
from .scroll import ScrollPolicy
from .transport import ChatTransport

log = logging.getLogger(__name__)


class ChatController:
    """Owns the conversation log and runs turns against a transport.

    Args:
        transport: Source of answer events
        on_update: Called after every change to the log or loading flag
        welcome: Assistant greeting seeded into the log; None for an empty log
        scroll: Auto-scroll policy re-armed on each submission
    """

    def __init__(
        self,
        transport: ChatTransport,
        on_update: Callable[[], None] | None = None,
        welcome: str | None = WELCOME_MESSAGE,
        scroll: ScrollPolicy | None = None
    ):
        self._transport = transport
        self._on_update = on_update
        self._messages: list[Message] = []
        if welcome:
            self._messages.append(Message(role=Role.ASSISTANT, content=welcome))
        self._welcome_count = len(self._messages)
        self._loading = False
        self._task: asyncio.Task | None = None
        self.scroll = scroll or ScrollPolicy()

    @property
    def messages(self) -> Sequence[Message]:
        return tuple(self._messages)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def show_quick_questions(self) -> bool:
        return len(self._messages) == self._welcome_count

    @property
    def show_typing_indicator(self) -> bool:
        """True while waiting for the first chunk of an answer."""
        if not self._loading:
            return False
        return not any(m.is_streaming and m.content for m in self._messages)

    async def submit(self, question: str) -> None:
        """Run one turn for ``question``.

        Never raises for transport or stream failures; they end the turn
        with the fixed error text. Cancellation propagates after the turn
        is finalized.
        """
        text = question.strip()
        if not text or self._loading:
            return

        self._loading = True
        self._task = asyncio.current_task()

        placeholder = Message(role=Role.ASSISTANT, content="", is_streaming=True)
        self._messages.append(Message(role=Role.USER, content=text))
        self._messages.append(placeholder)
        self.scroll.arm()
        self._notify()

        accumulated = ""
        pages: list[PageSuggestion] = []
        try:
            async for event in self._transport.events(text):
                if isinstance(event, ChunkEvent):
                    accumulated += event.content
                    placeholder.content = accumulated
                    self._notify()
                elif isinstance(event, SuggestionsEvent):
                    pages = list(event.pages)
                elif isinstance(event, ErrorEvent):
                    raise ChatStreamError(event.message)

            placeholder.content = accumulated or NO_RESPONSE_MESSAGE
            placeholder.suggested_pages = pages or None
        except asyncio.CancelledError:
            log.info("Turn cancelled after %d characters", len(accumulated))
            placeholder.content = accumulated or NO_RESPONSE_MESSAGE
            raise
        except Exception as e:
            log.warning("Turn failed: %s", e)
            placeholder.content = ERROR_MESSAGE
            placeholder.suggested_pages = None
        finally:
            placeholder.is_streaming = False
            self._loading = False
            self._task = None
            self._notify()

    def cancel(self) -> bool:
        """Cancel the in-flight turn, if any.

        Returns:
            True if a turn was running and has been asked to stop
        """
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()

    async def close(self) -> None:
        self.cancel()
        await self._transport.close()

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()
