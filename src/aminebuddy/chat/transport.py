"""Ways of getting an answer from the server.

Both transports produce the same event sequence, so the controller
handles the one-shot server action as a stream with a single chunk.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx

from .events import ActionResult, ChunkEvent, ErrorEvent, SuggestionsEvent, parse_event_line

StreamEvent = ChunkEvent | SuggestionsEvent | ErrorEvent

DEFAULT_TIMEOUT = httpx.Timeout(10.0, read=120.0)


class ChatTransport(ABC):
    """Source of answer events for one question."""

    @abstractmethod
    def events(self, question: str) -> AsyncIterator[StreamEvent]:
        """Yield the events answering a question.

        Raises:
            httpx.HTTPError: On network failure or a non-success status
        """

    async def close(self) -> None:
        """Release network resources."""

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class StreamingTransport(ChatTransport):
    """POSTs the question and decodes the streamed response line by line."""

    def __init__(
        self,
        base_url: str,
        path: str = "/api/rag-stream",
        client: httpx.AsyncClient | None = None
    ):
        self._path = path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=DEFAULT_TIMEOUT)

    async def events(self, question: str) -> AsyncIterator[StreamEvent]:
        async with self._client.stream("POST", self._path, json={"question": question}) as response:
            response.raise_for_status()
            async for line in response.aiter_lines():
                event = parse_event_line(line)
                if event is not None:
                    yield event

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class RemoteAction:
    """Calls the server action endpoint over HTTP."""

    def __init__(
        self,
        base_url: str,
        path: str = "/api/rag",
        client: httpx.AsyncClient | None = None
    ):
        self._path = path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=DEFAULT_TIMEOUT)

    async def __call__(self, question: str) -> ActionResult:
        response = await self._client.post(self._path, json={"question": question})
        response.raise_for_status()
        return ActionResult.model_validate(response.json())

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class ActionTransport(ChatTransport):
    """Adapts a one-shot action to the event stream."""

    def __init__(self, action: Callable[[str], Awaitable[ActionResult]]):
        self._action = action

    async def events(self, question: str) -> AsyncIterator[StreamEvent]:
        result = await self._action(question)

        if not result.success:
            yield ErrorEvent(message=result.error or "Unknown error")
            return

        if result.answer:
            yield ChunkEvent(content=result.answer)
        if result.suggested_pages:
            yield SuggestionsEvent(pages=result.suggested_pages)

    async def close(self) -> None:
        closer = getattr(self._action, "close", None)
        if closer is not None:
            await closer()
