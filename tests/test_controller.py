"""Unit tests for the streaming chat controller."""
import asyncio
import json

import httpx
import pytest

from aminebuddy.chat import (
    ERROR_MESSAGE,
    NO_RESPONSE_MESSAGE,
    WELCOME_MESSAGE,
    ActionResult,
    ActionTransport,
    ChatController,
    ChatTransport,
    ChunkEvent,
    RemoteAction,
    Role,
    StreamingTransport,
)
from aminebuddy.suggestions import PageSuggestion

BASE_URL = "http://buddy.test"


def stream_body(*lines: str) -> bytes:
    return ("\n".join(lines) + "\n").encode()


def streaming_controller(handler, **kwargs) -> ChatController:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return ChatController(StreamingTransport(BASE_URL, client=client), **kwargs)


class GatedTransport(ChatTransport):
    """Sends one chunk, then waits until released before finishing."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def events(self, question: str):
        yield ChunkEvent(content="Partial")
        self.started.set()
        await self.release.wait()
        yield ChunkEvent(content=" answer")


class TestChatControllerStreaming:
    """Tests for turns over the streaming transport."""

    @pytest.mark.asyncio
    async def test_chunks_and_suggestions(self):
        """Chunks accumulate; suggestions attach at the end."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=stream_body(
                'data: {"type":"chunk","content":"Hel"}',
                'data: {"type":"chunk","content":"lo"}',
                'data: {"type":"suggestions","pages":[{"title":"About","href":"/about"}]}',
            ))

        controller = streaming_controller(handler)
        await controller.submit("Who is Amine?")

        answer = controller.messages[-1]
        assert answer.role == Role.ASSISTANT
        assert answer.content == "Hello"
        assert answer.is_streaming is False
        assert answer.suggested_pages == [PageSuggestion(title="About", href="/about")]
        assert controller.is_loading is False

    @pytest.mark.asyncio
    async def test_posts_question_as_json(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=stream_body('data: {"type":"chunk","content":"ok"}'))

        controller = streaming_controller(handler)
        await controller.submit("  What are his skills?  ")

        assert seen == {
            "method": "POST",
            "path": "/api/rag-stream",
            "body": {"question": "What are his skills?"},
        }
        assert controller.messages[-2].content == "What are his skills?"

    @pytest.mark.asyncio
    async def test_no_chunks_uses_fallback(self):
        """A stream with no chunks ends with the fixed apology, not empty text."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"")

        controller = streaming_controller(handler)
        await controller.submit("Hi")

        answer = controller.messages[-1]
        assert answer.content == NO_RESPONSE_MESSAGE
        assert answer.suggested_pages is None

    @pytest.mark.asyncio
    async def test_server_error_status(self):
        """HTTP 500 ends the turn with the error apology."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, content=b"Internal Server Error")

        controller = streaming_controller(handler)
        await controller.submit("Hi")

        answer = controller.messages[-1]
        assert answer.content == ERROR_MESSAGE
        assert answer.is_streaming is False
        assert controller.is_loading is False

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        controller = streaming_controller(handler)
        await controller.submit("Hi")

        assert controller.messages[-1].content == ERROR_MESSAGE
        assert controller.is_loading is False

    @pytest.mark.asyncio
    async def test_malformed_line_skipped(self):
        """A bad line between chunks does not interrupt accumulation."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=stream_body(
                'data: {"type":"chunk","content":"Hel"}',
                "data: not-json",
                'data: {"type":"chunk","content":"lo"}',
            ))

        controller = streaming_controller(handler)
        await controller.submit("Hi")

        assert controller.messages[-1].content == "Hello"

    @pytest.mark.asyncio
    async def test_error_event_aborts_turn(self):
        """An error record wins over text and suggestions already received."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=stream_body(
                'data: {"type":"chunk","content":"Hel"}',
                'data: {"type":"suggestions","pages":[{"title":"About","href":"/about"}]}',
                'data: {"type":"error","message":"upstream failed"}',
                'data: {"type":"chunk","content":"lo"}',
            ))

        controller = streaming_controller(handler)
        await controller.submit("Hi")

        answer = controller.messages[-1]
        assert answer.content == ERROR_MESSAGE
        assert answer.suggested_pages is None
        assert answer.is_streaming is False

    @pytest.mark.asyncio
    async def test_observer_sees_every_chunk(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=stream_body(
                'data: {"type":"chunk","content":"a"}',
                'data: {"type":"chunk","content":"b"}',
                'data: {"type":"chunk","content":"c"}',
            ))

        snapshots = []
        controller = streaming_controller(
            handler,
            on_update=lambda: snapshots.append(controller.messages[-1].content)
        )
        await controller.submit("Hi")

        assert snapshots == ["", "a", "ab", "abc", "abc"]


class TestChatControllerState:
    """Tests for guards, derived flags and cancellation."""

    @pytest.mark.asyncio
    async def test_welcome_message(self):
        controller = ChatController(GatedTransport())

        assert len(controller.messages) == 1
        assert controller.messages[0].content == WELCOME_MESSAGE
        assert controller.show_quick_questions is True
        assert controller.show_typing_indicator is False

    @pytest.mark.asyncio
    async def test_blank_question_is_noop(self):
        controller = ChatController(GatedTransport())
        await controller.submit("   ")

        assert len(controller.messages) == 1
        assert controller.is_loading is False

    @pytest.mark.asyncio
    async def test_submit_while_loading_is_noop(self):
        transport = GatedTransport()
        controller = ChatController(transport)

        task = asyncio.create_task(controller.submit("First question"))
        await transport.started.wait()
        assert controller.is_loading is True

        await controller.submit("Second question")
        assert len(controller.messages) == 3

        transport.release.set()
        await task

        assert len(controller.messages) == 3
        assert controller.messages[-1].content == "Partial answer"

    @pytest.mark.asyncio
    async def test_only_one_message_streaming(self):
        transport = GatedTransport()
        controller = ChatController(transport)

        task = asyncio.create_task(controller.submit("Hi"))
        await transport.started.wait()

        streaming = [m for m in controller.messages if m.is_streaming]
        assert len(streaming) == 1
        assert streaming[0] is controller.messages[-1]

        transport.release.set()
        await task
        assert not any(m.is_streaming for m in controller.messages)

    @pytest.mark.asyncio
    async def test_typing_indicator_until_first_chunk(self):
        indicator = []
        transport = GatedTransport()
        controller = ChatController(
            transport,
            on_update=lambda: indicator.append(controller.show_typing_indicator)
        )

        task = asyncio.create_task(controller.submit("Hi"))
        await transport.started.wait()
        transport.release.set()
        await task

        assert indicator[0] is True
        assert indicator[1:] == [False, False, False]
        assert controller.show_quick_questions is False

    @pytest.mark.asyncio
    async def test_cancel_keeps_partial_text(self):
        transport = GatedTransport()
        controller = ChatController(transport)

        task = asyncio.create_task(controller.submit("Hi"))
        await transport.started.wait()

        assert controller.cancel() is True
        with pytest.raises(asyncio.CancelledError):
            await task

        answer = controller.messages[-1]
        assert answer.content == "Partial"
        assert answer.is_streaming is False
        assert controller.is_loading is False

    @pytest.mark.asyncio
    async def test_cancel_without_turn(self):
        controller = ChatController(GatedTransport())
        assert controller.cancel() is False

    @pytest.mark.asyncio
    async def test_submission_rearms_scroll(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=stream_body('data: {"type":"chunk","content":"ok"}'))

        controller = streaming_controller(handler)
        controller.scroll.on_scroll(scroll_height=2000, scroll_top=0, client_height=500)
        assert controller.scroll.should_auto_scroll is False

        await controller.submit("Hi")
        assert controller.scroll.should_auto_scroll is True


class TestActionTransport:
    """Tests for the one-shot variant."""

    @pytest.mark.asyncio
    async def test_answer_arrives_in_one_chunk(self):
        async def action(question: str) -> ActionResult:
            return ActionResult(
                success=True,
                answer=f"Answer to {question}",
                suggested_pages=[PageSuggestion(title="Projects", href="/projects")]
            )

        controller = ChatController(ActionTransport(action))
        await controller.submit("projects?")

        answer = controller.messages[-1]
        assert answer.content == "Answer to projects?"
        assert [p.href for p in answer.suggested_pages] == ["/projects"]

    @pytest.mark.asyncio
    async def test_unsuccessful_result(self):
        async def action(question: str) -> ActionResult:
            return ActionResult(success=False, error="OPENAI_API_KEY is not set")

        controller = ChatController(ActionTransport(action))
        await controller.submit("Hi")

        assert controller.messages[-1].content == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_answer_uses_fallback(self):
        async def action(question: str) -> ActionResult:
            return ActionResult(success=True, answer="")

        controller = ChatController(ActionTransport(action))
        await controller.submit("Hi")

        assert controller.messages[-1].content == NO_RESPONSE_MESSAGE

    @pytest.mark.asyncio
    async def test_remote_action(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/rag"
            assert json.loads(request.content) == {"question": "Hi"}
            return httpx.Response(200, json={
                "success": True,
                "answer": "Hello!",
                "suggestedPages": [{"title": "About Me", "href": "/about"}],
            })

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
        controller = ChatController(ActionTransport(RemoteAction(BASE_URL, client=client)))
        await controller.submit("Hi")

        answer = controller.messages[-1]
        assert answer.content == "Hello!"
        assert answer.suggested_pages == [PageSuggestion(title="About Me", href="/about")]
