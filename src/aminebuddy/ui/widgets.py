"""Custom Textual widgets for the copilot.

Hides widget implementation details:
- Message rendering (markdown answers, streaming cursor)
- Page suggestion and quick question buttons
- Conversation scrolling
"""

from collections.abc import Sequence

from rich.markdown import Markdown as RichMarkdown
from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Static

from ..chat.models import Message as ConversationMessage
from ..chat.models import Role
from ..chat.scroll import ScrollPolicy
from ..suggestions import PageSuggestion
from .config import (
    INPUT_PLACEHOLDER,
    PANEL_SUBTITLE,
    PANEL_TITLE,
    STREAM_CURSOR,
    TIMESTAMP_FORMAT,
    TYPING_TEXT,
)


class PageLinks(Vertical):
    """Buttons linking to suggested portfolio pages."""

    class Selected(Message):
        """Sent when a page link is pressed."""

        def __init__(self, href: str) -> None:
            super().__init__()
            self.href = href

    def __init__(self, pages: Sequence[PageSuggestion], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._pages = list(pages)

    def compose(self):
        for page in self._pages:
            button = Button(f"→ {page.title}", name=page.href)
            if page.description:
                button = button.with_tooltip(page.description)
            yield button

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.name:
            self.post_message(self.Selected(event.button.name))


class MessageBubble(Vertical):
    """One conversation entry, updated in place while it streams."""

    def __init__(self, message: ConversationMessage, *args, **kwargs) -> None:
        role_class = "user-message" if message.role is Role.USER else "assistant-message"
        super().__init__(*args, classes=role_class, **kwargs)
        self._message = message
        self._header = Static(self._header_text(), classes="message-header")
        self._content = Static(self._body(), classes="message-content")
        self._has_links = False

    @property
    def message(self) -> ConversationMessage:
        return self._message

    def compose(self):
        yield self._header
        yield self._content

    def on_mount(self) -> None:
        # is_mounted is still False here; the turn may have finished before mounting
        self._mount_links()

    def refresh_message(self) -> None:
        """Re-render after the underlying message changed."""
        self._content.update(self._body())
        if self.is_mounted:
            self._mount_links()

    def _header_text(self) -> str:
        name = "You" if self._message.role is Role.USER else PANEL_TITLE
        return f"{name} · {self._message.timestamp.strftime(TIMESTAMP_FORMAT)}"

    def _body(self):
        if self._message.role is Role.USER:
            return Text(self._message.content)
        content = self._message.content
        if self._message.is_streaming:
            content += STREAM_CURSOR
        return RichMarkdown(content)

    def _mount_links(self) -> None:
        if self._has_links or not self._message.suggested_pages:
            return
        self._has_links = True
        self.mount(PageLinks(self._message.suggested_pages))


class ChatLog(VerticalScroll):
    """Scrollable conversation that follows new content only near the bottom."""

    ALLOW_SELECT = True

    def __init__(self, policy: ScrollPolicy, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._policy = policy
        self._bubbles: dict[str, MessageBubble] = {}

    def sync(self, messages: Sequence[ConversationMessage]) -> None:
        """Mount new messages and refresh existing ones."""
        for message in messages:
            bubble = self._bubbles.get(message.id)
            if bubble is None:
                bubble = MessageBubble(message)
                self._bubbles[message.id] = bubble
                self.mount(bubble)
            else:
                bubble.refresh_message()

        if self._policy.should_auto_scroll:
            self.call_after_refresh(self.scroll_end, animate=False)

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        super().watch_scroll_y(old_value, new_value)
        self._policy.on_scroll(
            self.virtual_size.height,
            new_value,
            self.scrollable_content_region.height
        )


class QuickQuestions(Vertical):
    """Canned questions shown before the first turn."""

    class Selected(Message):
        """Sent when a quick question is pressed."""

        def __init__(self, question: str) -> None:
            super().__init__()
            self.question = question

    def __init__(self, questions: Sequence[str], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._questions = list(questions)

    def compose(self):
        for question in self._questions:
            yield Button(question, name=question)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.name:
            self.post_message(self.Selected(event.button.name))


class ChatInputBar(Horizontal):
    """Question input with a Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Input(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send question (Enter)"
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self._submit()

    def _submit(self) -> None:
        field = self.query_one("#chat-input", Input)
        value = field.value.strip()
        if value and not field.disabled:
            field.value = ""
            self.post_message(self.Submitted(value))

    def set_loading(self, loading: bool) -> None:
        """Disable input while a turn is in flight."""
        self.query_one("#chat-input", Input).disabled = loading
        self.query_one("#send-btn", Button).disabled = loading

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()


class ChatPanel(Vertical):
    """The copilot window: header, conversation, quick questions and input."""

    BORDER_TITLE = PANEL_TITLE
    BORDER_SUBTITLE = PANEL_SUBTITLE

    class CloseRequested(Message):
        """Sent when the close button is pressed."""

    def __init__(self, policy: ScrollPolicy, questions: Sequence[str], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._policy = policy
        self._questions = questions

    def compose(self):
        with Horizontal(id="panel-header"):
            yield Static(f"✨ {PANEL_TITLE}", id="panel-title")
            yield Button("✕", id="close-btn")
        yield ChatLog(self._policy, id="chat-log")
        yield QuickQuestions(self._questions, id="quick-questions")
        yield Static(TYPING_TEXT, id="typing")
        yield ChatInputBar(id="chat-input-bar")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-btn":
            event.stop()
            self.post_message(self.CloseRequested())
