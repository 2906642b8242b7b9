"""Main Textual application.

Orchestrates the copilot widget: the launcher, the chat panel and the
ChatController that runs each turn.
"""

import asyncio
import logging

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.errors import NoWidget
from textual.widgets import Button, Footer, Header, Static

from ..chat import (
    QUICK_QUESTIONS,
    ChatController,
    ChatTransport,
    FocusRequest,
    ScrollPolicy,
    WidgetState,
)
from .config import CELL_WIDTH_PX, LAUNCHER_LABEL, SCROLL_THRESHOLD_ROWS
from .styles import APP_CSS
from .themes import PORTFOLIO_DARK
from .widgets import ChatInputBar, ChatLog, ChatPanel, PageLinks, QuickQuestions

log = logging.getLogger(__name__)


class CopilotApp(App):
    """Terminal rendition of the portfolio chat widget."""

    CSS = APP_CSS
    TITLE = "Amine Hachemi"
    SUB_TITLE = "Portfolio"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+b", "toggle_chat", "Chat"),
        Binding("escape", "close_chat", "Close"),
    ]

    def __init__(self, transport: ChatTransport, site_url: str) -> None:
        super().__init__()
        self._site_url = site_url.rstrip("/")
        self._state = WidgetState()
        self._layout_ready = False
        self._policy = ScrollPolicy(threshold=SCROLL_THRESHOLD_ROWS)
        self._controller = ChatController(
            transport,
            on_update=self._refresh_chat,
            scroll=self._policy
        )

    @property
    def controller(self) -> ChatController:
        return self._controller

    @property
    def state(self) -> WidgetState:
        return self._state

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            "Welcome to Amine's portfolio.\n\nPress Ctrl+B or the button below to chat.",
            id="backdrop"
        )
        yield ChatPanel(self._policy, QUICK_QUESTIONS, id="chat-panel")
        yield Button(f"💬 {LAUNCHER_LABEL}", id="launcher")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(PORTFOLIO_DARK)
        self.theme = "portfolio-dark"
        self._state.set_viewport_width(self.size.width * CELL_WIDTH_PX)
        self._layout_ready = True
        self._apply_layout()
        self._refresh_chat()

    def on_unmount(self) -> None:
        self._layout_ready = False
        self._controller.cancel()

    def on_resize(self, event: events.Resize) -> None:
        self._state.set_viewport_width(event.size.width * CELL_WIDTH_PX)
        if self._layout_ready:
            self._apply_layout()

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    def action_toggle_chat(self) -> None:
        if self._state.is_open:
            self._close_chat()
        else:
            self._schedule_focus(self._state.open())
            self._apply_layout()

    def action_close_chat(self) -> None:
        if self._state.is_open:
            self._close_chat()

    def _close_chat(self) -> None:
        self._state.close()
        self._controller.cancel()
        self._apply_layout()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "launcher":
            self.action_toggle_chat()

    def on_chat_panel_close_requested(self, event: ChatPanel.CloseRequested) -> None:
        self.action_close_chat()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        try:
            widget, _ = self.screen.get_widget_at(event.screen_x, event.screen_y)
        except NoWidget:
            widget = None

        panel = self.query_one("#chat-panel", ChatPanel)
        launcher = self.query_one("#launcher", Button)
        ancestors = widget.ancestors_with_self if widget is not None else []
        if self._state.pointer_down(panel in ancestors, launcher in ancestors):
            self._controller.cancel()
            self._apply_layout()

    def _apply_layout(self) -> None:
        panel = self.query_one("#chat-panel", ChatPanel)
        panel.set_class(self._state.is_open, "-open")
        panel.set_class(self._state.is_mobile, "-mobile")
        self.query_one("#launcher", Button).set_class(self._state.is_open, "-open")

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._ask(event.value)

    def on_quick_questions_selected(self, event: QuickQuestions.Selected) -> None:
        self._ask(event.question)

    def on_page_links_selected(self, event: PageLinks.Selected) -> None:
        url = f"{self._site_url}{event.href}"
        log.info("Opening %s", url)
        self.open_url(url)
        self._close_chat()

    def _ask(self, question: str) -> None:
        if self._controller.is_loading:
            return
        self._run_turn(question)

    # submit() rejects a second turn while one is in flight
    @work(group="chat")
    async def _run_turn(self, question: str) -> None:
        """Run one turn as a background async worker."""
        try:
            await self._controller.submit(question)
        except asyncio.CancelledError:
            self.notify("Answer cancelled", severity="warning", timeout=2)
            raise

    def _refresh_chat(self) -> None:
        if not self._layout_ready:
            return

        controller = self._controller
        self.query_one("#chat-log", ChatLog).sync(controller.messages)
        self.query_one("#quick-questions", QuickQuestions).display = controller.show_quick_questions
        self.query_one("#typing", Static).display = controller.show_typing_indicator
        self.query_one("#chat-input-bar", ChatInputBar).set_loading(controller.is_loading)
        self._schedule_focus(self._state.loading_changed(controller.is_loading))

    def _schedule_focus(self, request: FocusRequest | None) -> None:
        if request is None:
            return
        bar = self.query_one("#chat-input-bar", ChatInputBar)
        self.set_timer(request.delay, bar.focus_input)


async def run_copilot(transport: ChatTransport, site_url: str) -> None:
    """Run the copilot until the user quits.

    Args:
        transport: Source of answers (streaming or one-shot)
        site_url: Base URL prepended to suggested page paths
    """
    app = CopilotApp(transport, site_url)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await transport.close()
