"""Open/close and focus transitions of the chat widget.

Hidden design decisions:
- Transitions are plain method calls fed by whatever event system hosts the
  widget; nothing here knows about listeners or timers.
- A transition that should move focus to the input returns a FocusRequest;
  the host schedules it after ``delay`` seconds.
- Clicking outside only closes the widget on wide viewports; on mobile the
  panel covers the screen and closes through its own button.
"""

from dataclasses import dataclass

MOBILE_BREAKPOINT = 768
OPEN_FOCUS_DELAY = 0.3
COMPLETE_FOCUS_DELAY = 0.1


@dataclass(frozen=True)
class FocusRequest:
    delay: float


class WidgetState:
    """Framework-independent state of the copilot widget."""

    def __init__(self, viewport_width: int | None = None):
        self.is_open = False
        self.is_mobile = False
        self._was_loading = False
        if viewport_width is not None:
            self.set_viewport_width(viewport_width)

    def open(self) -> FocusRequest | None:
        if self.is_open:
            return None
        self.is_open = True
        return FocusRequest(OPEN_FOCUS_DELAY)

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> FocusRequest | None:
        if self.is_open:
            self.close()
            return None
        return self.open()

    def pointer_down(self, inside_widget: bool, inside_launcher: bool = False) -> bool:
        """Handle a pointer press anywhere on screen.

        Args:
            inside_widget: Press landed on the chat panel
            inside_launcher: Press landed on the launcher button, which
                toggles the panel itself

        Returns:
            True if the press closed the widget
        """
        if not self.is_open or self.is_mobile:
            return False
        if inside_widget or inside_launcher:
            return False
        self.close()
        return True

    def loading_changed(self, is_loading: bool) -> FocusRequest | None:
        """Track the in-flight flag; refocus the input when a turn completes."""
        finished = self._was_loading and not is_loading
        self._was_loading = is_loading
        if finished and self.is_open:
            return FocusRequest(COMPLETE_FOCUS_DELAY)
        return None

    def set_viewport_width(self, width: int) -> None:
        self.is_mobile = width < MOBILE_BREAKPOINT
