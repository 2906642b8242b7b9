"""Stick-to-bottom auto-scroll policy."""

from dataclasses import dataclass

DEFAULT_THRESHOLD = 100


def is_near_bottom(
    scroll_height: float,
    scroll_top: float,
    client_height: float,
    threshold: float = DEFAULT_THRESHOLD
) -> bool:
    """Whether the viewport bottom is within ``threshold`` of the content end."""
    return scroll_height - scroll_top - client_height < threshold


@dataclass
class ScrollPolicy:
    """Follows new content only while the viewer is already at the bottom.

    A new submission re-arms the policy, so the view always jumps to the
    newest turn even after the viewer scrolled up to read history.
    """

    threshold: float = DEFAULT_THRESHOLD
    near_bottom: bool = True

    def on_scroll(self, scroll_height: float, scroll_top: float, client_height: float) -> bool:
        """Record the viewer position after a scroll; returns the new state."""
        self.near_bottom = is_near_bottom(scroll_height, scroll_top, client_height, self.threshold)
        return self.near_bottom

    def arm(self) -> None:
        self.near_bottom = True

    @property
    def should_auto_scroll(self) -> bool:
        return self.near_bottom
