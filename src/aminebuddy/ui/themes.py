"""Theme definitions for the copilot widget.

This module hides the color palette. To add a theme, define it here and
register it in the app.
"""

from textual.theme import Theme

# Dark portfolio palette, violet accent as on the website
PORTFOLIO_DARK = Theme(
    name="portfolio-dark",
    primary="#8b5cf6",      # Violet - launcher and assistant accent
    secondary="#6366f1",    # Indigo
    accent="#22d3ee",       # Cyan - page links
    foreground="#e5e7eb",
    background="#0b0f19",
    success="#34d399",      # Green - user messages
    warning="#fbbf24",
    error="#f87171",
    surface="#111827",
    panel="#0f1629",
    dark=True,
    variables={
        "border": "#374151",
        "border-blurred": "#1f2937",
        "scrollbar": "#1f2937",
        "scrollbar-hover": "#374151",
        "scrollbar-active": "#8b5cf6",
        "scrollbar-background": "#0f1629",
        "footer-key-foreground": "#22d3ee",
        "text-muted": "#9ca3af",
        "link-color": "#22d3ee",
        "link-style": "underline",
    },
)
