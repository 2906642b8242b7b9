"""UI configuration constants.

Centralizes magic numbers of the terminal widget. Terminal geometry is in
cells, while the open/close and scroll policies think in pixels; the
conversions live here.
"""

# Approximate pixel width of one terminal column, for the mobile breakpoint
CELL_WIDTH_PX = 8

# Stick-to-bottom threshold in rows (about 100px of a browser viewport)
SCROLL_THRESHOLD_ROWS = 5

# Streaming cursor appended to an answer while it is being written
STREAM_CURSOR = "▍"

TYPING_TEXT = "Amine Buddy is typing..."

PANEL_TITLE = "Amine Buddy"
PANEL_SUBTITLE = "Ask me about Amine"
LAUNCHER_LABEL = "Ask Amine Buddy"
INPUT_PLACEHOLDER = "Ask about Amine's skills, experience, projects..."

TIMESTAMP_FORMAT = "%H:%M"
