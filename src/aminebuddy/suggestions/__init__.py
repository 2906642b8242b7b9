"""Page suggestion module.

Maps a visitor's question to links into the portfolio site.

Hidden design decisions:
- Keyword table contents and iteration order
- Domain-specific override rules
- Result cap
"""

from .classifier import get_page, suggest_pages
from .models import PageSuggestion
from .table import MAX_SUGGESTIONS, PAGE_KEYWORDS, PAGE_SUGGESTIONS

__all__ = [
    "MAX_SUGGESTIONS",
    "PAGE_KEYWORDS",
    "PAGE_SUGGESTIONS",
    "PageSuggestion",
    "get_page",
    "suggest_pages",
]
