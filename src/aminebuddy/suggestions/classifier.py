from .models import PageSuggestion
from .table import FORCED_INCLUSIONS, MAX_SUGGESTIONS, PAGE_KEYWORDS, PAGE_SUGGESTIONS


def suggest_pages(query: str) -> list[PageSuggestion]:
    """Suggest up to three portfolio pages relevant to a visitor's question.

    Pages are matched by keyword substring against the lower-cased query,
    in the declaration order of the keyword table, followed by the forced
    inclusion rules. Each page appears at most once.

    Args:
        query: Free-text question

    Returns:
        Ordered suggestions, possibly empty
    """
    text = query.lower()
    if not text:
        return []

    matched: list[str] = []

    for href, keywords in PAGE_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            matched.append(href)

    for terms, href in FORCED_INCLUSIONS:
        if href not in matched and any(term in text for term in terms):
            matched.append(href)

    return [PAGE_SUGGESTIONS[href] for href in matched[:MAX_SUGGESTIONS]]


def get_page(href: str) -> PageSuggestion | None:
    """Look up a page in the suggestion table by its path."""
    return PAGE_SUGGESTIONS.get(href)
