"""Text splitting for ingestion.

Two strategies:
- ``split_text``: fixed character window advancing by
  ``chunk_size - chunk_overlap``; whitespace-only windows are dropped.
- ``split_markdown``: one chunk per heading section (parsed with
  markdown-it-py), with oversized sections falling back to ``split_text``.
"""

from markdown_it import MarkdownIt


def _validate(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if chunk_overlap < 0 or chunk_overlap >= chunk_size:
        raise ValueError("chunk_overlap must be >= 0 and smaller than chunk_size")


def split_text(text: str, chunk_size: int = 1000, chunk_overlap: int = 200) -> list[str]:
    """Split text into overlapping character windows.

    Args:
        text: Text to split
        chunk_size: Maximum characters per chunk
        chunk_overlap: Characters shared by consecutive chunks

    Returns:
        Non-blank chunks in document order

    Raises:
        ValueError: If the overlap is not smaller than the chunk size
    """
    _validate(chunk_size, chunk_overlap)

    step = chunk_size - chunk_overlap
    chunks = []
    for start in range(0, len(text), step):
        chunk = text[start:start + chunk_size]
        if chunk.strip():
            chunks.append(chunk)
    return chunks


def _sections(text: str) -> list[str]:
    """Cut markdown into sections that each start at a heading."""
    lines = text.split("\n")
    starts = [
        token.map[0]
        for token in MarkdownIt().parse(text)
        if token.type == "heading_open" and token.map
    ]

    bounds = [0, *[s for s in starts if s > 0], len(lines)]
    return [
        "\n".join(lines[begin:end])
        for begin, end in zip(bounds, bounds[1:], strict=False)
    ]


def split_markdown(text: str, chunk_size: int = 1000, chunk_overlap: int = 200) -> list[str]:
    """Split markdown by heading, re-splitting sections larger than chunk_size.

    Args:
        text: Markdown text (without frontmatter)
        chunk_size: Maximum characters per chunk
        chunk_overlap: Overlap used when a section must be re-split

    Returns:
        Non-blank chunks in document order
    """
    _validate(chunk_size, chunk_overlap)

    chunks = []
    for section in _sections(text):
        if not section.strip():
            continue
        if len(section) <= chunk_size:
            chunks.append(section)
        else:
            chunks.extend(split_text(section, chunk_size, chunk_overlap))
    return chunks
