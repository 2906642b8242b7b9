import logging

from rich.console import Console
from rich.logging import RichHandler

_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "asyncpg", "uvicorn.access")


def configure_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Route the root logger through a rich handler.

    Safe to call more than once; previous handlers on the root logger are
    replaced.

    Args:
        level: Log level name for the ``aminebuddy`` loggers
        console: Console to write to (stderr by default)
    """
    resolved = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    root.addHandler(handler)
    root.setLevel(resolved)

    logging.captureWarnings(True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
    logging.getLogger("aminebuddy").setLevel(resolved)


def configure_tui_logging(level: str = "INFO") -> None:
    """Route logging to the Textual devtools console.

    A terminal app owns the screen, so records must not reach stderr while
    it runs.
    """
    from textual.logging import TextualHandler

    resolved = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(TextualHandler())
    root.setLevel(resolved)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
    logging.getLogger("aminebuddy").setLevel(resolved)
