"""Exception types shared across the package."""


class BuddyError(Exception):
    """Base class for errors raised by aminebuddy."""


class ConfigurationError(BuddyError):
    """Required settings or credentials are missing or invalid."""


class AgentError(BuddyError):
    """The portfolio agent failed to answer a question."""


class IngestionError(BuddyError):
    """Documents could not be inserted into the knowledge base."""


class ChatStreamError(BuddyError):
    """The answer stream carried an explicit error record."""
