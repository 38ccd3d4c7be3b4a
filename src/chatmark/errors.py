"""Exception classes for chatmark.

Rendering never raises on message content. These exceptions only report
misuse at construction time: invalid configuration or unknown message roles.
"""

from __future__ import annotations


class ChatmarkError(Exception):
    """Base exception for all chatmark errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(ChatmarkError):
    """Invalid render configuration value.

    Raised when a RenderConfig field would let generated markup escape the
    rendering surface's safety guarantees.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending RenderConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Invalid config '{field}': {message}")


class MessageError(ChatmarkError):
    """Invalid chat message construction (e.g. an unknown role)."""

    pass
