"""Chat message helpers around the content pipeline.

The chat surface owns its message list and transport. These helpers cover
the pure parts it needs: building messages, picking the render path for a
message, and turning a decoded chat-endpoint reply into display text.

Example:
    >>> msg = new_message("assistant", "**Welcome!**")
    >>> render_message(msg)
    '<strong>Welcome!</strong>'
"""

import json
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from chatmark.errors import MessageError
from chatmark.pipeline import render_trusted, render_untrusted

EMPTY_REPLY_TEXT = "(empty reply)"
RETRY_TEXT = "The network is unstable, please try again."


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """One entry of a conversation.

    Attributes:
        id: Opaque message identifier
        role: Who wrote the message
        text: Raw message text
        timestamp: Creation time in epoch milliseconds
        is_markup: Render through Markdown + sanitizer instead of escaping

    """

    id: str
    role: Role
    text: str
    timestamp: int
    is_markup: bool = False


def new_message(role: Role | str, text: str, *, is_markup: bool | None = None) -> ChatMessage:
    """Create a message with a fresh id and the current timestamp.

    Assistant replies are rendered as markup by default; user input is not.

    Raises:
        MessageError: If ``role`` is not a known role.

    """
    try:
        role = Role(role)
    except ValueError:
        raise MessageError(f"Unknown message role: {role!r}") from None

    if is_markup is None:
        is_markup = role is Role.ASSISTANT
    return ChatMessage(
        id=uuid.uuid4().hex,
        role=role,
        text=text,
        timestamp=time.time_ns() // 1_000_000,
        is_markup=is_markup,
    )


def render_message(message: ChatMessage) -> str:
    """Render a message's text as safe markup."""
    if message.is_markup:
        return render_untrusted(message.text)
    return render_trusted(message.text)


def reply_text(payload: Any) -> str:
    """Turn a decoded chat-endpoint reply into the text to display.

    - a string is used as-is (stripped), or EMPTY_REPLY_TEXT when blank
    - a mapping with a truthy ``text`` or ``message`` uses that field
    - an empty mapping means the upstream gave up: RETRY_TEXT
    - anything else is shown as indented JSON

    """
    if isinstance(payload, str):
        return payload.strip() or EMPTY_REPLY_TEXT

    if isinstance(payload, Mapping):
        value = payload.get("text") or payload.get("message")
        if value:
            return str(value)
        if not payload:
            return RETRY_TEXT

    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)
