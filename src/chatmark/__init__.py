"""
chatmark — Safe rendering of chat messages

Converts the Markdown dialect chat replies are written in into markup, then
strips every tag, attribute and URL scheme not on a fixed allow-list. Plain
text from trusted origins is escaped instead.

Quick Start:
    >>> from chatmark import render_untrusted, render_trusted
    >>> render_untrusted("# Hello **World**")
    '<h1>Hello <strong>World</strong></h1>'
    >>> render_trusted("1 < 2")
    '1 &lt; 2'

Stages can also be used on their own:
    >>> from chatmark import sanitize, to_markup
    >>> sanitize('<a href="javascript:alert(1)">x</a>')
    '<a>x</a>'

Installation:
    pip install chatmark
"""

from chatmark.config import (
    DEFAULT_CONFIG,
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from chatmark.errors import ChatmarkError, ConfigError, MessageError
from chatmark.markdown import PASSES, to_markup
from chatmark.markup import parse_markup, serialize
from chatmark.messages import ChatMessage, Role, new_message, render_message, reply_text
from chatmark.nodes import Element, MarkupNode, ProtectedSpan, Text
from chatmark.pipeline import render, render_trusted, render_untrusted
from chatmark.policy import DEFAULT_ALLOW_LIST, AllowList
from chatmark.sanitize import sanitize
from chatmark.spans import SpanTable, protect, restore
from chatmark.utils.text import escape

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "render",
    "render_trusted",
    "render_untrusted",
    # Stages
    "escape",
    "protect",
    "restore",
    "to_markup",
    "sanitize",
    "parse_markup",
    "serialize",
    "PASSES",
    # Data
    "AllowList",
    "DEFAULT_ALLOW_LIST",
    "Element",
    "MarkupNode",
    "ProtectedSpan",
    "SpanTable",
    "Text",
    # Messages
    "ChatMessage",
    "Role",
    "new_message",
    "render_message",
    "reply_text",
    # Configuration
    "DEFAULT_CONFIG",
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    # Errors
    "ChatmarkError",
    "ConfigError",
    "MessageError",
    "__version__",
]
