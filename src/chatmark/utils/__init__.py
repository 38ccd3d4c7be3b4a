"""Utility modules for chatmark.

Provides:
- text: escape, escape_attribute for markup-safe text
- logger: get_logger for logging
"""

from chatmark.utils.logger import get_logger
from chatmark.utils.text import escape, escape_attribute

__all__ = [
    "escape",
    "escape_attribute",
    "get_logger",
]
