"""Text escaping utilities for chatmark.

Provides the canonical escaper used for plain-text messages, code spans and
serialized markup.

Example:
    >>> from chatmark.utils.text import escape
    >>> escape("<b>Tom & Jerry</b>")
    '&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;'
"""

from __future__ import annotations

import html as html_module


def escape(text: str, *, quote: bool = False) -> str:
    """Escape markup-significant characters.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot; (only when ``quote`` is True)

    Escaping text that was already escaped encodes it twice. Call it once,
    on raw text.

    Args:
        text: Text to escape. Anything that is not a string yields "".
        quote: Also escape double quotes for attribute contexts.

    Returns:
        Escaped text safe to place between tags.

    Examples:
        >>> escape("a < b && c")
        'a &lt; b &amp;&amp; c'
        >>> escape('say "hi"', quote=True)
        'say &quot;hi&quot;'
        >>> escape(None)
        ''
    """
    if not isinstance(text, str) or not text:
        return ""

    escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        escaped = escaped.replace('"', "&quot;")
    return escaped


def escape_attribute(value: str) -> str:
    """Escape text for use inside a quoted attribute value.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Examples:
        >>> escape_attribute("x' onmouseover='y")
        'x&#x27; onmouseover=&#x27;y'
    """
    if not value:
        return ""

    return html_module.escape(value, quote=True)
