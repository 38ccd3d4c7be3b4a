"""Content pipeline: the single entry point chat surfaces call.

Untrusted reply content goes through Markdown conversion and sanitization;
trusted-origin plain text is only escaped. Both are pure functions of their
input and the active render config.

Example:
    >>> render_untrusted("**hi** <script>x</script>")
    '<strong>hi</strong> x'
    >>> render_trusted("<b>typed by the user</b>")
    '&lt;b&gt;typed by the user&lt;/b&gt;'
"""

from chatmark.markdown import to_markup
from chatmark.sanitize import sanitize
from chatmark.utils.text import escape


def render_untrusted(text: str) -> str:
    """Render untrusted Markdown to safe markup."""
    return sanitize(to_markup(text))


def render_trusted(text: str) -> str:
    """Render plain text as escaped markup."""
    return escape(text)


def render(text: str, *, trusted: bool = False) -> str:
    """Render text through the pipeline matching its origin."""
    if trusted:
        return render_trusted(text)
    return render_untrusted(text)
