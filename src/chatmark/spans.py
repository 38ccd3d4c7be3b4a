"""Protected spans for the Markdown transformer.

Code is lifted out of the working text before any rewrite pass runs and put
back verbatim at the very end, so Markdown syntax inside code is never
interpreted.

The side table is an ordered arena: each span is stored once and referenced
by an opaque token embedded in the working text. A token is a private-use
sentinel, a marker word, the span's index and a closing sentinel, e.g.
``"\\ue000CODEBLOCK0\\ue001"``. Sentinels are stripped from author input
first, so no input can forge a token and no Markdown pass can produce one.

Block spans (fenced code) and inline spans (inline code, and the generated
tags the transformer shelters) use different sentinel pairs so line-break
handling can tell block content from inline content.

Example:
    >>> text, spans = protect("Run `ls -l` now")
    >>> restore(text, spans)
    'Run <code>ls -l</code> now'
"""

import re
from collections.abc import Iterator

from chatmark.config import RenderConfig, get_render_config
from chatmark.nodes import ProtectedSpan
from chatmark.utils.text import escape

BLOCK_OPEN = "\ue000"
BLOCK_CLOSE = "\ue001"
INLINE_OPEN = "\ue002"
INLINE_CLOSE = "\ue003"

_SENTINELS = re.compile("[\ue000-\ue003]")

# ```lang\n ... ```  (language tag only when it ends the opening line)
_FENCED_CODE = re.compile(r"```(?:([\w#+.-]+)?[ \t]*\n)?(.*?)```", re.DOTALL)

_INLINE_CODE = re.compile(r"`([^`]+)`")


class SpanTable:
    """Ordered side table of protected spans.

    Tokens are numbered from one shared counter in insertion order, so every
    token in a table is unique.

    """

    __slots__ = ("_spans",)

    def __init__(self) -> None:
        self._spans: list[ProtectedSpan] = []

    def add(self, rendered: str, *, block: bool = False) -> str:
        """Store ``rendered`` and return the token that stands in for it."""
        index = len(self._spans)
        if block:
            token = f"{BLOCK_OPEN}CODEBLOCK{index}{BLOCK_CLOSE}"
        else:
            token = f"{INLINE_OPEN}SPAN{index}{INLINE_CLOSE}"
        self._spans.append(ProtectedSpan(token=token, rendered=rendered))
        return token

    def __iter__(self) -> Iterator[ProtectedSpan]:
        return iter(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def __getitem__(self, index: int) -> ProtectedSpan:
        return self._spans[index]

    def __repr__(self) -> str:
        return f"SpanTable({len(self._spans)} spans)"


def protect(markdown: str, *, config: RenderConfig | None = None) -> tuple[str, SpanTable]:
    """Replace fenced and inline code with span tokens.

    Fenced blocks are protected before inline code so backticks inside a
    fence never pair up as inline delimiters.

    Args:
        markdown: Raw Markdown source
        config: Render config (defaults to the active context config)

    Returns:
        Tuple of (text with placeholders, span table)

    """
    spans = SpanTable()
    if not isinstance(markdown, str) or not markdown:
        return "", spans

    config = config or get_render_config()
    text = _SENTINELS.sub("", markdown)

    def fenced(match: re.Match[str]) -> str:
        lang = match.group(1)
        code = escape(match.group(2).strip())
        css = ""
        if lang:
            css = f' class="{escape(config.code_class_prefix + lang, quote=True)}"'
        return spans.add(f"<pre><code{css}>{code}</code></pre>", block=True)

    def inline(match: re.Match[str]) -> str:
        return spans.add(f"<code>{escape(match.group(1))}</code>")

    text = _FENCED_CODE.sub(fenced, text)
    text = _INLINE_CODE.sub(inline, text)
    return text, spans


def restore(markup: str, spans: SpanTable) -> str:
    """Substitute every span token with its rendered markup.

    Later spans may carry earlier tokens (a sheltered link tag whose URL held
    inline code), so the table is walked newest first.

    """
    for span in reversed(spans):
        markup = markup.replace(span.token, span.rendered)
    return markup
