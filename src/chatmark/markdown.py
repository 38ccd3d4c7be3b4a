"""Markdown to markup transformer.

Turns the constrained Markdown dialect chat replies use into HTML markup
text through a fixed, ordered sequence of text-rewrite passes:

1. protect code spans (``chatmark.spans``)
2. block passes: rules, headings, blockquotes, list items, list runs
3. inline passes: images, links, bold, italic, strikethrough
4. line breaks
5. restore code spans

The order is part of the contract. Images run before links because image
syntax is link syntax with a ``!`` prefix; bold runs before italic because
``**x**`` would otherwise parse as nested ``*``; fences are protected before
inline code. ``PASSES`` lists the rewrite passes in the order they run.

The transformer never fails. Unmatched syntax stays literal text. Emphasis
matching is non-greedy and never crosses a line, so ambiguous input such as
``*a **b* c**`` degrades instead of nesting correctly. Raw HTML in the input
is passed through for the sanitizer to deal with. Bare newlines inside a raw
``<pre>`` get no ``<br>``; trailing double spaces there still do.

Lists are a single flat level: indentation is ignored and every run of
consecutive items becomes one ``<ul>``.

Example:
    >>> to_markup("# Hi\\n**bold** and *italic*")
    '<h1>Hi</h1>\\n<strong>bold</strong> and <em>italic</em>'
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from chatmark.config import RenderConfig, get_render_config
from chatmark.spans import BLOCK_CLOSE, BLOCK_OPEN, SpanTable, protect, restore
from chatmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PassContext:
    """Per-call state shared by the rewrite passes."""

    spans: SpanTable
    config: RenderConfig


type RewritePass = Callable[[str, PassContext], str]


def _attr(value: str) -> str:
    return value.strip().replace('"', "&quot;")


# =============================================================================
# Block passes
# =============================================================================

_RULE = re.compile(r"^[ \t]*([-*_])\1{2,}[ \t]*$", re.MULTILINE)
# Greedy #{1,6}: the longest marker wins, and seven # is not a heading.
_HEADING = re.compile(r"^(#{1,6}) (.+)$", re.MULTILINE)
_QUOTE = re.compile(r"^> (.+)$", re.MULTILINE)
_BULLET_ITEM = re.compile(r"^[ \t]*[-*+] (.+)$", re.MULTILINE)
_ORDERED_ITEM = re.compile(r"^[ \t]*\d+\. (.+)$", re.MULTILINE)
_ITEM_RUN = re.compile(r"^<li>.*</li>(?:\n<li>.*</li>)*$", re.MULTILINE)


def _rules(text: str, ctx: PassContext) -> str:
    return _RULE.sub("<hr>", text)


def _headings(text: str, ctx: PassContext) -> str:
    def heading(match: re.Match[str]) -> str:
        level = len(match.group(1))
        return f"<h{level}>{match.group(2)}</h{level}>"

    return _HEADING.sub(heading, text)


def _quotes(text: str, ctx: PassContext) -> str:
    text = _QUOTE.sub(r"<blockquote>\1</blockquote>", text)
    return text.replace("</blockquote>\n<blockquote>", "\n")


def _list_items(text: str, ctx: PassContext) -> str:
    text = _BULLET_ITEM.sub(r"<li>\1</li>", text)
    return _ORDERED_ITEM.sub(r"<li>\1</li>", text)


def _lists(text: str, ctx: PassContext) -> str:
    return _ITEM_RUN.sub(lambda m: f"<ul>{m.group(0)}</ul>", text)


# =============================================================================
# Inline passes
# =============================================================================

_IMAGE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD = (
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"(?<!\w)__(.+?)__(?!\w)"),
)
_ITALIC = (
    re.compile(r"\*(.+?)\*"),
    re.compile(r"(?<!\w)_(.+?)_(?!\w)"),
)
_STRIKE = re.compile(r"~~(.+?)~~")


def _images(text: str, ctx: PassContext) -> str:
    style = ctx.config.image_style

    def image(match: re.Match[str]) -> str:
        tag = f'<img src="{_attr(match.group(2))}" alt="{_attr(match.group(1))}"'
        if style:
            tag += f' style="{style}"'
        # Sheltered so emphasis passes never touch the URL or alt text.
        return ctx.spans.add(tag + ">")

    return _IMAGE.sub(image, text)


def _links(text: str, ctx: PassContext) -> str:
    config = ctx.config

    def link(match: re.Match[str]) -> str:
        opening = ctx.spans.add(
            f'<a href="{_attr(match.group(2))}" target="{config.link_target}"'
            f' rel="{config.link_rel}">'
        )
        return f"{opening}{match.group(1)}</a>"

    return _LINK.sub(link, text)


def _bold(text: str, ctx: PassContext) -> str:
    for pattern in _BOLD:
        text = pattern.sub(r"<strong>\1</strong>", text)
    return text


def _italic(text: str, ctx: PassContext) -> str:
    for pattern in _ITALIC:
        text = pattern.sub(r"<em>\1</em>", text)
    return text


def _strikethrough(text: str, ctx: PassContext) -> str:
    return _STRIKE.sub(r"<del>\1</del>", text)


# =============================================================================
# Line breaks
# =============================================================================

_TRAILING_SPACES = re.compile(r" {2,}\n")

_BLOCK_TAGS = r"h[1-6]|blockquote|ul|ol|li|pre|p|div|table|thead|tbody|tr|td|th"
_ENDS_BLOCK = re.compile(
    rf"(?:</?(?:{_BLOCK_TAGS})>|<(?:hr|br)\s*/?>|{BLOCK_CLOSE})[ \t]*$",
    re.IGNORECASE,
)
_STARTS_BLOCK = re.compile(
    rf"[ \t]*(?:</?(?:{_BLOCK_TAGS}|hr|br)[\s/>]|{BLOCK_OPEN})",
    re.IGNORECASE,
)


_PRE_OPEN = re.compile(r"<pre[\s>]", re.IGNORECASE)
_PRE_CLOSE = re.compile(r"</pre\s*>", re.IGNORECASE)


def _line_breaks(text: str, ctx: PassContext) -> str:
    text = _TRAILING_SPACES.sub("<br>\n", text)
    if not ctx.config.hard_breaks:
        return text

    lines = text.split("\n")
    pre_depth = 0
    for i in range(len(lines) - 1):
        current, following = lines[i], lines[i + 1]
        pre_depth = max(
            0, pre_depth + len(_PRE_OPEN.findall(current)) - len(_PRE_CLOSE.findall(current))
        )
        # Newlines inside raw <pre> are already visible.
        if pre_depth:
            continue
        if not current.strip() or not following.strip():
            continue
        # Newlines next to block markup are layout, not visual breaks.
        if _ENDS_BLOCK.search(current) or _STARTS_BLOCK.match(following):
            continue
        lines[i] = current + "<br>"
    return "\n".join(lines)


PASSES: tuple[tuple[str, RewritePass], ...] = (
    ("rule", _rules),
    ("heading", _headings),
    ("blockquote", _quotes),
    ("list_item", _list_items),
    ("list", _lists),
    ("image", _images),
    ("link", _links),
    ("bold", _bold),
    ("italic", _italic),
    ("strikethrough", _strikethrough),
    ("line_break", _line_breaks),
)


def to_markup(markdown: str, *, config: RenderConfig | None = None) -> str:
    """Convert Markdown to markup text.

    Args:
        markdown: Untrusted Markdown source. Non-string input yields "".
        config: Render config (defaults to the active context config)

    Returns:
        Markup text. Not yet safe to display; run it through
        ``chatmark.sanitize.sanitize``.

    """
    if not isinstance(markdown, str) or not markdown:
        return ""

    config = config or get_render_config()
    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    text, spans = protect(text, config=config)

    ctx = PassContext(spans=spans, config=config)
    for _name, rewrite in PASSES:
        text = rewrite(text, ctx)

    logger.debug("Converted %d chars with %d protected spans", len(markdown), len(spans))
    return restore(text, spans)
