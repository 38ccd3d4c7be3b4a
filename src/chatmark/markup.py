"""Markup parsing and serialization.

Parses markup text into chatmark nodes with BeautifulSoup and the standard
library ``html.parser`` builder, which tolerates malformed input: unclosed
tags are closed at the end of input and stray end tags are ignored.

Only elements and character data survive parsing. Comments, doctypes,
declarations, processing instructions and CDATA sections are dropped.
Script and style bodies are kept as ordinary text.

Text is kept as written. Whitespace-only runs are not collapsed, and an
``&`` that does not start a complete character reference (``&amp;``,
``&#38;``, ``&#x26;``) stays a literal ampersand, so query strings such as
``?a=1&copy=2`` survive in text and in attribute values.

Example:
    >>> nodes = parse_markup('<p class="x">1 &lt; 2<br></p>')
    >>> nodes[0]
    Element(tag='p', attributes=(('class', 'x'),), children=(Text(content='1 < 2'), Element(tag='br', attributes=(), children=())))
    >>> serialize(nodes)
    '<p class="x">1 &lt; 2<br></p>'
"""

import re
from collections.abc import Iterable
from html.entities import html5

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag

from chatmark.nodes import Element, MarkupNode, Text
from chatmark.utils.logger import get_logger
from chatmark.utils.text import escape, escape_attribute

logger = get_logger(__name__)

# Elements nested deeper than this are collapsed into their text.
MAX_DEPTH = 100

VOID_ELEMENTS = frozenset(
    (
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    )
)


# The parse root is a whitespace-preserving container, so every descendant is.
_PRESERVE_WHITESPACE = frozenset((BeautifulSoup.ROOT_TAG_NAME, "pre", "textarea"))

# Script and style bodies are raw text: the parser never decodes them.
_AMPERSAND = re.compile(
    r"(?P<raw><(script|style)\b[^>]*>.*?(?:</\2\s*>|\Z))"
    r"|&(?P<ref>#[0-9]+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)?",
    re.IGNORECASE | re.DOTALL,
)


def _escape_bare_ampersands(text: str) -> str:
    """Encode every ``&`` that does not open a complete, known reference."""

    def ampersand(match: re.Match[str]) -> str:
        if match.group("raw"):
            return match.group(0)
        reference = match.group("ref")
        if reference and (reference.startswith("#") or reference in html5):
            return match.group(0)
        return "&amp;"

    return _AMPERSAND.sub(ampersand, text)


def _strings(tag: Tag) -> str:
    return "".join(
        str(descendant)
        for descendant in tag.descendants
        if isinstance(descendant, NavigableString)
        and not isinstance(descendant, PreformattedString)
    )


def _convert(parent: Tag, depth: int) -> tuple[MarkupNode, ...]:
    nodes: list[MarkupNode] = []
    for child in parent.children:
        if isinstance(child, Tag):
            if depth >= MAX_DEPTH:
                nodes.append(Text(_strings(child)))
                continue
            nodes.append(
                Element(
                    tag=child.name.lower(),
                    attributes=tuple(
                        (name.lower(), value) for name, value in child.attrs.items()
                    ),
                    children=_convert(child, depth + 1),
                )
            )
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            nodes.append(Text(str(child)))
    return _merge_text(nodes)


def _merge_text(nodes: list[MarkupNode]) -> tuple[MarkupNode, ...]:
    """Join adjacent Text nodes so equal markup yields equal trees."""
    merged: list[MarkupNode] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].content + node.content)
        elif not (isinstance(node, Text) and not node.content):
            merged.append(node)
    return tuple(merged)


def parse_markup(text: str) -> tuple[MarkupNode, ...]:
    """Parse markup text into a tuple of top-level nodes.

    Never raises. If the parser rejects the input outright, the whole input
    comes back as a single Text node.

    """
    if not isinstance(text, str) or not text:
        return ()

    try:
        soup = BeautifulSoup(
            _escape_bare_ampersands(text),
            "html.parser",
            multi_valued_attributes=None,
            preserve_whitespace_tags=_PRESERVE_WHITESPACE,
        )
    except ParserRejectedMarkup:
        logger.warning("Markup parser rejected %d chars; treating as text", len(text))
        return (Text(text),)
    return _convert(soup, 0)


def _serialize_node(node: MarkupNode, parts: list[str]) -> None:
    if isinstance(node, Text):
        parts.append(escape(node.content))
        return

    parts.append(f"<{node.tag}")
    for name, value in node.attributes:
        parts.append(f' {name}="{escape_attribute(value)}"')
    parts.append(">")
    if node.tag in VOID_ELEMENTS:
        return
    for child in node.children:
        _serialize_node(child, parts)
    parts.append(f"</{node.tag}>")


def serialize(nodes: MarkupNode | Iterable[MarkupNode]) -> str:
    """Serialize nodes back to markup text.

    Text is escaped, attribute values are quoted and escaped, and void
    elements are written without an end tag.

    """
    if isinstance(nodes, (Element, Text)):
        nodes = (nodes,)
    parts: list[str] = []
    for node in nodes:
        _serialize_node(node, parts)
    return "".join(parts)
