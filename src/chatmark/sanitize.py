"""Allow-list markup sanitizer.

Parses markup into a node tree, filters it against ``DEFAULT_ALLOW_LIST``
and serializes the result. Output contains only allow-listed tags and
attributes and is safe to insert into a rendering surface as-is.

Policy:
- An element whose tag is not allowed is replaced by one Text node holding
  the text of the element and all its descendants. Content is neutralized,
  not dropped.
- On allowed elements, event-handler attributes, script URLs and non-image
  data URLs in href/src, and attributes missing from the allow-list are
  removed.

``sanitize`` is idempotent and never raises.

Example:
    >>> sanitize('<b onclick="x()">hi</b><script>alert(1)</script>')
    '<b>hi</b>alert(1)'
"""

from chatmark.markup import parse_markup, serialize
from chatmark.nodes import Element, MarkupNode, Text
from chatmark.policy import DEFAULT_ALLOW_LIST, AllowList
from chatmark.utils.logger import get_logger
from chatmark.visitor import text_content

logger = get_logger(__name__)


def clean_node(node: MarkupNode, allow_list: AllowList = DEFAULT_ALLOW_LIST) -> MarkupNode:
    """Filter one node and its subtree against the allow-list."""
    if isinstance(node, Text):
        return node

    if not allow_list.allows_tag(node.tag):
        logger.debug("Flattened disallowed <%s> to text", node.tag)
        return Text(text_content(node))

    kept = []
    for name, value in node.attributes:
        if allow_list.keeps_attribute(node.tag, name, value):
            kept.append((name, value))
        else:
            logger.debug("Removed attribute %r from <%s>", name, node.tag)

    return Element(
        tag=node.tag,
        attributes=tuple(kept),
        children=tuple(clean_node(child, allow_list) for child in node.children),
    )


def sanitize(markup: str) -> str:
    """Strip everything not explicitly allowed from markup text.

    Args:
        markup: Untrusted markup text. Non-string input yields "".

    Returns:
        Safe markup text.

    """
    if not isinstance(markup, str) or not markup:
        return ""

    nodes = parse_markup(markup)
    return serialize(clean_node(node) for node in nodes)
