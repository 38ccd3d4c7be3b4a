"""Tree walking helpers for chatmark markup nodes.

Provides an iterative pre-order walk and text flattening. Both use an
explicit stack, so arbitrarily deep trees never hit the recursion limit.

Example, collecting every link target:

    hrefs = [
        node.get("href")
        for node in walk(nodes)
        if isinstance(node, Element) and node.tag == "a"
    ]

Thread Safety:
    Pure functions over immutable nodes. Safe to call from any thread.

"""

from collections.abc import Iterable, Iterator

from chatmark.nodes import Element, MarkupNode, Text


def walk(nodes: MarkupNode | Iterable[MarkupNode]) -> Iterator[MarkupNode]:
    """Yield every node in document order (pre-order, depth-first)."""
    if isinstance(nodes, (Element, Text)):
        stack: list[MarkupNode] = [nodes]
    else:
        stack = list(nodes)
        stack.reverse()

    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Element):
            stack.extend(reversed(node.children))


def text_content(nodes: MarkupNode | Iterable[MarkupNode]) -> str:
    """Concatenate the text of a node and all of its descendants.

    Tags are discarded; text is kept in document order.

    """
    return "".join(node.content for node in walk(nodes) if isinstance(node, Text))
