"""Markup tree nodes for chatmark.

All nodes are frozen dataclasses with slots, so a parsed or sanitized tree
can be shared freely and compared by value.

Node Hierarchy:
MarkupNode
├── Element  (tag, ordered attributes, children)
└── Text     (decoded character data)

Text content is stored decoded (``<`` not ``&lt;``); the serializer in
``chatmark.markup`` escapes it on the way out.

"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Text:
    """Character data between tags."""

    content: str


@dataclass(frozen=True, slots=True)
class Element:
    """A tag with its attributes and children.

    Attributes are an ordered tuple of ``(name, value)`` pairs. Names are
    lower-case, as produced by the parser.

    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple["MarkupNode", ...] = ()

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value of attribute ``name``, or ``default``."""
        for key, value in self.attributes:
            if key == name:
                return value
        return default

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.attributes)


type MarkupNode = Element | Text


@dataclass(frozen=True, slots=True)
class ProtectedSpan:
    """A literal region lifted out of Markdown before rewriting.

    ``token`` stands in for the region in the working text; ``rendered`` is
    the markup spliced back in its place once every pass has run.

    """

    token: str
    rendered: str
