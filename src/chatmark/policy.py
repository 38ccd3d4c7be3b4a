"""Allow-list policy for the markup sanitizer.

The policy is plain immutable data plus pure predicates, so it can be tested
without parsing any markup. Anything absent from the allow-list is rejected.

Example:
    >>> DEFAULT_ALLOW_LIST.allows_tag("script")
    False
    >>> DEFAULT_ALLOW_LIST.allows_attribute("a", "href")
    True
    >>> is_script_url(" JaVaScRiPt:alert(1)")
    True
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

EVENT_HANDLER_PREFIX = "on"

# URL attributes whose value can be navigated to or fetched.
URL_ATTRIBUTES = frozenset(("href", "src"))

_SCRIPT_SCHEMES = ("javascript:", "vbscript:")

# Browsers ignore ASCII whitespace and control characters inside a scheme,
# so "java\tscript:" still runs.
_SCHEME_NOISE = re.compile(r"[\x00-\x20\x7f]+")


def _normalize_url(value: str) -> str:
    return _SCHEME_NOISE.sub("", value).lower()


def is_event_handler(name: str) -> bool:
    """Check if an attribute name is an inline event handler (onclick, ...)."""
    return name.lower().startswith(EVENT_HANDLER_PREFIX)


def is_script_url(value: str) -> bool:
    """Check if a URL uses a script-executing scheme."""
    return _normalize_url(value).startswith(_SCRIPT_SCHEMES)


def is_unsafe_data_url(value: str) -> bool:
    """Check if a URL is a data: URI carrying anything but an image."""
    url = _normalize_url(value)
    return url.startswith("data:") and not url.startswith("data:image/")


def _freeze(attributes: Mapping[str, Iterable[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({tag: frozenset(names) for tag, names in attributes.items()})


@dataclass(frozen=True, slots=True)
class AllowList:
    """Tags and attributes the sanitizer keeps.

    Attributes:
        tags: Allowed tag names
        attributes: Allowed attribute names per tag
        wildcard: Attribute names allowed on every allowed tag

    """

    tags: frozenset[str]
    attributes: Mapping[str, frozenset[str]] = field(default_factory=dict)
    wildcard: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "attributes", _freeze(self.attributes))
        object.__setattr__(self, "wildcard", frozenset(self.wildcard))

    def allows_tag(self, tag: str) -> bool:
        return tag.lower() in self.tags

    def allows_attribute(self, tag: str, name: str) -> bool:
        name = name.lower()
        if name in self.wildcard:
            return True
        return name in self.attributes.get(tag.lower(), frozenset())

    def keeps_attribute(self, tag: str, name: str, value: str) -> bool:
        """Decide whether an attribute survives sanitization.

        Rejected, in order: event handlers, script URLs and non-image data
        URLs in href/src, and names missing from the allow-list.

        """
        name = name.lower()
        if is_event_handler(name):
            return False
        if name in URL_ATTRIBUTES and (is_script_url(value) or is_unsafe_data_url(value)):
            return False
        return self.allows_attribute(tag, name)


DEFAULT_ALLOW_LIST = AllowList(
    tags=frozenset(
        (
            # Text formatting
            "b", "i", "u", "strong", "em", "del", "br", "p", "div", "span",
            # Lists
            "ul", "ol", "li",
            # Links
            "a",
            # Headers
            "h1", "h2", "h3", "h4", "h5", "h6",
            # Tables
            "table", "thead", "tbody", "tr", "td", "th",
            # Quotes, code, rules, images
            "blockquote", "code", "pre", "hr", "img",
        )
    ),
    attributes={
        "a": ("href", "target", "rel"),
        "img": ("src", "alt", "style", "width", "height"),
        "code": ("class",),
        "pre": ("class",),
    },
    wildcard=frozenset(("class", "style")),
)
