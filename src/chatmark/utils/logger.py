"""Logger factory for chatmark.

Every chatmark module logs under the ``chatmark`` namespace, so one
``logging.getLogger("chatmark")`` call controls the whole library:

- ``chatmark.sanitize`` reports removed attributes and flattened tags at DEBUG
- ``chatmark.markdown`` reports protected span counts at DEBUG
- ``chatmark.markup`` warns when the parser rejects a message outright

No handlers are installed here; the embedding chat surface decides where
records go.

Example:
    >>> import logging
    >>> logging.getLogger("chatmark").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_NAMESPACE = "chatmark"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the chatmark namespace.

    Names already under ``chatmark`` are used as given; anything else is
    nested beneath it.

    Example:
        >>> get_logger("mymodule").name
        'chatmark.mymodule'
    """
    if not (name == _NAMESPACE or name.startswith(f"{_NAMESPACE}.")):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
