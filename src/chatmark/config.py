"""ContextVar-based render configuration for chatmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The Markdown transformer reads the active config for the cosmetic parts of
the markup it generates (link target, image style, code class prefix, hard
line breaks). The sanitizer allow-list is not part of it.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from chatmark.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(hard_breaks=False)):
        html = render_untrusted(reply)

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from chatmark.errors import ConfigError


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        link_target: Browsing context generated links open in
        link_rel: rel value of generated links; must include "noopener"
        image_style: Inline style of generated images ("" to omit)
        code_class_prefix: Prefix joined with a fence's language tag
        hard_breaks: Turn bare newlines between text into <br>

    """

    link_target: str = "_blank"
    link_rel: str = "noopener noreferrer"
    image_style: str = "max-width:100%;"
    code_class_prefix: str = "language-"
    hard_breaks: bool = True

    def __post_init__(self) -> None:
        if not self.link_target.strip():
            raise ConfigError("link_target", "must not be empty")
        if "noopener" not in self.link_rel.lower().split():
            raise ConfigError("link_rel", "must include 'noopener'")
        for name in ("link_target", "link_rel", "image_style", "code_class_prefix"):
            if '"' in getattr(self, name):
                raise ConfigError(name, "must not contain double quotes")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({"hard_breaks": False, "x": 1})
            >>> config.hard_breaks
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the module-level default configuration."""
    _render_config.set(DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(hard_breaks=False)):
        ...     get_render_config().hard_breaks
        False

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "DEFAULT_CONFIG",
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
