"""ContextVar-based render configuration for marktree.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An HtmlGenerator captures the active config when it is created, unless it
is given one explicitly.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    generator = HtmlGenerator(source, root, config=RenderConfig(highlight=True))

    # Or scope a config to a block
    with render_config_context(RenderConfig(code_block_indent=2)):
        html = HtmlGenerator(source, root).generate_html()

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from marktree.utils.text import html_escape


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        escape: Entity escaper applied to leaf text and attribute values
        highlight: Pass fenced code with a language to the syntax highlighter
        language_class_prefix: Prefix of the class attribute on fenced code
        code_block_indent: Spaces stripped per line of indented code blocks

    """

    escape: Callable[[str], str] = html_escape
    highlight: bool = False
    language_class_prefix: str = "language-"
    code_block_indent: int = 4

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({"highlight": True, "theme": "x"})
            >>> config.highlight
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
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
    """Reset to the default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(highlight=True)):
        ...     get_render_config().highlight
        True
        >>> get_render_config().highlight
        False

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
