"""Optional syntax highlighting for fenced code blocks.

Consulted only when ``RenderConfig(highlight=True)`` and the fence names a
language. With marktree[syntax] installed, Rosettes is picked up on first
use; any other highlighter can be injected with ``set_highlighter``, either
an object implementing ``Highlighter`` or a plain ``(code, language)``
callable.

Example:
    from marktree.highlighting import set_highlighter

    set_highlighter(lambda code, language: f'<pre class="hl-{language}">{code}</pre>')
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class Highlighter(Protocol):
    """A syntax highlighter for fenced code.

    Thread Safety:
        ``highlight`` may be called from several renders at once.
    """

    def highlight(self, code: str, language: str) -> str:
        """Return a complete HTML block for ``code``; the code is not escaped yet."""
        ...

    def supports_language(self, language: str) -> bool: ...


type HighlightFunction = Callable[[str, str], str]

_highlighter: Highlighter | HighlightFunction | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | HighlightFunction | None) -> None:
    """Install the process-wide highlighter (``None`` removes it)."""
    global _highlighter
    _highlighter = highlighter


class RosettesHighlighter:
    """Highlighter backed by the optional ``rosettes`` package."""

    def highlight(self, code: str, language: str) -> str:
        import rosettes  # type: ignore[import-not-found]

        html: str = rosettes.highlight(code, language=language)
        return html

    def supports_language(self, language: str) -> bool:
        import rosettes  # type: ignore[import-not-found]

        try:
            return bool(rosettes.supports_language(language))
        except Exception:
            return False


def _load_rosettes() -> None:
    # Tried once per process; a later set_highlighter() still wins.
    global _highlighter, _tried_rosettes
    if _tried_rosettes:
        return
    _tried_rosettes = True
    try:
        import rosettes  # type: ignore[import-not-found]  # noqa: F401
    except ImportError:
        return
    _highlighter = RosettesHighlighter()


def get_highlighter() -> Highlighter | HighlightFunction | None:
    """Return the installed highlighter, loading Rosettes if none is set."""
    if _highlighter is None:
        _load_rosettes()
    return _highlighter


def highlight(code: str, language: str) -> str | None:
    """Highlight ``code`` with the installed highlighter.

    Returns:
        Highlighted HTML, or None when no highlighter is installed or the
        highlighter reports the language as unsupported. Callers render
        plain code themselves in that case.

    Exceptions raised by the highlighter propagate to the caller.
    """
    highlighter = get_highlighter()
    if highlighter is None:
        return None
    if hasattr(highlighter, "highlight"):
        supports = getattr(highlighter, "supports_language", None)
        if callable(supports) and not supports(language):
            return None
        return highlighter.highlight(code, language)
    return highlighter(code, language)


__all__ = [
    "HighlightFunction",
    "Highlighter",
    "RosettesHighlighter",
    "get_highlighter",
    "highlight",
    "set_highlighter",
]
