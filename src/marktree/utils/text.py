"""Text processing utilities for marktree.

Provides the default entity escaper, the indent trimmer used for code
blocks, and link label normalization.

Example:
    >>> from marktree.utils.text import html_escape, trim_indents
    >>> html_escape('a < "b"')
    'a &lt; &quot;b&quot;'
    >>> trim_indents("      x\\n  y", 4)
    '  x\\ny'
"""

from __future__ import annotations

import html as html_module
import re
from functools import lru_cache


def html_escape(text: str) -> str:
    """Escape HTML special characters.

    CommonMark-compliant: escapes <, >, &, " but NOT single quotes.
    Python's html.escape() escapes ' to &#x27; which CommonMark doesn't require.

    Examples:
        >>> html_escape("AT&T <b>")
        'AT&amp;T &lt;b&gt;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False).replace('"', "&quot;")


@lru_cache(maxsize=16)
def _indent_pattern(indent: int) -> re.Pattern[str]:
    # ^ without MULTILINE only matches at the very start of the text.
    return re.compile(r"(\n|^) {0,%d}" % indent)


def trim_indents(text: str, indent: int) -> str:
    """Strip up to ``indent`` leading spaces from every line.

    A line with fewer leading spaces loses only the ones it has. Tabs and
    other whitespace are left untouched.

    Args:
        text: Block of text, lines separated by ``\\n``
        indent: Maximum number of spaces to remove per line

    Returns:
        De-indented text (unchanged when ``indent`` is 0)

    Examples:
        >>> trim_indents("    a\\n      b\\n  c", 4)
        'a\\n  b\\nc'
    """
    if indent <= 0:
        return text
    return _indent_pattern(indent).sub(r"\1", text)


_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Normalize a link reference label for matching.

    Strips the surrounding brackets if present, collapses internal
    whitespace runs to a single space and case-folds, so ``[Foo  Bar]``
    and ``[foo bar]`` refer to the same definition.

    Examples:
        >>> normalize_label("[Foo\\n  BAR]")
        'foo bar'
    """
    if label.startswith("[") and label.endswith("]"):
        label = label[1:-1]
    return _WHITESPACE_RUN.sub(" ", label.strip()).casefold()


__all__ = ["html_escape", "normalize_label", "trim_indents"]
