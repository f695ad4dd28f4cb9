"""Append-only output buffer for HTML generation.

Fragments are appended to a list and joined once at the end: O(n) total
vs O(n²) for repeated string concatenation.

Thread Safety:
A StringBuilder belongs to exactly one render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient append-only string accumulator.
    
    Usage:
        >>> sb = StringBuilder()
        >>> _ = sb.append("<h1>").append("Hello").append("</h1>")
        >>> sb.build()
        '<h1>Hello</h1>'

    """

    __slots__ = ("_parts", "_length")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty fragments are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self._length += len(s)
        return self

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)

    @property
    def fragment_count(self) -> int:
        """Number of non-empty fragments appended so far."""
        return len(self._parts)

    def __len__(self) -> int:
        """Total number of characters appended."""
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0
