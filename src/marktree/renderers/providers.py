"""Reusable rendering strategy shapes.

Every concrete handler in the default registry is built from one of these:

- OpenCloseProvider: open fragment, visit all children, close fragment
- NonRecursiveProvider: one computed fragment, children never visited
- InlineHolderProvider: open/close around a selected range of children,
  leaves rendered as escaped text, composites visited

Most handlers need no code of their own. They are plain data: a tag name
and, for inline holders, the child range to render (``SimpleTagProvider``,
``SimpleInlineTagProvider``, ``TransparentInlineHolderProvider``).

Child ranges use ``render_from``/``render_to`` offsets. Negative offsets
count from the end; ``render_to=None`` means "through the last child".
Offsets are resolved explicitly and clamped, so a range that does not fit
(an emphasis node with too few children) renders nothing instead of failing.

Thread Safety:
Providers are frozen or stateless and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from marktree.element_types import TokenType

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from marktree.nodes import Node
    from marktree.renderers.html import HtmlGeneratingVisitor


def resolve_offset(offset: int, length: int) -> int:
    """Resolve a possibly negative child offset against ``length``.

    Negative offsets count from the end. The result is clamped to
    ``[0, length]``.

    Examples:
        >>> resolve_offset(1, 5), resolve_offset(-1, 5), resolve_offset(-9, 5)
        (1, 4, 0)
    """
    resolved = offset if offset >= 0 else length + offset
    return max(0, min(resolved, length))


def slice_children(node: Node, render_from: int = 0, render_to: int | None = None) -> Sequence[Node]:
    """Select the contiguous child range ``[render_from, render_to)``."""
    children = node.children
    length = len(children)
    start = resolve_offset(render_from, length)
    stop = length if render_to is None else resolve_offset(render_to, length)
    if stop <= start:
        return ()
    return children[start:stop]


def leaf_text(text: str, node: Node, escape: Callable[[str], str]) -> str:
    """Render a leaf as literal text.

    Block quote markers were consumed by the enclosing quote and render as
    nothing; every other leaf renders as its escaped source text.
    """
    if node.type is TokenType.BLOCK_QUOTE:
        return ""
    return escape(node.get_text(text))


# =============================================================================
# Strategy shapes
# =============================================================================


class OpenCloseProvider:
    """Wrap the node's children between an opening and a closing fragment."""

    __slots__ = ()

    def open_tag(self, text: str, node: Node) -> str:
        raise NotImplementedError

    def close_tag(self, text: str, node: Node) -> str:
        raise NotImplementedError

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        visitor.consume_html(self.open_tag(text, node))
        node.accept_children(visitor)
        visitor.consume_html(self.close_tag(text, node))


class NonRecursiveProvider:
    """Emit a single fragment computed from the node; never descend."""

    __slots__ = ()

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        raise NotImplementedError

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        visitor.consume_html(self.generate_tag(visitor, text, node))


class InlineHolderProvider(OpenCloseProvider):
    """Open/close wrapper over a selected range of children.

    Leaves in the range render as escaped literal text, composites are
    visited. Subclasses narrow the range by overriding ``children_to_render``.
    """

    __slots__ = ()

    def children_to_render(self, node: Node) -> Sequence[Node]:
        return node.children

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        visitor.consume_html(self.open_tag(text, node))
        render_children(visitor, text, self.children_to_render(node))
        visitor.consume_html(self.close_tag(text, node))


def render_children(visitor: HtmlGeneratingVisitor, text: str, children: Sequence[Node]) -> None:
    """Render children inline.

    Leaves render as escaped text unless their type has a provider of its
    own (raw inline HTML); composites are visited.
    """
    for child in children:
        if child.is_leaf and not visitor.has_provider(child.type):
            visitor.consume_html(leaf_text(text, child, visitor.escape))
        else:
            child.accept(visitor)


# =============================================================================
# Data-only conveniences
# =============================================================================


@dataclass(frozen=True, slots=True)
class SimpleTagProvider(OpenCloseProvider):
    """``<tag>`` children ``</tag>``."""

    tag_name: str

    def open_tag(self, text: str, node: Node) -> str:
        return f"<{self.tag_name}>"

    def close_tag(self, text: str, node: Node) -> str:
        return f"</{self.tag_name}>"


@dataclass(frozen=True, slots=True)
class SimpleInlineTagProvider(InlineHolderProvider):
    """``<tag>`` + children ``[render_from, render_to)`` + ``</tag>``.

    ``SimpleInlineTagProvider("em", 1, -1)`` drops one delimiter token on
    each side of an emphasis span.
    """

    tag_name: str
    render_from: int = 0
    render_to: int | None = None

    def children_to_render(self, node: Node) -> Sequence[Node]:
        return slice_children(node, self.render_from, self.render_to)

    def open_tag(self, text: str, node: Node) -> str:
        return f"<{self.tag_name}>"

    def close_tag(self, text: str, node: Node) -> str:
        return f"</{self.tag_name}>"


@dataclass(frozen=True, slots=True)
class TransparentInlineHolderProvider(InlineHolderProvider):
    """Render a child range without adding any tag."""

    render_from: int = 0
    render_to: int | None = None

    def children_to_render(self, node: Node) -> Sequence[Node]:
        return slice_children(node, self.render_from, self.render_to)

    def open_tag(self, text: str, node: Node) -> str:
        return ""

    def close_tag(self, text: str, node: Node) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class TrimmingTransparentInlineHolderProvider(TransparentInlineHolderProvider):
    """Transparent holder that also drops leading/trailing whitespace tokens."""

    def children_to_render(self, node: Node) -> Sequence[Node]:
        children = slice_children(node, self.render_from, self.render_to)
        start = 0
        while start < len(children) and children[start].type is TokenType.WHITE_SPACE:
            start += 1
        stop = len(children)
        while stop > start and children[stop - 1].type is TokenType.WHITE_SPACE:
            stop -= 1
        return children[start:stop]


class RawTextProvider(NonRecursiveProvider):
    """Pass the node's raw source text through unescaped (raw HTML)."""

    __slots__ = ()

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        return node.get_text(text)


@dataclass(frozen=True, slots=True)
class LiteralProvider(NonRecursiveProvider):
    """Emit a constant fragment regardless of the node's content."""

    html: str

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        return self.html


__all__ = [
    "InlineHolderProvider",
    "LiteralProvider",
    "NonRecursiveProvider",
    "OpenCloseProvider",
    "RawTextProvider",
    "SimpleInlineTagProvider",
    "SimpleTagProvider",
    "TransparentInlineHolderProvider",
    "TrimmingTransparentInlineHolderProvider",
    "leaf_text",
    "render_children",
    "resolve_offset",
    "slice_children",
]
