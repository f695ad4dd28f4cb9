"""Build well-formed trees from literal text fragments.

marktree does not parse Markdown. Parsers (and tests) describe a tree by the
literal text of its leaves; ``build`` lays the leaves out back to back,
producing the source buffer and a tree whose spans match it exactly.

Example:
    >>> from marktree.builder import build, composite, leaf
    >>> from marktree.element_types import ElementType as E, TokenType as T
    >>> tree = build(
    ...     composite(E.PARAGRAPH,
    ...         leaf(T.TEXT, "Hello "),
    ...         composite(E.EMPH, leaf(T.EMPH, "*"), leaf(T.TEXT, "you"), leaf(T.EMPH, "*")),
    ...     )
    ... )
    >>> tree.source
    'Hello *you*'
    >>> tree.root.children[1].get_text(tree.source)
    '*you*'

Thread Safety:
Sketches and built trees are immutable. ``build`` is pure.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from marktree.nodes import CompositeNode, LeafNode, Node

if TYPE_CHECKING:
    from marktree.element_types import NodeType


@dataclass(frozen=True, slots=True)
class LeafSketch:
    """A leaf described by its literal text."""

    type: NodeType
    text: str


@dataclass(frozen=True, slots=True)
class CompositeSketch:
    """A composite described by its child sketches."""

    type: NodeType
    children: tuple[Sketch, ...]


type Sketch = LeafSketch | CompositeSketch


class BuiltTree(NamedTuple):
    """Source buffer and the tree spanning it."""

    source: str
    root: Node


def leaf(node_type: NodeType, text: str) -> LeafSketch:
    return LeafSketch(node_type, text)


def composite(node_type: NodeType, *children: Sketch) -> CompositeSketch:
    return CompositeSketch(node_type, children)


def build(sketch: Sketch, *, prefix: str = "") -> BuiltTree:
    """Lay out a sketch into a source buffer and a tree.

    Args:
        sketch: Root sketch
        prefix: Text placed before the root (the root span starts after it)

    Returns:
        BuiltTree with the concatenated leaf texts as source

    """
    parts: list[str] = [prefix]
    root = _place(sketch, len(prefix), parts)
    return BuiltTree("".join(parts), root)


def _place(sketch: Sketch, offset: int, parts: list[str]) -> Node:
    """Place a sketch starting at ``offset``, appending its text to ``parts``."""
    match sketch:
        case LeafSketch(type=node_type, text=text):
            parts.append(text)
            return LeafNode(node_type, offset, offset + len(text))
        case CompositeSketch(type=node_type, children=child_sketches):
            children: list[Node] = []
            cursor = offset
            for child_sketch in child_sketches:
                child = _place(child_sketch, cursor, parts)
                children.append(child)
                cursor = child.end
            return CompositeNode(node_type, offset, cursor, tuple(children))
    msg = f"Not a sketch: {sketch!r}"
    raise TypeError(msg)


__all__ = ["BuiltTree", "CompositeSketch", "LeafSketch", "Sketch", "build", "composite", "leaf"]
