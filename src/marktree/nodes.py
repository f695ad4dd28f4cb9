"""Read-only syntax tree nodes for marktree.

A tree is made of two node kinds, both frozen dataclasses with slots:

Node (base: type tag + source span)
├── LeafNode       literal source text, no children
└── CompositeNode  ordered children, possibly empty

Nodes never copy source text. A node only records the half-open span
``[start, end)`` it covers; ``get_text(source)`` slices the original buffer
on demand. Composite nodes link their children back to themselves at
construction time (``parent``), so a node belongs to exactly one tree.

Thread Safety:
Nodes are immutable after the enclosing tree is built and safe to share
across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from marktree.element_types import NodeType


class NodeVisitor(Protocol):
    """Anything with a ``visit(node)`` method can walk a tree."""

    def visit(self, node: Node) -> None: ...


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes.

    Attributes:
        type: Element or token type tag
        start: Absolute start offset in the source buffer (inclusive)
        end: Absolute end offset in the source buffer (exclusive)
        parent: Enclosing composite node, ``None`` for the root

    """

    type: NodeType
    start: int
    end: int
    parent: CompositeNode | None = field(default=None, init=False, repr=False, compare=False)

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    @property
    def is_leaf(self) -> bool:
        return True

    def get_text(self, source: str) -> str:
        """Return the raw source text this node spans."""
        return source[self.start : self.end]

    def find_child_of_type(self, node_type: NodeType) -> Node | None:
        """Return the first direct child with the given type, if any."""
        for child in self.children:
            if child.type is node_type:
                return child
        return None

    def accept(self, visitor: NodeVisitor) -> None:
        visitor.visit(self)

    def accept_children(self, visitor: NodeVisitor) -> None:
        for child in self.children:
            child.accept(visitor)


@dataclass(frozen=True, slots=True)
class LeafNode(Node):
    """A token spanning literal source text."""


@dataclass(frozen=True, slots=True)
class CompositeNode(Node):
    """A node with an ordered sequence of children.

    Children are linked back to this node on construction.

    """

    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        for child in self.children:
            # Frozen dataclass: parent links are set once, here.
            object.__setattr__(child, "parent", self)

    @property
    def is_leaf(self) -> bool:
        return False


__all__ = ["CompositeNode", "LeafNode", "Node", "NodeVisitor"]
