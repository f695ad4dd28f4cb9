"""Tree walking for marktree.

Provides a recursive visitor base class and a pre-order node iterator.

Example, counting paragraphs:

    class ParagraphCounter(RecursiveVisitor):
        def __init__(self) -> None:
            self.count = 0

        def visit(self, node: Node) -> None:
            if node.type is ElementType.PARAGRAPH:
                self.count += 1
            super().visit(node)

    counter = ParagraphCounter()
    root.accept(counter)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. ``iter_nodes`` is
    pure and safe to call from any thread.

"""

from collections.abc import Iterator

from marktree.nodes import Node


class RecursiveVisitor:
    """Base visitor that descends into every child.

    Subclasses override ``visit`` and call ``super().visit(node)`` (or
    ``node.accept_children(self)``) wherever the walk should continue.

    """

    def visit(self, node: Node) -> None:
        node.accept_children(self)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield ``root`` and all of its descendants in pre-order.

    Iterative, so deep trees do not hit the recursion limit.

    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


__all__ = ["RecursiveVisitor", "iter_nodes"]
