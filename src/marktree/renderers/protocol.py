"""GeneratingProvider protocol: the contract of every rendering strategy.

A provider renders one node type. It receives the visitor that drives the
walk, the full source text and the node, and is fully responsible for
whether and how the node's children are visited.

Example:
    from marktree.renderers.protocol import GeneratingProvider

    class ShoutProvider:
        def process(self, visitor, text, node):
            visitor.consume_html(visitor.escape(node.get_text(text).upper()))

    builder = create_registry_with_defaults()
    builder.replace(TokenType.HTML_TAG, ShoutProvider())

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from marktree.nodes import Node
    from marktree.renderers.html import HtmlGeneratingVisitor


class GeneratingProvider(Protocol):
    """Protocol for per-type rendering strategies.

    Thread Safety:
        Providers are shared by every render that uses their registry.
        Implementations must keep no per-render state on ``self``; per-render
        data lives on the visitor's RenderContext.

    """

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        """Render ``node`` by appending fragments through ``visitor``.

        Args:
            visitor: The traversal visitor (output sink and recursion entry)
            text: The complete source buffer (read-only)
            node: The node to render; its type is the one registered

        """
        ...
