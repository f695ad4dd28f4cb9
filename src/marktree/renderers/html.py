"""HTML generation by type-driven dispatch.

HtmlGenerator walks a syntax tree with HtmlGeneratingVisitor. At every node
the visitor looks up the node's type in a ProviderRegistry:

- provider found: the provider renders the node and decides whether and
  how its children are visited
- no provider: the visitor descends into the children and emits nothing
  for the node itself

All output goes through ``consume_html`` into one StringBuilder per render,
in strict pre-order. There are no per-subtree buffers and no merge step.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
generate_html() call. The registry and configuration are immutable, so
several generators (or threads) can share them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from marktree.config import RenderConfig, get_render_config
from marktree.renderers.handlers import collect_link_definitions
from marktree.renderers.registry import ProviderRegistry, create_default_registry
from marktree.stringbuilder import StringBuilder
from marktree.utils.logger import get_logger
from marktree.visitor import RecursiveVisitor

if TYPE_CHECKING:
    from collections.abc import Callable

    from marktree.element_types import NodeType
    from marktree.nodes import Node
    from marktree.renderers.handlers import LinkTarget

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderDiagnostic:
    """A degraded-output notice recorded during rendering.

    Diagnostics never change the generated HTML. They report where a
    well-formed but incomplete tree (a link without destination, an
    unresolved reference) was rendered with empty or literal output.
    """

    node_type: NodeType
    offset: int
    message: str


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Pairs the read-only source text and registry with the output buffer
    of one generate_html() call.

    Thread Safety:
        Each generate_html() call creates its own RenderContext instance.
        No shared mutable state between concurrent renders.
    """

    source: str
    registry: ProviderRegistry
    config: RenderConfig
    buffer: StringBuilder = field(default_factory=StringBuilder)
    link_definitions: dict[str, LinkTarget] = field(default_factory=dict)
    loose_lists: dict[int, bool] = field(default_factory=dict)
    diagnostics: list[RenderDiagnostic] = field(default_factory=list)


class HtmlGeneratingVisitor(RecursiveVisitor):
    """Visitor that dispatches each node to its registered provider."""

    def __init__(self, context: RenderContext) -> None:
        self._context = context

    @property
    def context(self) -> RenderContext:
        return self._context

    @property
    def config(self) -> RenderConfig:
        return self._context.config

    @property
    def escape(self) -> Callable[[str], str]:
        return self._context.config.escape

    def visit(self, node: Node) -> None:
        provider = self._context.registry.get(node.type)
        if provider is None:
            node.accept_children(self)
        else:
            provider.process(self, self._context.source, node)

    def has_provider(self, node_type: NodeType) -> bool:
        return node_type in self._context.registry

    def consume_html(self, html: str) -> None:
        """Append an HTML fragment to the output."""
        self._context.buffer.append(html)

    def report(self, node: Node, message: str) -> None:
        """Record a diagnostic for a node rendered with degraded output."""
        diagnostic = RenderDiagnostic(node.type, node.start, message)
        self._context.diagnostics.append(diagnostic)
        logger.debug("%s at offset %d: %s", node.type.name, node.start, message)


class HtmlGenerator:
    """Render a syntax tree to HTML.

    Usage:
        >>> from marktree.builder import build, composite, leaf
        >>> from marktree.element_types import ElementType, TokenType
        >>> tree = build(composite(ElementType.MARKDOWN_FILE,
        ...     composite(ElementType.PARAGRAPH, leaf(TokenType.TEXT, "Hi & bye"))))
        >>> HtmlGenerator(tree.source, tree.root).generate_html()
        '<body><p>Hi &amp; bye</p></body>'

    Thread Safety:
        Each generate_html() call creates an independent RenderContext.
        ``diagnostics`` reflects the most recent call on this instance.
    """

    __slots__ = ("_markdown_text", "_root", "_registry", "_config", "_last_context")

    def __init__(
        self,
        markdown_text: str,
        root: Node,
        *,
        registry: ProviderRegistry | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            markdown_text: Original source text the tree's spans point into
            root: Root of the tree (usually a MARKDOWN_FILE node)
            registry: Provider registry (defaults to the built-in providers)
            config: Render configuration (defaults to the context's config)
        """
        self._markdown_text = markdown_text
        self._root = root
        self._registry = registry if registry is not None else create_default_registry()
        self._config = config if config is not None else get_render_config()
        self._last_context: RenderContext | None = None

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def config(self) -> RenderConfig:
        return self._config

    def generate_html(self, node: Node | None = None) -> str:
        """Render the tree, or one of its nodes, to an HTML string.

        Args:
            node: Sub-node to render as an unwrapped fragment. Link
                definitions are still collected from the whole tree.

        Returns:
            HTML string
        """
        ctx = RenderContext(
            source=self._markdown_text,
            registry=self._registry,
            config=self._config,
        )
        ctx.link_definitions.update(
            collect_link_definitions(self._markdown_text, self._root, self._config.escape)
        )
        HtmlGeneratingVisitor(ctx).visit(self._root if node is None else node)
        self._last_context = ctx
        return ctx.buffer.build()

    @property
    def diagnostics(self) -> tuple[RenderDiagnostic, ...]:
        """Diagnostics recorded by the most recent generate_html() call."""
        if self._last_context is None:
            return ()
        return tuple(self._last_context.diagnostics)


def render_html(
    source: str,
    root: Node,
    *,
    registry: ProviderRegistry | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render a whole tree to HTML in one call."""
    return HtmlGenerator(source, root, registry=registry, config=config).generate_html()


__all__ = [
    "HtmlGeneratingVisitor",
    "HtmlGenerator",
    "RenderContext",
    "RenderDiagnostic",
    "render_html",
]
