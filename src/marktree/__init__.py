"""
marktree: HTML generation for Markdown syntax trees

marktree turns a finished Markdown syntax tree (type tags, children and
spans into the source text) into HTML. Each node type maps to a small
rendering strategy in an immutable registry; unknown types are walked
through transparently. Zero runtime dependencies.

Quick Start:
    >>> from marktree import ElementType, TokenType, build, composite, leaf, render_html
    >>> tree = build(
    ...     composite(ElementType.MARKDOWN_FILE,
    ...         composite(ElementType.PARAGRAPH,
    ...             leaf(TokenType.TEXT, "Hello "),
    ...             composite(ElementType.STRONG,
    ...                 leaf(TokenType.EMPH, "*"), leaf(TokenType.EMPH, "*"),
    ...                 leaf(TokenType.TEXT, "world"),
    ...                 leaf(TokenType.EMPH, "*"), leaf(TokenType.EMPH, "*")))))
    >>> render_html(tree.source, tree.root)
    '<body><p>Hello <strong>world</strong></p></body>'

Custom Providers:
    >>> from marktree import LiteralProvider, create_registry_with_defaults
    >>> builder = create_registry_with_defaults()
    >>> builder.replace(TokenType.HORIZONTAL_RULE, LiteralProvider("<hr>"))
    >>> html = render_html(source, root, registry=builder.build())

Installation:
    pip install marktree              # Core renderer (zero deps)
    pip install marktree[syntax]      # + Syntax highlighting via Rosettes
"""

from marktree.builder import BuiltTree, build, composite, leaf
from marktree.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from marktree.element_types import ElementType, NodeType, TokenType
from marktree.errors import MarktreeError, RegistryError, RenderError
from marktree.nodes import CompositeNode, LeafNode, Node
from marktree.renderers.html import (
    HtmlGeneratingVisitor,
    HtmlGenerator,
    RenderContext,
    RenderDiagnostic,
    render_html,
)
from marktree.renderers.protocol import GeneratingProvider
from marktree.renderers.providers import (
    InlineHolderProvider,
    LiteralProvider,
    NonRecursiveProvider,
    OpenCloseProvider,
    RawTextProvider,
    SimpleInlineTagProvider,
    SimpleTagProvider,
    TransparentInlineHolderProvider,
    TrimmingTransparentInlineHolderProvider,
)
from marktree.renderers.registry import (
    STRUCTURAL_TYPES,
    ProviderRegistry,
    ProviderRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)
from marktree.serialization import from_dict, from_json, to_dict, to_json
from marktree.utils.text import html_escape, trim_indents
from marktree.visitor import RecursiveVisitor, iter_nodes

__version__ = "0.1.0"

__all__ = [
    "STRUCTURAL_TYPES",
    "BuiltTree",
    "CompositeNode",
    "ElementType",
    "GeneratingProvider",
    "HtmlGeneratingVisitor",
    "HtmlGenerator",
    "InlineHolderProvider",
    "LeafNode",
    "LiteralProvider",
    "MarktreeError",
    "Node",
    "NodeType",
    "NonRecursiveProvider",
    "OpenCloseProvider",
    "ProviderRegistry",
    "ProviderRegistryBuilder",
    "RawTextProvider",
    "RecursiveVisitor",
    "RegistryError",
    "RenderConfig",
    "RenderContext",
    "RenderDiagnostic",
    "RenderError",
    "SimpleInlineTagProvider",
    "SimpleTagProvider",
    "TokenType",
    "TransparentInlineHolderProvider",
    "TrimmingTransparentInlineHolderProvider",
    "__version__",
    "build",
    "composite",
    "create_default_registry",
    "create_registry_with_defaults",
    "from_dict",
    "from_json",
    "get_render_config",
    "html_escape",
    "iter_nodes",
    "leaf",
    "render_config_context",
    "render_html",
    "reset_render_config",
    "set_render_config",
    "to_dict",
    "to_json",
    "trim_indents",
]
