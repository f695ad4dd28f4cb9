"""marktree renderers.

Renderers convert syntax trees into output formats.

- HtmlGenerator: dispatches each node type to a GeneratingProvider
- ProviderRegistry: the immutable node type → provider table
- providers: reusable strategy shapes (open/close, non-recursive, inline holder)
- handlers: providers for lists, links, images and code

Thread Safety:
All renderers use a StringBuilder local to each generate_html() call.
Safe for concurrent use from multiple threads.

"""

from marktree.renderers.html import (
    HtmlGeneratingVisitor,
    HtmlGenerator,
    RenderContext,
    RenderDiagnostic,
    render_html,
)
from marktree.renderers.protocol import GeneratingProvider
from marktree.renderers.registry import (
    STRUCTURAL_TYPES,
    ProviderRegistry,
    ProviderRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)

__all__ = [
    "STRUCTURAL_TYPES",
    "GeneratingProvider",
    "HtmlGeneratingVisitor",
    "HtmlGenerator",
    "ProviderRegistry",
    "ProviderRegistryBuilder",
    "RenderContext",
    "RenderDiagnostic",
    "create_default_registry",
    "create_registry_with_defaults",
    "render_html",
]
