"""Provider registry: node type → rendering strategy.

The registry maps each node type tag to exactly one provider. Lookup is by
exact tag; a tag without a provider is not an error, the visitor simply
descends into the node's children.

Thread Safety:
ProviderRegistry is immutable after creation. Safe to share.
Use ProviderRegistryBuilder for mutable construction.

Example:
    >>> builder = create_registry_with_defaults()
    >>> builder.replace(TokenType.HORIZONTAL_RULE, LiteralProvider("<hr>"))
    >>> registry = builder.build()
    >>> registry.get(TokenType.HORIZONTAL_RULE)
    LiteralProvider(html='<hr>')
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from marktree.element_types import ElementType, TokenType
from marktree.errors import RegistryError
from marktree.renderers.handlers import (
    AutolinkProvider,
    CodeBlockProvider,
    CodeFenceProvider,
    CodeSpanProvider,
    ImageProvider,
    InlineLinkProvider,
    LinkDestinationProvider,
    ListItemProvider,
    ReferenceLinkProvider,
)
from marktree.renderers.providers import (
    LiteralProvider,
    RawTextProvider,
    SimpleInlineTagProvider,
    SimpleTagProvider,
    TransparentInlineHolderProvider,
    TrimmingTransparentInlineHolderProvider,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from marktree.element_types import NodeType
    from marktree.renderers.protocol import GeneratingProvider


# Tags that intentionally have no provider: markers, delimiters and
# whitespace consumed by their parent's provider, or skipped by descent.
STRUCTURAL_TYPES: frozenset[NodeType] = frozenset(
    {
        TokenType.TEXT,
        TokenType.WHITE_SPACE,
        TokenType.EOL,
        TokenType.BLOCK_QUOTE,
        TokenType.LIST_BULLET,
        TokenType.LIST_NUMBER,
        TokenType.ATX_HEADER,
        TokenType.SETEXT_1,
        TokenType.SETEXT_2,
        TokenType.EMPH,
        TokenType.TILDE,
        TokenType.BACKTICK,
        TokenType.LT,
        TokenType.GT,
        TokenType.LBRACKET,
        TokenType.RBRACKET,
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.COLON,
        TokenType.EXCLAMATION_MARK,
        TokenType.DOUBLE_QUOTE,
        TokenType.SINGLE_QUOTE,
        TokenType.URL,
        TokenType.AUTOLINK,
        TokenType.CODE_LINE,
        TokenType.CODE_FENCE_START,
        TokenType.CODE_FENCE_END,
        TokenType.CODE_FENCE_CONTENT,
        TokenType.FENCE_LANG,
    }
)


class ProviderRegistry:
    """Immutable mapping of node types to providers.

    Thread Safety:
        Immutable after creation. Safe to share across threads and renders.
    """

    __slots__ = ("_providers",)

    def __init__(self, providers: Mapping[NodeType, GeneratingProvider]) -> None:
        """Initialize registry from a finished mapping.

        Use ProviderRegistryBuilder to create instances.
        """
        self._providers: Mapping[NodeType, GeneratingProvider] = MappingProxyType(dict(providers))

    def get(self, node_type: NodeType) -> GeneratingProvider | None:
        """Get the provider for a node type, or None if unregistered."""
        return self._providers.get(node_type)

    @property
    def types(self) -> frozenset[NodeType]:
        """All node types with a provider."""
        return frozenset(self._providers)

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._providers

    def __len__(self) -> int:
        return len(self._providers)


class ProviderRegistryBuilder:
    """Mutable builder for ProviderRegistry.

    Registering a node type twice is a programming error and raises
    RegistryError. Use ``replace`` to swap an existing provider on purpose.
    """

    __slots__ = ("_providers",)

    def __init__(self) -> None:
        self._providers: dict[NodeType, GeneratingProvider] = {}

    def register(self, node_type: NodeType, provider: GeneratingProvider) -> ProviderRegistryBuilder:
        """Register the provider for a node type.

        Returns:
            Self for chaining

        Raises:
            RegistryError: If the node type already has a provider
        """
        if not callable(getattr(provider, "process", None)):
            msg = f"Provider {type(provider).__name__} has no process() method"
            raise TypeError(msg)
        if node_type in self._providers:
            existing = self._providers[node_type]
            raise RegistryError(node_type, f"already registered to {type(existing).__name__}")
        self._providers[node_type] = provider
        return self

    def register_all(
        self, entries: Iterable[tuple[NodeType, GeneratingProvider]]
    ) -> ProviderRegistryBuilder:
        """Register several ``(node_type, provider)`` pairs."""
        for node_type, provider in entries:
            self.register(node_type, provider)
        return self

    def replace(self, node_type: NodeType, provider: GeneratingProvider) -> ProviderRegistryBuilder:
        """Swap the provider of an already registered node type.

        Raises:
            RegistryError: If the node type has no provider yet
        """
        if node_type not in self._providers:
            raise RegistryError(node_type, "not registered, use register()")
        del self._providers[node_type]
        return self.register(node_type, provider)

    def build(self) -> ProviderRegistry:
        """Build an immutable registry from the registered providers."""
        return ProviderRegistry(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


def _default_providers() -> list[tuple[NodeType, GeneratingProvider]]:
    trimming = TrimmingTransparentInlineHolderProvider()
    delimited = TransparentInlineHolderProvider(1, -1)
    raw_html = RawTextProvider()
    reference_link = ReferenceLinkProvider()
    return [
        (ElementType.MARKDOWN_FILE, SimpleTagProvider("body")),
        (TokenType.HTML_BLOCK, raw_html),
        (TokenType.HTML_TAG, raw_html),
        (ElementType.BLOCK_QUOTE, SimpleTagProvider("blockquote")),
        (ElementType.ORDERED_LIST, SimpleTagProvider("ol")),
        (ElementType.UNORDERED_LIST, SimpleTagProvider("ul")),
        (ElementType.LIST_ITEM, ListItemProvider()),
        # Headings
        (TokenType.SETEXT_CONTENT, trimming),
        (ElementType.SETEXT_1, SimpleTagProvider("h1")),
        (ElementType.SETEXT_2, SimpleTagProvider("h2")),
        (TokenType.ATX_CONTENT, trimming),
        (ElementType.ATX_1, SimpleTagProvider("h1")),
        (ElementType.ATX_2, SimpleTagProvider("h2")),
        (ElementType.ATX_3, SimpleTagProvider("h3")),
        (ElementType.ATX_4, SimpleTagProvider("h4")),
        (ElementType.ATX_5, SimpleTagProvider("h5")),
        (ElementType.ATX_6, SimpleTagProvider("h6")),
        # Links
        (ElementType.AUTOLINK, AutolinkProvider()),
        (ElementType.LINK_LABEL, delimited),
        (ElementType.LINK_TITLE, delimited),
        (ElementType.LINK_TEXT, delimited),
        (ElementType.LINK_DESTINATION, LinkDestinationProvider()),
        (ElementType.INLINE_LINK, InlineLinkProvider()),
        (ElementType.LINK_DEFINITION, LiteralProvider("")),
        (ElementType.FULL_REFERENCE_LINK, reference_link),
        (ElementType.SHORT_REFERENCE_LINK, reference_link),
        (ElementType.IMAGE, ImageProvider()),
        # Code
        (ElementType.CODE_FENCE, CodeFenceProvider()),
        (ElementType.CODE_BLOCK, CodeBlockProvider()),
        (ElementType.CODE_SPAN, CodeSpanProvider()),
        (TokenType.HORIZONTAL_RULE, LiteralProvider("<hr />")),
        # Inline spans
        (ElementType.PARAGRAPH, SimpleInlineTagProvider("p")),
        (ElementType.EMPH, SimpleInlineTagProvider("em", 1, -1)),
        (ElementType.STRONG, SimpleInlineTagProvider("strong", 2, -2)),
        (ElementType.STRIKETHROUGH, SimpleInlineTagProvider("del", 2, -2)),
    ]


# Cached singleton, shared across threads: ProviderRegistry is immutable
_DEFAULT_REGISTRY: ProviderRegistry | None = None


def create_default_registry() -> ProviderRegistry:
    """Get the default provider registry (cached singleton)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_registry_with_defaults().build()
    return _DEFAULT_REGISTRY


def create_registry_with_defaults() -> ProviderRegistryBuilder:
    """Create a builder pre-populated with the default providers.

    Use this to extend or adjust the default set:

        >>> builder = create_registry_with_defaults()
        >>> builder.register(TokenType.URL, RawTextProvider())
        >>> registry = builder.build()
    """
    return ProviderRegistryBuilder().register_all(_default_providers())


__all__ = [
    "STRUCTURAL_TYPES",
    "ProviderRegistry",
    "ProviderRegistryBuilder",
    "create_default_registry",
    "create_registry_with_defaults",
]
