"""Tests for ProviderRegistry and ProviderRegistryBuilder."""

import pytest

from marktree.element_types import ElementType, TokenType
from marktree.errors import RegistryError
from marktree.renderers.providers import LiteralProvider, RawTextProvider, SimpleTagProvider
from marktree.renderers.registry import (
    STRUCTURAL_TYPES,
    ProviderRegistry,
    ProviderRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)


class TestProviderRegistryBuilder:
    """Tests for registry construction."""

    def test_register_and_build(self) -> None:
        provider = SimpleTagProvider("section")
        registry = ProviderRegistryBuilder().register(ElementType.BLOCK_QUOTE, provider).build()
        assert registry.get(ElementType.BLOCK_QUOTE) is provider
        assert len(registry) == 1

    def test_duplicate_registration_raises(self) -> None:
        builder = ProviderRegistryBuilder()
        builder.register(ElementType.PARAGRAPH, SimpleTagProvider("p"))
        with pytest.raises(RegistryError, match="PARAGRAPH") as exc_info:
            builder.register(ElementType.PARAGRAPH, SimpleTagProvider("div"))
        assert exc_info.value.node_type is ElementType.PARAGRAPH

    def test_same_name_in_both_enums_is_not_a_duplicate(self) -> None:
        builder = ProviderRegistryBuilder()
        builder.register(ElementType.EMPH, SimpleTagProvider("em"))
        builder.register(TokenType.EMPH, LiteralProvider("*"))
        registry = builder.build()
        assert registry.get(ElementType.EMPH) == SimpleTagProvider("em")
        assert registry.get(TokenType.EMPH) == LiteralProvider("*")

    def test_register_all(self) -> None:
        builder = ProviderRegistryBuilder().register_all(
            [
                (ElementType.ATX_1, SimpleTagProvider("h1")),
                (ElementType.ATX_2, SimpleTagProvider("h2")),
            ]
        )
        assert len(builder) == 2

    def test_register_all_duplicate_raises(self) -> None:
        entries = [
            (TokenType.HTML_TAG, RawTextProvider()),
            (TokenType.HTML_TAG, RawTextProvider()),
        ]
        with pytest.raises(RegistryError):
            ProviderRegistryBuilder().register_all(entries)

    def test_register_rejects_non_provider(self) -> None:
        with pytest.raises(TypeError, match="process"):
            ProviderRegistryBuilder().register(ElementType.PARAGRAPH, object())

    def test_replace(self) -> None:
        builder = create_registry_with_defaults()
        builder.replace(TokenType.HORIZONTAL_RULE, LiteralProvider("<hr>"))
        registry = builder.build()
        assert registry.get(TokenType.HORIZONTAL_RULE) == LiteralProvider("<hr>")

    def test_replace_unregistered_raises(self) -> None:
        with pytest.raises(RegistryError, match="not registered"):
            ProviderRegistryBuilder().replace(ElementType.PARAGRAPH, SimpleTagProvider("p"))

    def test_built_registry_is_independent_of_builder(self) -> None:
        builder = ProviderRegistryBuilder()
        registry = builder.build()
        builder.register(ElementType.PARAGRAPH, SimpleTagProvider("p"))
        assert ElementType.PARAGRAPH not in registry
        assert len(registry) == 0


class TestProviderRegistry:
    """Tests for the immutable registry."""

    def test_get_unregistered_returns_none(self) -> None:
        assert ProviderRegistry({}).get(ElementType.PARAGRAPH) is None

    def test_contains(self) -> None:
        registry = create_default_registry()
        assert ElementType.PARAGRAPH in registry
        assert TokenType.TEXT not in registry

    def test_types(self) -> None:
        registry = ProviderRegistry({ElementType.ATX_1: SimpleTagProvider("h1")})
        assert registry.types == frozenset({ElementType.ATX_1})

    def test_source_mapping_changes_do_not_leak(self) -> None:
        providers = {ElementType.ATX_1: SimpleTagProvider("h1")}
        registry = ProviderRegistry(providers)
        providers[ElementType.ATX_2] = SimpleTagProvider("h2")
        assert ElementType.ATX_2 not in registry


class TestDefaultRegistry:
    """Tests for the built-in provider table."""

    def test_default_registry_is_cached(self) -> None:
        assert create_default_registry() is create_default_registry()

    def test_defaults_builder_is_fresh(self) -> None:
        assert create_registry_with_defaults() is not create_registry_with_defaults()
        assert len(create_registry_with_defaults()) == len(create_default_registry())

    def test_every_type_is_registered_or_structural(self) -> None:
        registry = create_default_registry()
        all_types = set(ElementType) | set(TokenType)
        assert all_types == registry.types | STRUCTURAL_TYPES

    def test_structural_types_have_no_provider(self) -> None:
        assert not (create_default_registry().types & STRUCTURAL_TYPES)

    def test_every_element_type_has_a_provider(self) -> None:
        registry = create_default_registry()
        missing = [t for t in ElementType if t not in registry]
        assert missing == []

    @pytest.mark.parametrize(
        ("node_type", "tag"),
        [
            (ElementType.MARKDOWN_FILE, "body"),
            (ElementType.BLOCK_QUOTE, "blockquote"),
            (ElementType.ORDERED_LIST, "ol"),
            (ElementType.UNORDERED_LIST, "ul"),
            (ElementType.SETEXT_1, "h1"),
            (ElementType.SETEXT_2, "h2"),
            (ElementType.ATX_1, "h1"),
            (ElementType.ATX_6, "h6"),
        ],
    )
    def test_simple_tag_providers(self, node_type: ElementType, tag: str) -> None:
        assert create_default_registry().get(node_type) == SimpleTagProvider(tag)
