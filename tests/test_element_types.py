"""Tests for node type tags and their qualified names."""

import pytest

from marktree.element_types import ElementType, TokenType, parse_type_name, type_name


class TestTypeNames:
    """Tests for type_name/parse_type_name."""

    def test_element_name(self) -> None:
        assert type_name(ElementType.EMPH) == "element:EMPH"

    def test_token_name(self) -> None:
        assert type_name(TokenType.EMPH) == "token:EMPH"

    def test_every_type_round_trips(self) -> None:
        for node_type in [*ElementType, *TokenType]:
            assert parse_type_name(type_name(node_type)) is node_type

    def test_unknown_prefix(self) -> None:
        with pytest.raises(ValueError, match="prefix"):
            parse_type_name("node:EMPH")

    def test_unknown_member(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            parse_type_name("element:TABLE")

    def test_shared_names_are_distinct_tags(self) -> None:
        shared = {t.name for t in ElementType} & {t.name for t in TokenType}
        assert {"EMPH", "BLOCK_QUOTE", "AUTOLINK", "SETEXT_1", "SETEXT_2"} <= shared
        for name in shared:
            assert ElementType[name] != TokenType[name]
