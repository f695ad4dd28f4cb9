"""Shared fixtures for marktree tests."""

from collections.abc import Callable

import pytest

from marktree.builder import Sketch, build
from marktree.renderers.html import HtmlGenerator


@pytest.fixture
def render() -> Callable[..., str]:
    """Build a sketch and render it with the default registry."""

    def _render(sketch: Sketch, **kwargs: object) -> str:
        tree = build(sketch)
        return HtmlGenerator(tree.source, tree.root, **kwargs).generate_html()

    return _render
