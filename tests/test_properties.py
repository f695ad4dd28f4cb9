"""Property-based tests for HTML generation using Hypothesis.

These tests verify invariants that should hold for any tree:
1. Rendering is deterministic
2. Leaf text never reaches the output unescaped
3. Emphasis delimiters never reach the output
4. Code block de-indentation removes at most the configured indent
5. Child offsets resolve like Python slice bounds
"""

import html

from hypothesis import given, settings
from hypothesis import strategies as st

from marktree.builder import build, composite, leaf
from marktree.element_types import ElementType as E
from marktree.element_types import TokenType as T
from marktree.renderers.html import HtmlGenerator, render_html
from marktree.renderers.providers import resolve_offset
from marktree.utils.text import html_escape, trim_indents

# Text without emphasis markers, so any "*" in the output is a leak
plain_words = st.text(alphabet=st.characters(exclude_characters="*\n"), min_size=1, max_size=12)


def _emph(children):
    return composite(E.EMPH, leaf(T.EMPH, "*"), *children, leaf(T.EMPH, "*"))


def _strong(children):
    marker = leaf(T.EMPH, "*")
    return composite(E.STRONG, marker, marker, *children, marker, marker)


inline_sketches = st.recursive(
    plain_words.map(lambda s: leaf(T.TEXT, s)),
    lambda children: st.one_of(
        st.lists(children, max_size=3).map(_emph),
        st.lists(children, max_size=3).map(_strong),
    ),
    max_leaves=10,
)


class TestRenderingProperties:
    """Invariants of the default provider registry."""

    @given(children=st.lists(inline_sketches, max_size=5))
    @settings(max_examples=50)
    def test_rendering_is_deterministic(self, children) -> None:
        tree = build(composite(E.MARKDOWN_FILE, composite(E.PARAGRAPH, *children)))
        generator = HtmlGenerator(tree.source, tree.root)
        assert generator.generate_html() == generator.generate_html()

    @given(children=st.lists(inline_sketches, max_size=5))
    @settings(max_examples=50)
    def test_emphasis_markers_never_leak(self, children) -> None:
        tree = build(composite(E.PARAGRAPH, *children))
        assert "*" not in render_html(tree.source, tree.root)

    @given(text=st.text(min_size=1))
    @settings(max_examples=50)
    def test_paragraph_text_is_escaped(self, text: str) -> None:
        tree = build(composite(E.PARAGRAPH, leaf(T.TEXT, text)))
        output = render_html(tree.source, tree.root)
        inner = output.removeprefix("<p>").removesuffix("</p>")
        assert output == f"<p>{html_escape(text)}</p>"
        assert "<" not in inner
        assert ">" not in inner
        assert html.unescape(inner) == text


indented_lines = st.lists(
    st.tuples(st.integers(min_value=0, max_value=8), st.text(alphabet="abc<&", max_size=6)),
    min_size=1,
    max_size=6,
)


class TestCodeBlockProperties:
    """De-indentation of indented code blocks."""

    @given(lines=indented_lines)
    @settings(max_examples=50)
    def test_trim_indents_removes_at_most_indent(self, lines) -> None:
        text = "\n".join(" " * n + body for n, body in lines)
        expected = "\n".join(" " * max(0, n - 4) + body for n, body in lines)
        assert trim_indents(text, 4) == expected

    @given(lines=indented_lines)
    @settings(max_examples=50)
    def test_code_block_output(self, lines) -> None:
        children = []
        for i, (n, body) in enumerate(lines):
            if i:
                children.append(leaf(T.EOL, "\n"))
            children.append(leaf(T.CODE_LINE, " " * n + body))
        tree = build(composite(E.CODE_BLOCK, *children))
        expected = "\n".join(" " * max(0, n - 4) + html_escape(body) for n, body in lines)
        assert render_html(tree.source, tree.root) == f"<pre><code>{expected}\n</code></pre>"


class TestOffsetProperties:
    """Child offsets behave like slice bounds."""

    @given(
        length=st.integers(min_value=0, max_value=10),
        offset=st.integers(min_value=-15, max_value=15),
    )
    @settings(max_examples=50)
    def test_resolve_offset_matches_slice(self, length: int, offset: int) -> None:
        resolved = resolve_offset(offset, length)
        assert 0 <= resolved <= length
        assert resolved == len(range(length)[:offset])
