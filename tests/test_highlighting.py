"""Tests for optional syntax highlighting of fenced code."""

import logging

import pytest

from marktree import highlighting
from marktree.builder import build, composite, leaf
from marktree.config import RenderConfig
from marktree.element_types import ElementType as E
from marktree.element_types import TokenType as T
from marktree.highlighting import get_highlighter, highlight, set_highlighter
from marktree.renderers.html import HtmlGenerator


@pytest.fixture(autouse=True)
def _no_rosettes(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without a highlighter and without probing rosettes."""
    monkeypatch.setattr(highlighting, "_highlighter", None)
    monkeypatch.setattr(highlighting, "_tried_rosettes", True)


def _fence(language: str | None, *lines: str):
    children = [leaf(T.CODE_FENCE_START, "```")]
    if language is not None:
        children.append(leaf(T.FENCE_LANG, language))
    children.append(leaf(T.EOL, "\n"))
    for line in lines:
        children.extend([leaf(T.CODE_FENCE_CONTENT, line), leaf(T.EOL, "\n")])
    children.append(leaf(T.CODE_FENCE_END, "```"))
    return build(composite(E.CODE_FENCE, *children))


def _render(tree, **config) -> str:
    return HtmlGenerator(tree.source, tree.root, config=RenderConfig(**config)).generate_html()


class TestHighlightFunction:
    """Tests for marktree.highlighting.highlight."""

    def test_no_highlighter_returns_none(self) -> None:
        assert highlight("a<b", "py") is None

    def test_simple_callable(self) -> None:
        set_highlighter(lambda code, language: f"[{language}]{code}")
        assert highlight("x", "py") == "[py]x"

    def test_protocol_object(self) -> None:
        class Upper:
            def highlight(self, code: str, language: str) -> str:
                return code.upper()

            def supports_language(self, language: str) -> bool:
                return True

        set_highlighter(Upper())
        assert get_highlighter() is not None
        assert highlight("abc", "py") == "ABC"

    def test_unsupported_language_returns_none(self) -> None:
        class PythonOnly:
            def highlight(self, code: str, language: str) -> str:
                return "HIGHLIGHTED"

            def supports_language(self, language: str) -> bool:
                return language == "python"

        set_highlighter(PythonOnly())
        assert highlight("x", "python") == "HIGHLIGHTED"
        assert highlight("x", "cobol") is None

    def test_clear_highlighter(self) -> None:
        set_highlighter(lambda code, language: "hl")
        set_highlighter(None)
        assert get_highlighter() is None


class TestFenceHighlighting:
    """Tests for the CODE_FENCE provider's highlight path."""

    def test_highlight_disabled_by_default(self) -> None:
        set_highlighter(lambda code, language: "HIGHLIGHTED")
        assert _render(_fence("python", "x")) == '<pre><code class="language-python">x\n</code></pre>'

    def test_highlighter_gets_unescaped_code(self) -> None:
        calls: list[tuple[str, str]] = []

        def record(code: str, language: str) -> str:
            calls.append((code, language))
            return "<hl/>"

        set_highlighter(record)
        assert _render(_fence("python", "a < b", "c"), highlight=True) == "<hl/>"
        assert calls == [("a < b\nc\n", "python")]

    def test_no_language_skips_highlighter(self) -> None:
        set_highlighter(lambda code, language: "HIGHLIGHTED")
        assert _render(_fence(None, "x"), highlight=True) == "<pre><code>x\n</code></pre>"

    def test_failing_highlighter_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        def broken(code: str, language: str) -> str:
            raise RuntimeError("lexer exploded")

        set_highlighter(broken)
        with caplog.at_level(logging.DEBUG, logger="marktree"):
            html = _render(_fence("python", "x"), highlight=True)
        assert html == '<pre><code class="language-python">x\n</code></pre>'
        assert "Syntax highlighting failed" in caplog.text

    def test_no_highlighter_renders_plain_fence(self) -> None:
        assert _render(_fence("python", "a<b"), highlight=True) == (
            '<pre><code class="language-python">a&lt;b\n</code></pre>'
        )

    def test_unsupported_language_uses_configured_escape(self) -> None:
        class NothingSupported:
            def highlight(self, code: str, language: str) -> str:
                return "HIGHLIGHTED"

            def supports_language(self, language: str) -> bool:
                return False

        set_highlighter(NothingSupported())

        def escape(s: str) -> str:
            return s.replace("'", "&#39;")

        tree = _fence("py", "a'b")
        plain = _render(tree, escape=escape)
        assert plain == '<pre><code class="language-py">a&#39;b\n</code></pre>'
        assert _render(tree, escape=escape, highlight=True) == plain

    def test_unsupported_language_keeps_class_prefix(self) -> None:
        class NothingSupported:
            def highlight(self, code: str, language: str) -> str:
                return "HIGHLIGHTED"

            def supports_language(self, language: str) -> bool:
                return False

        set_highlighter(NothingSupported())
        html = _render(_fence("cobol", "x"), highlight=True, language_class_prefix="lang-")
        assert html == '<pre><code class="lang-cobol">x\n</code></pre>'
