"""Custom handlers for constructs that are not pure tag/range data.

Lists, links, images and code need to look at specific children (a link's
destination, a fence's info string) or apply block-specific text policy
(indent trimming, whitespace stripping). Each handler here is still built
from a shape in ``marktree.renderers.providers``.

Missing children never raise: a link without a destination renders
``href=""``, an unresolved reference renders as literal text. Both cases
are reported through ``HtmlGeneratingVisitor.report``.

Thread Safety:
Handlers are stateless. Per-render data (link definitions, list looseness)
lives on the visitor's RenderContext.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from marktree.element_types import ElementType, TokenType
from marktree.renderers.providers import (
    NonRecursiveProvider,
    TransparentInlineHolderProvider,
    leaf_text,
    slice_children,
)
from marktree.utils.logger import get_logger
from marktree.utils.text import normalize_label, trim_indents
from marktree.visitor import iter_nodes

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from marktree.nodes import Node
    from marktree.renderers.html import HtmlGeneratingVisitor

logger = get_logger(__name__)

_LIST_MARKERS = frozenset({TokenType.LIST_BULLET, TokenType.LIST_NUMBER})
_ALT_TEXT_DELIMITERS = frozenset({TokenType.EMPH, TokenType.TILDE, TokenType.BACKTICK})


# =============================================================================
# Lists
# =============================================================================


def _blank_line_between_blocks(children: Sequence[Node]) -> bool:
    """True if two block children are separated by a blank line."""
    seen_block = False
    newlines = 0
    for child in children:
        if child.type is TokenType.EOL:
            newlines += 1
        elif child.type is TokenType.WHITE_SPACE or child.type in _LIST_MARKERS:
            continue
        else:
            if seen_block and newlines >= 2:
                return True
            seen_block = True
            newlines = 0
    return False


_NESTED_LIST_TYPES = frozenset({ElementType.ORDERED_LIST, ElementType.UNORDERED_LIST, ElementType.LIST_ITEM})


def _trailing_newlines(children: Sequence[Node]) -> int:
    """Count EOLs at the end of ``children``.

    A trailing nested list holds the blank line inside its last item, so
    the count continues into it.
    """
    count = 0
    for child in reversed(children):
        if child.type is TokenType.EOL:
            count += 1
        elif child.type in _NESTED_LIST_TYPES:
            return count + _trailing_newlines(child.children)
        elif child.type is not TokenType.WHITE_SPACE:
            break
    return count


def is_loose_list(list_node: Node) -> bool:
    """Decide whether a list renders loose (paragraphs keep ``<p>``).

    A list is loose when a blank line separates two of its items, or two
    block children inside one of its items. Blank lines after the last
    block of the last item do not count.
    """
    seen_item = False
    newlines = 0
    for child in list_node.children:
        if child.type is ElementType.LIST_ITEM:
            if seen_item and newlines >= 2:
                return True
            if _blank_line_between_blocks(child.children):
                return True
            newlines = _trailing_newlines(child.children)
            seen_item = True
        elif child.type is TokenType.EOL:
            newlines += 1
    return False


_SILENT_PARAGRAPH = TransparentInlineHolderProvider()


class ListItemProvider:
    """``<li>`` with tight-list paragraph unwrapping.

    In a tight list, paragraphs directly inside the item render their
    inline content without ``<p>`` tags. An item outside any list renders
    as tight.
    """

    __slots__ = ()

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        loose = _is_in_loose_list(visitor, node)
        visitor.consume_html("<li>")
        for child in node.children:
            if child.type is ElementType.PARAGRAPH and not loose:
                _SILENT_PARAGRAPH.process(visitor, text, child)
            else:
                child.accept(visitor)
        visitor.consume_html("</li>")


def _is_in_loose_list(visitor: HtmlGeneratingVisitor, item: Node) -> bool:
    parent = item.parent
    if parent is None or parent.type not in (ElementType.ORDERED_LIST, ElementType.UNORDERED_LIST):
        return False
    cache = visitor.context.loose_lists
    key = id(parent)
    if key not in cache:
        cache[key] = is_loose_list(parent)
    return cache[key]


# =============================================================================
# Links
# =============================================================================


@dataclass(frozen=True, slots=True)
class LinkTarget:
    """Escaped destination and optional title of a link."""

    href: str
    title: str | None = None

    def attributes(self) -> str:
        title = f' title="{self.title}"' if self.title is not None else ""
        return f'href="{self.href}"{title}'


def _inner_text(text: str, node: Node) -> str:
    """Raw source between a node's first and last child (its delimiters)."""
    if node.is_leaf:
        return node.get_text(text)[1:-1]
    inner = slice_children(node, 1, -1)
    if not inner:
        return ""
    return text[inner[0].start : inner[-1].end]


def destination_text(text: str, destination: Node) -> str:
    """Raw destination, without ``<``/``>`` for the angle-bracket form."""
    children = destination.children
    if children and children[0].type is TokenType.LT:
        return _inner_text(text, destination)
    return destination.get_text(text)


def link_target(text: str, node: Node, escape: Callable[[str], str]) -> LinkTarget:
    """Build the target of an inline link or a link definition."""
    destination = node.find_child_of_type(ElementType.LINK_DESTINATION)
    title = node.find_child_of_type(ElementType.LINK_TITLE)
    href = escape(destination_text(text, destination)) if destination is not None else ""
    return LinkTarget(
        href=href,
        title=escape(_inner_text(text, title)) if title is not None else None,
    )


def collect_link_definitions(
    text: str, root: Node, escape: Callable[[str], str]
) -> dict[str, LinkTarget]:
    """Collect ``[label]: destination "title"`` definitions, first one wins."""
    definitions: dict[str, LinkTarget] = {}
    for node in iter_nodes(root):
        if node.type is not ElementType.LINK_DEFINITION:
            continue
        label = node.find_child_of_type(ElementType.LINK_LABEL)
        if label is None:
            continue
        key = normalize_label(label.get_text(text))
        if key and key not in definitions:
            definitions[key] = link_target(text, node, escape)
    return definitions


def resolve_link(visitor: HtmlGeneratingVisitor, text: str, node: Node) -> LinkTarget | None:
    """Target of an inline or reference link node, ``None`` if unresolved."""
    if node.type is ElementType.INLINE_LINK:
        if node.find_child_of_type(ElementType.LINK_DESTINATION) is None:
            visitor.report(node, "link has no destination")
        return link_target(text, node, visitor.escape)
    label = node.find_child_of_type(ElementType.LINK_LABEL)
    if label is None:
        return None
    return visitor.context.link_definitions.get(normalize_label(label.get_text(text)))


@dataclass(frozen=True, slots=True)
class LinkDestinationProvider(TransparentInlineHolderProvider):
    """Destination text, unwrapped from ``<``/``>`` when present."""

    render_from: int = 1
    render_to: int | None = -1

    def children_to_render(self, node: Node) -> Sequence[Node]:
        children = node.children
        if children and children[0].type is TokenType.LT:
            return slice_children(node, self.render_from, self.render_to)
        return children


class InlineLinkProvider:
    """``[text](destination "title")`` → ``<a href title>text</a>``."""

    __slots__ = ()

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        target = resolve_link(visitor, text, node)
        visitor.consume_html(f"<a {target.attributes()}>")
        link_text = node.find_child_of_type(ElementType.LINK_TEXT)
        if link_text is not None:
            link_text.accept(visitor)
        visitor.consume_html("</a>")


class ReferenceLinkProvider:
    """``[text][label]`` and ``[label]`` resolved against link definitions.

    Unresolved references render their source as literal text.
    """

    __slots__ = ()

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        target = resolve_link(visitor, text, node)
        if target is None:
            visitor.report(node, f"unresolved link reference {node.get_text(text)!r}")
            visitor.consume_html(visitor.escape(node.get_text(text)))
            return
        content_type = (
            ElementType.LINK_TEXT
            if node.type is ElementType.FULL_REFERENCE_LINK
            else ElementType.LINK_LABEL
        )
        visitor.consume_html(f"<a {target.attributes()}>")
        content = node.find_child_of_type(content_type)
        if content is not None:
            content.accept(visitor)
        visitor.consume_html("</a>")


class AutolinkProvider(NonRecursiveProvider):
    """``<http://a.b>`` → ``<a href="http://a.b">http://a.b</a>``."""

    __slots__ = ()

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        link = visitor.escape(node.get_text(text)[1:-1])
        return f'<a href="{link}">{link}</a>'


# =============================================================================
# Images
# =============================================================================


def plain_text(text: str, nodes: Sequence[Node], escape: Callable[[str], str]) -> str:
    """Flatten inline nodes to escaped text, dropping markup delimiters."""
    parts: list[str] = []
    for node in nodes:
        if node.is_leaf:
            if node.type not in _ALT_TEXT_DELIMITERS:
                parts.append(leaf_text(text, node, escape))
            continue
        match node.type:
            case ElementType.INLINE_LINK | ElementType.FULL_REFERENCE_LINK:
                label = node.find_child_of_type(ElementType.LINK_TEXT)
                if label is not None:
                    parts.append(plain_text(text, slice_children(label, 1, -1), escape))
            case ElementType.SHORT_REFERENCE_LINK:
                label = node.find_child_of_type(ElementType.LINK_LABEL)
                if label is not None:
                    parts.append(plain_text(text, slice_children(label, 1, -1), escape))
            case ElementType.IMAGE:
                parts.append(plain_text(text, node.children[1:], escape))
            case ElementType.AUTOLINK:
                parts.append(escape(node.get_text(text)[1:-1]))
            case _:
                parts.append(plain_text(text, node.children, escape))
    return "".join(parts)


_IMAGE_LINK_TYPES = (
    ElementType.INLINE_LINK,
    ElementType.FULL_REFERENCE_LINK,
    ElementType.SHORT_REFERENCE_LINK,
)


class ImageProvider(NonRecursiveProvider):
    """``![alt](src "title")`` → ``<img src alt title />``."""

    __slots__ = ()

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        link = next((c for c in node.children if c.type in _IMAGE_LINK_TYPES), None)
        if link is None:
            visitor.report(node, "image has no link")
            return '<img src="" alt="" />'
        target = resolve_link(visitor, text, link)
        if target is None:
            visitor.report(node, f"unresolved image reference {link.get_text(text)!r}")
            return visitor.escape(node.get_text(text))
        alt = plain_text(text, (link,), visitor.escape)
        title = f' title="{target.title}"' if target.title is not None else ""
        return f'<img src="{target.href}" alt="{alt}"{title} />'


# =============================================================================
# Code
# =============================================================================


class CodeSpanProvider(NonRecursiveProvider):
    """Backtick-delimited span → ``<code>`` with surrounding whitespace trimmed."""

    __slots__ = ()

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        code = "".join(
            leaf_text(text, child, visitor.escape) for child in slice_children(node, 1, -1)
        )
        return f"<code>{code.strip()}</code>"


class CodeBlockProvider(NonRecursiveProvider):
    """Indented code block, de-indented line by line."""

    __slots__ = ()

    def generate_tag(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> str:
        code = trim_indents(leaf_text(text, node, visitor.escape), visitor.config.code_block_indent)
        return f"<pre><code>{code}\n</code></pre>"


def _fence_header(children: Sequence[Node]) -> tuple[Node | None, int]:
    """Return the info-string token and the index where the body starts."""
    language = None
    for index, child in enumerate(children):
        if child.type is TokenType.FENCE_LANG:
            language = child
        elif child.type is TokenType.EOL:
            return language, index + 1
    return language, len(children)


_FENCE_BODY_TYPES = frozenset({TokenType.CODE_FENCE_CONTENT, TokenType.EOL})


class CodeFenceProvider:
    """Fenced code block with an optional ``language-X`` class.

    The body is escaped and de-indented by the fence's own indentation.
    With ``RenderConfig.highlight`` and a language, the unescaped body goes
    to the syntax highlighter instead.
    """

    __slots__ = ()

    def process(self, visitor: HtmlGeneratingVisitor, text: str, node: Node) -> None:
        raw = node.get_text(text)
        indent = len(raw) - len(raw.lstrip(" "))

        children = node.children
        if children and children[-1].type is TokenType.CODE_FENCE_END:
            children = children[:-1]
        language_node, body_start = _fence_header(children)
        body = [c for c in children[body_start:] if c.type in _FENCE_BODY_TYPES]
        words = language_node.get_text(text).split() if language_node is not None else []
        language = words[0] if words else None

        config = visitor.config
        if config.highlight and language:
            code = trim_indents("".join(c.get_text(text) for c in body), indent)
            if body and body[-1].type is TokenType.CODE_FENCE_CONTENT:
                code += "\n"
            from marktree.highlighting import highlight

            try:
                highlighted = highlight(code, language)
            except Exception:
                logger.debug("Syntax highlighting failed for language %r", language, exc_info=True)
                highlighted = None
            if highlighted is not None:
                visitor.consume_html(highlighted)
                return

        class_attr = (
            f' class="{config.language_class_prefix}{visitor.escape(language)}"'
            if language
            else ""
        )
        visitor.consume_html(f"<pre><code{class_attr}>")
        last_was_content = False
        for child in body:
            visitor.consume_html(trim_indents(leaf_text(text, child, visitor.escape), indent))
            last_was_content = child.type is TokenType.CODE_FENCE_CONTENT
        if last_was_content:
            visitor.consume_html("\n")
        visitor.consume_html("</code></pre>")


__all__ = [
    "AutolinkProvider",
    "CodeBlockProvider",
    "CodeFenceProvider",
    "CodeSpanProvider",
    "ImageProvider",
    "InlineLinkProvider",
    "LinkDestinationProvider",
    "LinkTarget",
    "ListItemProvider",
    "ReferenceLinkProvider",
    "collect_link_definitions",
    "destination_text",
    "is_loose_list",
    "link_target",
    "plain_text",
    "resolve_link",
]
