"""Node type tags for marktree syntax trees.

Two closed enumerations describe every node a tree may contain:

- ElementType: composite Markdown constructs (paragraphs, lists, links, ...)
- TokenType: lexical tokens, mostly leaves (text, whitespace, delimiters)

A few token types (ATX_CONTENT, SETEXT_CONTENT) label composite nodes that
group the inline tokens of a heading line. Both enums share names on purpose
(``ElementType.EMPH`` is the emphasis span, ``TokenType.EMPH`` one of its
``*``/``_`` markers); lookups always compare enum members, never names.

Thread Safety:
Enums are inherently immutable and safe to share across threads.

"""

from enum import Enum, auto


class ElementType(Enum):
    """Composite Markdown constructs.

    Organized by category:
    - Document and block containers
    - Headings
    - Code
    - Inline spans
    - Links and images

    """

    # Document and block containers
    MARKDOWN_FILE = auto()
    PARAGRAPH = auto()
    BLOCK_QUOTE = auto()
    ORDERED_LIST = auto()
    UNORDERED_LIST = auto()
    LIST_ITEM = auto()

    # Headings
    SETEXT_1 = auto()  # Title\n=====
    SETEXT_2 = auto()  # Title\n-----
    ATX_1 = auto()  # # Title
    ATX_2 = auto()
    ATX_3 = auto()
    ATX_4 = auto()
    ATX_5 = auto()
    ATX_6 = auto()

    # Code
    CODE_BLOCK = auto()  # 4-space indented
    CODE_FENCE = auto()  # ``` or ~~~
    CODE_SPAN = auto()  # `code`

    # Inline spans
    EMPH = auto()  # *text*
    STRONG = auto()  # **text**
    STRIKETHROUGH = auto()  # ~~text~~

    # Links and images
    INLINE_LINK = auto()  # [text](url "title")
    LINK_TEXT = auto()  # [text]
    LINK_DESTINATION = auto()  # url or <url>
    LINK_TITLE = auto()  # "title"
    LINK_LABEL = auto()  # [label]
    LINK_DEFINITION = auto()  # [label]: url "title"
    FULL_REFERENCE_LINK = auto()  # [text][label]
    SHORT_REFERENCE_LINK = auto()  # [label]
    AUTOLINK = auto()  # <http://example.com>
    IMAGE = auto()  # ![alt](url)


class TokenType(Enum):
    """Lexical tokens produced by a Markdown lexer."""

    # Text
    TEXT = auto()
    WHITE_SPACE = auto()
    EOL = auto()

    # Block markers
    BLOCK_QUOTE = auto()  # >
    LIST_BULLET = auto()  # -, *, +
    LIST_NUMBER = auto()  # 1. or 1)
    HORIZONTAL_RULE = auto()  # ---, ***, ___

    # Headings
    ATX_HEADER = auto()  # leading #'s
    ATX_CONTENT = auto()  # text after the #'s
    SETEXT_CONTENT = auto()  # text above the underline
    SETEXT_1 = auto()  # ===
    SETEXT_2 = auto()  # ---

    # Inline delimiters
    EMPH = auto()  # * or _
    TILDE = auto()  # ~
    BACKTICK = auto()  # `
    LT = auto()  # <
    GT = auto()  # >
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COLON = auto()  # :
    EXCLAMATION_MARK = auto()  # !
    DOUBLE_QUOTE = auto()  # "
    SINGLE_QUOTE = auto()  # '

    # Links
    URL = auto()
    AUTOLINK = auto()

    # Raw HTML
    HTML_BLOCK = auto()
    HTML_TAG = auto()

    # Code
    CODE_LINE = auto()
    CODE_FENCE_START = auto()
    CODE_FENCE_END = auto()
    CODE_FENCE_CONTENT = auto()
    FENCE_LANG = auto()


type NodeType = ElementType | TokenType


def type_name(node_type: NodeType) -> str:
    """Qualified, unambiguous name of a node type (e.g. ``"token:EMPH"``)."""
    prefix = "element" if isinstance(node_type, ElementType) else "token"
    return f"{prefix}:{node_type.name}"


def parse_type_name(name: str) -> NodeType:
    """Inverse of :func:`type_name`.

    Raises:
        ValueError: If the prefix or member name is unknown.
    """
    prefix, _, member = name.partition(":")
    enum_cls: type[ElementType] | type[TokenType]
    if prefix == "element":
        enum_cls = ElementType
    elif prefix == "token":
        enum_cls = TokenType
    else:
        msg = f"Unknown node type prefix in {name!r}"
        raise ValueError(msg)
    try:
        return enum_cls[member]
    except KeyError:
        msg = f"Unknown node type: {name!r}"
        raise ValueError(msg) from None


__all__ = ["ElementType", "NodeType", "TokenType", "parse_type_name", "type_name"]
