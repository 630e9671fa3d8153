"""Typed AST nodes for Subrayado.

All AST nodes are frozen dataclasses with slots for:
- Immutability: the tree is never mutated once the parser returns it
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Document
├── Paragraph
└── Inline
    ├── Text   (literal leaf, escapes resolved)
    └── Span   (ITALIC, BOLD or HEADER)

Spans are a closed tagged variant: one class carrying a TextType instead
of a subclass per type. Only resolved spans ever appear in a tree; a span
whose delimiters could not be matched is emitted as Text.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from subrayado.location import SourceLocation


class TextType(Enum):
    """Semantic category of a resolved span, independent of output markup."""

    ITALIC = "italic"
    BOLD = "bold"
    HEADER = "header"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track the source range they were built from.

    """

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text.

    Backslash escapes are already resolved: ``\\_`` is stored as ``_``.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Span(Node):
    """A resolved delimiter pair wrapping its children.

    Markup: _text_ (ITALIC), __text__ (BOLD), "# text" line (HEADER)

    The location covers both delimiters. For a header closed by a newline,
    the newline is part of the span.

    """

    text_type: TextType
    children: tuple[Inline, ...]

    def plain_text(self) -> str:
        """Concatenated literal content with all markup stripped."""
        return _plain_text(self.children)


type Inline = Text | Span


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """One newline-delimited run of source text.

    Attributes:
        children: Inline content in source order
        separator: The paragraph break that followed in the source ("\\n"),
            or "" for the final paragraph and for a header whose closing
            newline was consumed

    """

    children: tuple[Inline, ...]
    separator: str = ""

    def plain_text(self) -> str:
        """Concatenated literal content with all markup stripped."""
        return _plain_text(self.children)


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node: the paragraphs of a source buffer, in order."""

    children: tuple[Paragraph, ...]


def _plain_text(children: tuple[Inline, ...]) -> str:
    parts: list[str] = []
    stack = list(reversed(children))
    while stack:
        node = stack.pop()
        if isinstance(node, Text):
            parts.append(node.content)
        else:
            stack.extend(reversed(node.children))
    return "".join(parts)


__all__ = [
    "Document",
    "Inline",
    "Node",
    "Paragraph",
    "Span",
    "Text",
    "TextType",
]
