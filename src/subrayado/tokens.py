"""Typed scanner tokens for Subrayado.

Uses NamedTuples for token representation, providing:
- Immutability by default
- Tuple unpacking support
- Lower memory footprint than dataclasses or dicts
- Faster attribute access (tuple index vs hash lookup)

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    from subrayado.tokens import DelimiterToken, TextToken

    match token:
        case DelimiterToken(text="__", before=before):
            print(f"Bold candidate after {before!r}")
        case TextToken(content=content):
            print(content)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, NamedTuple

if TYPE_CHECKING:
    from subrayado.config import TagDefinition


class TextToken(NamedTuple):
    """Run of ordinary characters.

    Attributes:
        content: The characters, verbatim.
        offset: Absolute offset of the first character.

    """

    content: str
    offset: int

    @property
    def type(self) -> Literal["text"]:
        """Token type identifier for dispatch."""
        return "text"

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.content)


class EscapeToken(NamedTuple):
    """Backslash escape; the backslash itself is consumed.

    Attributes:
        char: The escaped character, kept verbatim.
        offset: Absolute offset of the backslash.

    """

    char: str
    offset: int

    @property
    def type(self) -> Literal["escape"]:
        """Token type identifier for dispatch."""
        return "escape"

    @property
    def end_offset(self) -> int:
        return self.offset + 2


class DelimiterToken(NamedTuple):
    """Occurrence of a delimiter string that may open or close a span.

    Whether it actually does is decided by the resolver; the scanner only
    records what the matched text could be.

    Attributes:
        tag: Definition whose delimiter matched.
        text: The matched delimiter text.
        offset: Absolute offset of the delimiter.
        before: Raw character before the delimiter, "" at paragraph start.
        after: Raw character after the delimiter, "" at paragraph end.
        opens: The text is the tag's opening delimiter.
        closes: The text is the tag's closing delimiter.

    """

    tag: TagDefinition
    text: str
    offset: int
    before: str
    after: str
    opens: bool
    closes: bool

    @property
    def type(self) -> Literal["delimiter"]:
        """Token type identifier for dispatch."""
        return "delimiter"

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.text)


class ParagraphBreakToken(NamedTuple):
    """Newline ending a paragraph.

    Attributes:
        offset: Absolute offset of the newline.

    """

    offset: int

    @property
    def type(self) -> Literal["paragraph_break"]:
        """Token type identifier for dispatch."""
        return "paragraph_break"

    @property
    def end_offset(self) -> int:
        return self.offset + 1


# Tokens that may appear inside a paragraph
type InlineToken = TextToken | EscapeToken | DelimiterToken

type ScanToken = InlineToken | ParagraphBreakToken


__all__ = [
    "DelimiterToken",
    "EscapeToken",
    "InlineToken",
    "ParagraphBreakToken",
    "ScanToken",
    "TextToken",
]
