"""Single-pass scanner with O(n) guaranteed performance.

Walks the source once, left to right, and classifies every position as
ordinary text, a backslash escape, a delimiter candidate, or a paragraph
break. Consumed characters are never revisited.

Delimiters are matched longest-first: at a position where both ``__`` and
``_`` match, ``__`` wins. Block delimiters (``# ``) are only tried at the
start of a paragraph.

No regex in the hot path.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from subrayado.charsets import BACKSLASH, PARAGRAPH_BREAK
from subrayado.config import TagDefinition
from subrayado.tokens import (
    DelimiterToken,
    EscapeToken,
    ParagraphBreakToken,
    ScanToken,
    TextToken,
)

# (delimiter text, tag, opens, closes)
type _Matcher = tuple[str, TagDefinition, bool, bool]


def build_matchers(tags: Iterable[TagDefinition]) -> dict[str, list[_Matcher]]:
    """Index inline delimiters by first character, longest first.

    The first definition to register a delimiter string owns it. A tag
    whose opening and closing delimiters are equal yields one matcher that
    can both open and close.
    """
    by_text: dict[str, _Matcher] = {}
    for tag in tags:
        if tag.block:
            continue
        for text in (tag.open_delimiter, tag.close_delimiter):
            if text not in by_text:
                by_text[text] = (
                    text,
                    tag,
                    text == tag.open_delimiter,
                    text == tag.close_delimiter,
                )

    matchers: dict[str, list[_Matcher]] = {}
    for matcher in by_text.values():
        matchers.setdefault(matcher[0][0], []).append(matcher)
    for candidates in matchers.values():
        candidates.sort(key=lambda m: len(m[0]), reverse=True)
    return matchers


def escapable_chars(tags: Iterable[TagDefinition]) -> frozenset[str]:
    """Characters a backslash can escape: delimiter starts plus backslash."""
    chars = {BACKSLASH}
    for tag in tags:
        chars.add(tag.open_delimiter[0])
        chars.add(tag.close_delimiter[0])
    chars.discard(PARAGRAPH_BREAK)
    return frozenset(chars)


class Scanner:
    """Tokenizer for the underscore markup dialect.

    Usage:
            >>> from subrayado.config import DEFAULT_TAGS
            >>> for token in Scanner("a _b_", DEFAULT_TAGS).tokenize():
            ...     print(token.type, token.offset)
            text 0
            delimiter 2
            text 3
            delimiter 4

    Thread Safety:
        Scanner instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_matchers",
        "_block_tags",
        "_escapable",
    )

    def __init__(self, source: str, tags: Iterable[TagDefinition]) -> None:
        """Initialize scanner.

        Args:
            source: Text to scan
            tags: Tag definitions whose delimiters are recognised
        """
        tags = tuple(tags)
        self._source = source
        self._matchers = build_matchers(tags)
        self._block_tags = sorted(
            (tag for tag in tags if tag.block),
            key=lambda t: len(t.open_delimiter),
            reverse=True,
        )
        self._escapable = escapable_chars(tags)

    def tokenize(self) -> Iterator[ScanToken]:
        """Yield tokens for the whole source in one forward pass."""
        source = self._source
        length = len(source)
        matchers = self._matchers
        escapable = self._escapable

        pos = 0
        paragraph_start = 0
        text_start = -1

        while pos < length:
            char = source[pos]

            if char == PARAGRAPH_BREAK:
                if text_start >= 0:
                    yield TextToken(source[text_start:pos], text_start)
                    text_start = -1
                yield ParagraphBreakToken(pos)
                pos += 1
                paragraph_start = pos
                continue

            if pos == paragraph_start and self._block_tags:
                block = self._match_block(pos)
                if block is not None:
                    yield block
                    pos = block.end_offset
                    continue

            if char == BACKSLASH:
                escaped = source[pos + 1] if pos + 1 < length else ""
                if escaped and escaped in escapable:
                    if text_start >= 0:
                        yield TextToken(source[text_start:pos], text_start)
                        text_start = -1
                    yield EscapeToken(escaped, pos)
                    pos += 2
                    continue

            candidates = matchers.get(char)
            if candidates:
                token = self._match_inline(candidates, pos, paragraph_start)
                if token is not None:
                    if text_start >= 0:
                        yield TextToken(source[text_start:pos], text_start)
                        text_start = -1
                    yield token
                    pos = token.end_offset
                    continue

            if text_start < 0:
                text_start = pos
            pos += 1

        if text_start >= 0:
            yield TextToken(source[text_start:], text_start)

    def _match_block(self, pos: int) -> DelimiterToken | None:
        source = self._source
        for tag in self._block_tags:
            if source.startswith(tag.open_delimiter, pos):
                end = pos + len(tag.open_delimiter)
                return DelimiterToken(
                    tag=tag,
                    text=tag.open_delimiter,
                    offset=pos,
                    before="",
                    after=self._char_after(end),
                    opens=True,
                    closes=False,
                )
        return None

    def _match_inline(
        self, candidates: list[_Matcher], pos: int, paragraph_start: int
    ) -> DelimiterToken | None:
        source = self._source
        for text, tag, opens, closes in candidates:
            if source.startswith(text, pos):
                return DelimiterToken(
                    tag=tag,
                    text=text,
                    offset=pos,
                    before=source[pos - 1] if pos > paragraph_start else "",
                    after=self._char_after(pos + len(text)),
                    opens=opens,
                    closes=closes,
                )
        return None

    def _char_after(self, end: int) -> str:
        if end < len(self._source):
            char = self._source[end]
            if char != PARAGRAPH_BREAK:
                return char
        return ""


__all__ = ["Scanner", "build_matchers", "escapable_chars"]
