"""Span resolution for Subrayado.

Turns the tokens of one paragraph into well-nested Span nodes over literal
text. Uses an explicit stack of pending openers instead of recursion; each
delimiter is pushed and popped at most once and each resolved span is
flattened back to text at most once, so resolution is O(n).

Rules, checked for every delimiter candidate in this order:

1. Digit squeeze: digits on both sides, the delimiter is literal.
2. Opening: the next character exists and is not whitespace.
3. Closing: the previous character exists and is not whitespace, and the
   span would not be empty.
4. Word scope: an opener preceded by a non-whitespace character is
   intraword and must close before the next whitespace.
5. Nesting: a span may only open if the innermost pending span lists its
   type in ``nests``. Inside ITALIC, ``__`` never opens.
6. Interleaving: a valid closer for a pending span that is not innermost
   discards that span and everything opened after it.
7. Paragraph end discards all pending inline spans. A pending block span
   (header) is closed by it instead.

A discarded span is not partially kept: its delimiters and everything up
to the point of discard are emitted as literal text, including any spans
already resolved inside it.

Thread Safety:
SpanResolver instances hold per-parse state. Create one per Parser.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from subrayado.charsets import contains_whitespace, is_boundary, is_digit_squeezed
from subrayado.config import TagDefinition
from subrayado.location import SourceLocation
from subrayado.nodes import Inline, Span, Text, TextType
from subrayado.tokens import DelimiterToken, EscapeToken, InlineToken, TextToken
from subrayado.utils.logger import get_logger

logger = get_logger(__name__)


class _Piece(NamedTuple):
    """Literal fragment awaiting merge into a Text node."""

    content: str
    offset: int
    end_offset: int


@dataclass(slots=True)
class PendingSpan:
    """An opener waiting for its closer.

    Attributes:
        tag: Definition of the span being built.
        opener: The delimiter token that opened it.
        intraword: Opened inside a word; must close before whitespace.
        children: Content collected so far (literal pieces and spans).

    """

    tag: TagDefinition
    opener: DelimiterToken
    intraword: bool
    children: list[_Piece | Span] = field(default_factory=list)


class ResolvedParagraph(NamedTuple):
    """Resolver output for one paragraph.

    Attributes:
        children: Inline nodes in source order.
        consumed_break: The paragraph break closed a header and must not be
            emitted again.

    """

    children: tuple[Inline, ...]
    consumed_break: bool


class SpanResolver:
    """Resolve delimiter candidates into a tree of spans.

    Usage:
            >>> from subrayado.config import DEFAULT_TAGS
            >>> from subrayado.scanner import Scanner
            >>> tokens = list(Scanner("_a_", DEFAULT_TAGS).tokenize())
            >>> resolver = SpanResolver(DEFAULT_TAGS)
            >>> resolver.resolve(tokens, end_offset=3).children[0].text_type
            <TextType.ITALIC: 'italic'>

    Thread Safety:
        Instances carry per-paragraph state and are not thread-safe.
        Each Parser creates its own.

    """

    __slots__ = (
        "_tags",
        "_source_file",
        "_lineno",
        "_paragraph_offset",
        "_stack",
        "_root",
    )

    def __init__(
        self,
        tags: Iterable[TagDefinition],
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            tags: Tag definitions the tokens were scanned with
            source_file: Optional source file path recorded in locations
        """
        self._tags: dict[TextType, TagDefinition] = {tag.text_type: tag for tag in tags}
        self._source_file = source_file
        self._lineno = 1
        self._paragraph_offset = 0
        self._stack: list[PendingSpan] = []
        self._root: list[_Piece | Span] = []

    def resolve(
        self,
        tokens: Iterable[InlineToken],
        end_offset: int,
        *,
        lineno: int = 1,
        paragraph_offset: int = 0,
        terminated: bool = False,
    ) -> ResolvedParagraph:
        """Resolve the tokens of a single paragraph.

        Args:
            tokens: Inline tokens of the paragraph, in source order
            end_offset: Offset where the paragraph ends (its newline, or
                the end of the source)
            lineno: Paragraph line number for locations
            paragraph_offset: Offset where the paragraph starts
            terminated: The paragraph is followed by a newline

        Returns:
            ResolvedParagraph with the inline children
        """
        self._lineno = lineno
        self._paragraph_offset = paragraph_offset
        self._stack = []
        self._root = []

        for token in tokens:
            match token:
                case TextToken():
                    self._on_text(token)
                case EscapeToken():
                    self._sink().append(_Piece(token.char, token.offset, token.end_offset))
                case DelimiterToken():
                    self._on_delimiter(token)

        return self._finish(end_offset, terminated)

    # =========================================================================
    # Token handlers
    # =========================================================================

    def _on_text(self, token: TextToken) -> None:
        stack = self._stack
        if stack and stack[-1].intraword and contains_whitespace(token.content):
            self._discard(self._lowest_intraword(), "word ended before a closer")
        self._sink().append(_Piece(token.content, token.offset, token.end_offset))

    def _on_delimiter(self, token: DelimiterToken) -> None:
        tag = token.tag

        if tag.block:
            self._stack.append(PendingSpan(tag, token, intraword=False))
            return

        if is_digit_squeezed(token.before, token.after):
            self._emit_literal(token)
            return

        if token.closes and not is_boundary(token.before):
            index = self._find_pending(tag.text_type)
            if index is not None:
                top = len(self._stack) - 1
                if index < top:
                    self._discard(index, f"{tag.text_type.name} closer interleaves a nested span")
                    self._emit_literal(token)
                    return
                if self._stack[top].children:
                    self._close(token)
                    return

        if token.opens and not is_boundary(token.after) and self._allows(tag.text_type):
            self._stack.append(
                PendingSpan(tag, token, intraword=not is_boundary(token.before))
            )
            return

        self._emit_literal(token)

    def _finish(self, end_offset: int, terminated: bool) -> ResolvedParagraph:
        stack = self._stack
        base = 1 if stack and stack[0].tag.block else 0
        if len(stack) > base:
            self._discard(base, "unclosed at paragraph end")

        consumed_break = False
        if stack:
            pending = stack.pop()
            span_end = end_offset + 1 if terminated else end_offset
            self._root.append(
                Span(
                    location=self._location(pending.opener.offset, span_end),
                    text_type=pending.tag.text_type,
                    children=self._finalize(pending.children),
                )
            )
            consumed_break = terminated

        return ResolvedParagraph(self._finalize(self._root), consumed_break)

    # =========================================================================
    # Stack operations
    # =========================================================================

    def _sink(self) -> list[_Piece | Span]:
        """Children list receiving new content."""
        return self._stack[-1].children if self._stack else self._root

    def _allows(self, text_type: TextType) -> bool:
        return not self._stack or self._stack[-1].tag.allows(text_type)

    def _find_pending(self, text_type: TextType) -> int | None:
        stack = self._stack
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].tag.text_type is text_type:
                return index
        return None

    def _lowest_intraword(self) -> int:
        # Intraword openers always form the top of the stack: whitespace
        # discards them before any boundary opener can be pushed.
        index = len(self._stack) - 1
        while index > 0 and self._stack[index - 1].intraword:
            index -= 1
        return index

    def _close(self, closer: DelimiterToken) -> None:
        pending = self._stack.pop()
        span = Span(
            location=self._location(pending.opener.offset, closer.end_offset),
            text_type=pending.tag.text_type,
            children=self._finalize(pending.children),
        )
        self._sink().append(span)

    def _discard(self, index: int, reason: str) -> None:
        """Turn pending spans from index upward back into literal text."""
        discarded = self._stack[index:]
        del self._stack[index:]

        sink = self._sink()
        for pending in discarded:
            opener = pending.opener
            sink.append(_Piece(opener.text, opener.offset, opener.end_offset))
            for child in pending.children:
                if isinstance(child, Span):
                    self._flatten(child, sink)
                else:
                    sink.append(child)

        logger.debug(
            "Discarded %d pending span(s) from offset %d: %s",
            len(discarded),
            discarded[0].opener.offset,
            reason,
        )

    def _flatten(self, span: Span, sink: list[_Piece | Span]) -> None:
        """Emit a resolved span as its literal source text."""
        tag = self._tags[span.text_type]
        loc = span.location
        sink.append(_Piece(tag.open_delimiter, loc.offset, loc.offset + len(tag.open_delimiter)))
        for child in span.children:
            if isinstance(child, Span):
                self._flatten(child, sink)
            else:
                sink.append(
                    _Piece(child.content, child.location.offset, child.location.end_offset)
                )
        sink.append(
            _Piece(tag.close_delimiter, loc.end_offset - len(tag.close_delimiter), loc.end_offset)
        )

    def _emit_literal(self, token: DelimiterToken) -> None:
        self._sink().append(_Piece(token.text, token.offset, token.end_offset))

    # =========================================================================
    # Node construction
    # =========================================================================

    def _finalize(self, children: list[_Piece | Span]) -> tuple[Inline, ...]:
        """Merge runs of literal pieces into Text nodes."""
        result: list[Inline] = []
        run: list[_Piece] = []
        for child in children:
            if isinstance(child, Span):
                if run:
                    result.append(self._text(run))
                    run = []
                result.append(child)
            else:
                run.append(child)
        if run:
            result.append(self._text(run))
        return tuple(result)

    def _text(self, run: list[_Piece]) -> Text:
        return Text(
            location=self._location(run[0].offset, run[-1].end_offset),
            content="".join(piece.content for piece in run),
        )

    def _location(self, offset: int, end_offset: int) -> SourceLocation:
        return SourceLocation(
            lineno=self._lineno,
            col_offset=offset - self._paragraph_offset + 1,
            offset=offset,
            end_offset=end_offset,
            source_file=self._source_file,
        )


__all__ = ["PendingSpan", "ResolvedParagraph", "SpanResolver"]
