"""Paragraph-oriented parser producing a typed AST.

Consumes the token stream from Scanner, cuts it at paragraph breaks and
hands each paragraph to the SpanResolver. Produces immutable (frozen)
dataclass nodes.

Thread Safety:
- Parser instances are single-use
- Configuration is read from ContextVar (thread-local)
- The resulting AST is immutable and safe to share across threads

"""

from __future__ import annotations

from collections.abc import Iterable

from subrayado.config import TagDefinition, get_parse_config
from subrayado.location import SourceLocation
from subrayado.nodes import Paragraph
from subrayado.parsing import SpanResolver
from subrayado.scanner import Scanner
from subrayado.tokens import InlineToken, ParagraphBreakToken
from subrayado.utils.logger import get_logger

logger = get_logger(__name__)


class Parser:
    """Parser for the underscore markup dialect.

    Usage:
            >>> parser = Parser("# Hello\\n_World_")
            >>> paragraphs = parser.parse()
            >>> [p.separator for p in paragraphs]
            ['', '']

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Tag definitions default to the active ParseConfig.

    """

    __slots__ = ("_source", "_source_file", "_tags")

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        tags: Iterable[TagDefinition] | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Source text
            source_file: Optional source file path recorded in locations
            tags: Tag definitions to recognise. Defaults to the tags of the
                config set via set_parse_config() or parse_config_context().

        """
        self._source = source
        self._source_file = source_file
        self._tags = tuple(tags) if tags is not None else get_parse_config().tags

    def parse(self) -> tuple[Paragraph, ...]:
        """Parse the source into paragraphs.

        Returns:
            One Paragraph per newline-delimited line, in order
        """
        resolver = SpanResolver(self._tags, source_file=self._source_file)
        paragraphs: list[Paragraph] = []
        pending: list[InlineToken] = []
        start = 0

        for token in Scanner(self._source, self._tags).tokenize():
            if isinstance(token, ParagraphBreakToken):
                paragraphs.append(
                    self._paragraph(resolver, pending, len(paragraphs) + 1, start, token.offset, True)
                )
                pending = []
                start = token.end_offset
            else:
                pending.append(token)

        paragraphs.append(
            self._paragraph(resolver, pending, len(paragraphs) + 1, start, len(self._source), False)
        )

        logger.debug(
            "Parsed %d paragraph(s) from %d characters",
            len(paragraphs),
            len(self._source),
        )
        return tuple(paragraphs)

    def _paragraph(
        self,
        resolver: SpanResolver,
        tokens: list[InlineToken],
        lineno: int,
        start: int,
        end: int,
        terminated: bool,
    ) -> Paragraph:
        resolved = resolver.resolve(
            tokens,
            end,
            lineno=lineno,
            paragraph_offset=start,
            terminated=terminated,
        )
        separator = "\n" if terminated and not resolved.consumed_break else ""
        return Paragraph(
            location=SourceLocation(
                lineno=lineno,
                col_offset=1,
                offset=start,
                end_offset=end,
                source_file=self._source_file,
            ),
            children=resolved.children,
            separator=separator,
        )


__all__ = ["Parser"]
