"""
Subrayado: underscore markup to HTML for Python

Converts a small paragraph-oriented dialect into a typed, immutable AST
and renders it to HTML (or any markup, via a tag-name mapping):

    _italic_   __bold__   # header   \\_ (escape)

Spans never cross a newline. Anything that does not form a lawful span
stays literal text; parsing never fails and always runs in O(n).

Quick Start:
    >>> from subrayado import parse, render
    >>> doc = parse("__word _word_ word__")
    >>> render(doc)
    '<strong>word <em>word</em> word</strong>'

    >>> # Or use the high-level Markdown class
    >>> from subrayado import Markdown
    >>> md = Markdown()
    >>> md("# header _header_")
    '<h1>header <em>header</em></h1>'

Custom configuration:
    >>> from subrayado import TagDefinition, TextType
    >>> strike = TagDefinition("~~", "~~", TextType.BOLD)
    >>> md = Markdown(tags=[strike], tag_names={TextType.BOLD: "del"})
    >>> md("~~gone~~")
    '<del>gone</del>'

"""

from collections.abc import Iterable, Mapping

from subrayado.config import (
    BOLD_TAG,
    DEFAULT_TAGS,
    HEADER_TAG,
    ITALIC_TAG,
    ParseConfig,
    TagDefinition,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from subrayado.errors import (
    RenderError,
    SubrayadoError,
    TagDefinitionError,
    UnknownTextTypeError,
)
from subrayado.location import SourceLocation
from subrayado.nodes import Document, Inline, Node, Paragraph, Span, Text, TextType
from subrayado.parser import Parser
from subrayado.renderers.html import DEFAULT_TAG_NAMES, HtmlRenderer
from subrayado.renderers.protocol import ASTRenderer
from subrayado.scanner import Scanner
from subrayado.serialization import from_dict, from_json, to_dict, to_json
from subrayado.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def _config_for(tags: Iterable[TagDefinition] | None) -> ParseConfig:
    if tags is None:
        return get_parse_config()
    return ParseConfig(tags=tuple(tags))


def _document(source: str, paragraphs: tuple[Paragraph, ...], source_file: str | None) -> Document:
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    return Document(location=loc, children=paragraphs)


def parse(
    source: str,
    *,
    tags: Iterable[TagDefinition] | None = None,
    source_file: str | None = None,
) -> Document:
    """Parse source text into a typed AST.

    Args:
        source: Source text
        tags: Tag definitions to recognise (active config if None)
        source_file: Optional source file path recorded in locations

    Returns:
        Document AST root node

    Raises:
        TagDefinitionError: If tags is not a valid configuration

    Example:
        >>> doc = parse("_Hello_")
        >>> doc.children[0].children[0].text_type
        <TextType.ITALIC: 'italic'>
    """
    config = _config_for(tags)
    with parse_config_context(config):
        paragraphs = Parser(source, source_file=source_file).parse()
    return _document(source, paragraphs, source_file)


def render(doc: Document, *, tag_names: Mapping[TextType, str] | None = None) -> str:
    """Render an AST Document to HTML.

    Args:
        doc: Document AST to render
        tag_names: TextType to tag name mapping (DEFAULT_TAG_NAMES if None)

    Raises:
        UnknownTextTypeError: A span's text type has no tag name
    """
    return HtmlRenderer(tag_names).render(doc)


def markdown(
    source: str,
    *,
    tags: Iterable[TagDefinition] | None = None,
    renderer: ASTRenderer | None = None,
) -> str:
    """Parse and render in one call.

    Args:
        source: Source text
        tags: Tag definitions to recognise (defaults if None)
        renderer: Renderer for the resulting tree (HtmlRenderer if None)

    Returns:
        Rendered string, paragraph structure preserved

    Example:
        >>> markdown("word_12_")
        'word<em>12</em>'
    """
    doc = parse(source, tags=tags)
    return (renderer or HtmlRenderer()).render(doc)


class Markdown:
    """High-level processor combining parser and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("_word word_")
        '<em>word word</em>'

        >>> # Access the AST
        >>> doc = md.parse("# Heading")
        >>> doc.children[0].children[0].text_type
        <TextType.HEADER: 'header'>

    Thread Safety:
        Holds only immutable configuration. Each call sets the config via
        ContextVar (thread-local) for the duration of the parse, so one
        instance can be shared across threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        tags: Iterable[TagDefinition] | None = None,
        tag_names: Mapping[TextType, str] | None = None,
        renderer: ASTRenderer | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            tags: Tag definitions to recognise (DEFAULT_TAGS if None)
            tag_names: TextType to tag name mapping for the default
                HtmlRenderer; ignored when renderer is given
            renderer: Custom renderer

        Raises:
            TagDefinitionError: If tags is not a valid configuration
        """
        self._config = ParseConfig(tags=tuple(tags)) if tags is not None else ParseConfig()
        self._renderer: ASTRenderer = renderer or HtmlRenderer(tag_names)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call."""
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse source into AST.

        Sets config for this parse (thread-local via ContextVar) and
        restores the previous one afterwards.
        """
        with parse_config_context(self._config):
            paragraphs = Parser(source, source_file=source_file).parse()
        return _document(source, paragraphs, source_file)

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple sources, setting the config once for the batch.

        Example:
            >>> md = Markdown()
            >>> docs = md.parse_many(["_a_", "__b__"])
            >>> len(docs)
            2
        """
        with parse_config_context(self._config):
            return [
                _document(source, Parser(source, source_file=source_file).parse(), source_file)
                for source in sources
            ]

    def render(self, doc: Document) -> str:
        """Render AST with this processor's renderer."""
        return self._renderer.render(doc)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "markdown",
    "Markdown",
    # Nodes
    "Node",
    "Document",
    "Paragraph",
    "Inline",
    "Span",
    "Text",
    "TextType",
    "SourceLocation",
    # Configuration
    "TagDefinition",
    "ITALIC_TAG",
    "BOLD_TAG",
    "HEADER_TAG",
    "DEFAULT_TAGS",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Pipeline components
    "Scanner",
    "Parser",
    # Renderers
    "ASTRenderer",
    "HtmlRenderer",
    "DEFAULT_TAG_NAMES",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Errors
    "SubrayadoError",
    "TagDefinitionError",
    "RenderError",
    "UnknownTextTypeError",
]
