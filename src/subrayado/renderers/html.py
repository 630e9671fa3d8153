"""HTML renderer using StringBuilder pattern.

Renders the typed AST to HTML with O(n) performance. Output syntax is not
hardcoded: each span is wrapped in the tag name its TextType maps to.

Thread Safety:
All per-render state is local to the render() call. Multiple threads can
safely share a single HtmlRenderer instance and call render() concurrently.
"""

import html
import logging
from collections.abc import Mapping
from types import MappingProxyType

from subrayado.errors import UnknownTextTypeError
from subrayado.nodes import Document, Inline, Paragraph, Span, Text, TextType
from subrayado.stringbuilder import StringBuilder

logger = logging.getLogger(__name__)

DEFAULT_TAG_NAMES: Mapping[TextType, str] = MappingProxyType(
    {
        TextType.ITALIC: "em",
        TextType.BOLD: "strong",
        TextType.HEADER: "h1",
    }
)


def html_escape(s: str) -> str:
    """Escape HTML special characters (&, <, >), leaving quotes alone."""
    return html.escape(s, quote=False)


class HtmlRenderer:
    """Render AST to HTML using StringBuilder pattern.

    Usage:
        >>> from subrayado import parse
        >>> HtmlRenderer().render(parse("__Hello__"))
        '<strong>Hello</strong>'

        >>> renderer = HtmlRenderer({TextType.ITALIC: "i", TextType.BOLD: "b", TextType.HEADER: "h2"})
        >>> renderer.render(parse("_Hello_"))
        '<i>Hello</i>'

    Literal text is written as-is unless ``escape=True``; the dialect has
    no notion of HTML, so text without markup renders unchanged.

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.

    """

    __slots__ = ("_tag_names", "_escape")

    def __init__(
        self,
        tag_names: Mapping[TextType, str] | None = None,
        *,
        escape: bool = False,
    ) -> None:
        """Initialize renderer.

        Args:
            tag_names: TextType to tag name mapping (DEFAULT_TAG_NAMES if None)
            escape: HTML-escape literal text
        """
        names = tag_names if tag_names is not None else DEFAULT_TAG_NAMES
        self._tag_names = MappingProxyType(dict(names))
        self._escape = escape

    @property
    def tag_names(self) -> Mapping[TextType, str]:
        return self._tag_names

    def render(self, node: Document) -> str:
        """Render document AST to an HTML string.

        Args:
            node: Document AST root

        Returns:
            HTML string

        Raises:
            UnknownTextTypeError: A span's text type has no tag name. No
                partial output is returned.
        """
        sb = StringBuilder()
        for paragraph in node.children:
            self._render_paragraph(paragraph, sb)
        return sb.build()

    def wrap(self, text_type: TextType, content: str) -> str:
        """Wrap already rendered content in the tag for text_type."""
        tag = self._tag_name(text_type)
        return f"<{tag}>{content}</{tag}>"

    def _tag_name(self, text_type: TextType) -> str:
        try:
            return self._tag_names[text_type]
        except KeyError:
            logger.debug("No tag name for %s; known: %s", text_type, list(self._tag_names))
            raise UnknownTextTypeError(text_type) from None

    def _render_paragraph(self, para: Paragraph, sb: StringBuilder) -> None:
        self._render_inlines(para.children, sb)
        sb.append(para.separator)

    def _render_inlines(self, children: tuple[Inline, ...], sb: StringBuilder) -> None:
        for child in children:
            match child:
                case Text(content=content):
                    sb.append(html_escape(content) if self._escape else content)
                case Span(text_type=text_type, children=nested):
                    inner = StringBuilder()
                    self._render_inlines(nested, inner)
                    sb.append(self.wrap(text_type, inner.build()))
