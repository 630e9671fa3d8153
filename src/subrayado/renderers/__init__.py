"""Subrayado renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML using StringBuilder pattern

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from subrayado.renderers.html import DEFAULT_TAG_NAMES, HtmlRenderer
from subrayado.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "DEFAULT_TAG_NAMES", "HtmlRenderer"]
