"""Immutable AST transform: turn italics into plain text."""

from subrayado import parse, render, transform
from subrayado.nodes import Node, Span, Text, TextType


def demote_italic(node: Node) -> Node:
    if isinstance(node, Span) and node.text_type is TextType.ITALIC:
        return Text(location=node.location, content=node.plain_text())
    return node


doc = parse("# _Quiet_ title\n__bold with _italic_ inside__")
new_doc = transform(doc, demote_italic)

print("Original:")
print(render(doc))
print()
print("Without italics:")
print(render(new_doc))
