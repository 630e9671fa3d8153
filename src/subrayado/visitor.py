"""AST Visitor and Transformer for Subrayado.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen ASTs.

Example: collect all bold spans:

    class BoldCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.spans: list[Span] = []

        def visit_span(self, node: Span) -> None:
            if node.text_type is TextType.BOLD:
                self.spans.append(node)

    collector = BoldCollector()
    collector.visit(doc)

Example: demote italics to plain text:

    def drop_italic(node: Node) -> Node:
        if isinstance(node, Span) and node.text_type is TextType.ITALIC:
            return Text(location=node.location, content=node.plain_text())
        return node

    new_doc = transform(doc, drop_italic)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. The
    transform function is pure, safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable

from subrayado.nodes import Document, Node, Paragraph, Span, Text


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_span(self, node: Span) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Document():
                return self.visit_document(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case Span():
                return self.visit_span(node)
            case Text():
                return self.visit_text(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        match node:
            case Document(children=children) | Paragraph(children=children) | Span(
                children=children
            ):
                for child in children:
                    self.visit(child)
            case _:
                pass  # Text is a leaf


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied. The original tree
        is untouched.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    return fn(_transform_children(node, fn))


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    match node:
        case Document(children=children) | Paragraph(children=children) | Span(
            children=children
        ):
            new_children = tuple(
                result for c in children if (result := _transform_node(c, fn)) is not None
            )
            if new_children != children:
                return dataclasses.replace(node, children=new_children)
        case _:
            pass  # Leaf nodes: return as-is

    return node


__all__ = ["BaseVisitor", "transform"]
