"""Typed AST: collect every bold phrase with its source position."""

from subrayado import parse
from subrayado.nodes import Span, TextType
from subrayado.visitor import BaseVisitor


class BoldCollector(BaseVisitor[None]):
    """Collect bold spans in document order."""

    def __init__(self) -> None:
        self.phrases: list[tuple[str, str]] = []

    def visit_span(self, node: Span) -> None:
        if node.text_type is TextType.BOLD:
            self.phrases.append((str(node.location), node.plain_text()))


source = """# Release __notes__
__Breaking__: the _old_ flag is gone.
Upgrade with __care and _patience_ please__.
"""

collector = BoldCollector()
collector.visit(parse(source, source_file="NOTES.txt"))

for where, text in collector.phrases:
    print(f"{where}  {text}")
