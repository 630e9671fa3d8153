"""Tests for SpanResolver: tree shape, locations and literal fallback."""

from __future__ import annotations

import logging

import pytest

from subrayado import parse
from subrayado.config import DEFAULT_TAGS, TagDefinition
from subrayado.nodes import Paragraph, Span, Text, TextType
from subrayado.parsing import SpanResolver
from subrayado.scanner import Scanner


def para(source: str) -> Paragraph:
    doc = parse(source)
    assert len(doc.children) == 1
    return doc.children[0]


def shape(node: Text | Span) -> object:
    """Compact structural view: text as str, spans as (TYPE, [children])."""
    if isinstance(node, Text):
        return node.content
    return (node.text_type.name, [shape(c) for c in node.children])


def shapes(source: str) -> list[object]:
    return [shape(c) for c in para(source).children]


class TestTreeShape:
    """Nodes produced for well-formed input."""

    def test_italic_inside_bold(self) -> None:
        assert shapes("__a _b_ c__") == [("BOLD", ["a ", ("ITALIC", ["b"]), " c"])]

    def test_header_with_both(self) -> None:
        assert shapes("# x __y__ _z_") == [
            ("HEADER", ["x ", ("BOLD", ["y"]), " ", ("ITALIC", ["z"])])
        ]

    def test_italic_in_bold_in_header(self) -> None:
        assert shapes("# __a _b_ c__") == [
            ("HEADER", [("BOLD", ["a ", ("ITALIC", ["b"]), " c"])])
        ]

    def test_adjacent_text_is_merged(self) -> None:
        assert shapes("a\\_b\\\\c") == ["a_b\\c"]

    def test_sibling_spans(self) -> None:
        assert shapes("_a_ _b_") == [("ITALIC", ["a"]), " ", ("ITALIC", ["b"])]

    def test_empty_header(self) -> None:
        assert shapes("# ") == [("HEADER", [])]


class TestLiteralFallback:
    """Discarded spans become literal text, nested spans included."""

    def test_unclosed_bold_flattens_nested_italic(self) -> None:
        assert shapes("__a _b_ c") == ["__a _b_ c"]

    def test_interleaved_region_is_literal_and_rest_resolves(self) -> None:
        assert shapes("__a _b__ c_ _d_") == ["__a _b__ c_ ", ("ITALIC", ["d"])]

    def test_intraword_opener_discarded_at_space(self) -> None:
        assert shapes("a_b c _d_") == ["a_b c ", ("ITALIC", ["d"])]

    def test_intraword_discard_flattens_closed_span(self) -> None:
        assert shapes("a__b_c_d e") == ["a__b_c_d e"]

    def test_closer_prefers_closing_over_opening(self) -> None:
        assert shapes("_a_b_") == [("ITALIC", ["a"]), "b_"]

    def test_italic_cannot_nest_in_italic(self) -> None:
        assert shapes("_a _b_") == [("ITALIC", ["a _b"])]

    def test_bold_cannot_nest_in_bold(self) -> None:
        assert shapes("__a __b__") == [("BOLD", ["a __b"])]

    def test_triple_underscore_is_literal(self) -> None:
        """Longest match pairs the runs as "__" + "_", which interleave."""
        assert shapes("___a___") == ["___a___"]

    def test_interleave_inside_header_keeps_header(self) -> None:
        assert shapes("# __a _b__ c_") == [("HEADER", ["__a _b__ c_"])]


class TestLocations:
    """Source ranges on resolved nodes."""

    def test_span_covers_delimiters(self) -> None:
        span = para("xx__ab__").children[1]
        assert isinstance(span, Span)
        assert (span.location.offset, span.location.end_offset) == (2, 8)
        assert span.location.col_offset == 3

    def test_text_location_in_second_paragraph(self) -> None:
        doc = parse("one\n_two_")
        span = doc.children[1].children[0]
        assert span.location.lineno == 2
        assert span.location.col_offset == 1
        assert span.location.offset == 4
        text = span.children[0]
        assert (text.location.offset, text.location.end_offset) == (5, 8)

    def test_header_consumes_newline(self) -> None:
        doc = parse("# a\nb")
        header = doc.children[0].children[0]
        assert (header.location.offset, header.location.end_offset) == (0, 4)
        assert doc.children[0].separator == ""

    def test_header_at_end_of_input(self) -> None:
        header = para("# a").children[0]
        assert header.location.end_offset == 3

    def test_every_span_is_non_empty_range(self) -> None:
        doc = parse("__a _b___ w_x_ # c\n# _d_ __e__")
        stack = [c for p in doc.children for c in p.children]
        while stack:
            node = stack.pop()
            if isinstance(node, Span):
                assert node.location.offset < node.location.end_offset
                stack.extend(node.children)


class TestResolverDirect:
    """Driving the resolver without the parser."""

    def test_resolve_is_reusable(self) -> None:
        resolver = SpanResolver(DEFAULT_TAGS)
        first = resolver.resolve(Scanner("__a", DEFAULT_TAGS).tokenize(), end_offset=3)
        second = resolver.resolve(Scanner("_b_", DEFAULT_TAGS).tokenize(), end_offset=3)
        assert [c.content for c in first.children] == ["__a"]
        assert second.children[0].text_type is TextType.ITALIC

    def test_custom_nesting_table(self) -> None:
        """A bold that allows nothing leaves inner italics literal."""
        tags = (
            TagDefinition("_", "_", TextType.ITALIC, nests=frozenset({TextType.BOLD})),
            TagDefinition("__", "__", TextType.BOLD),
        )
        doc = parse("__a _b_ c__ _d __e__ f_", tags=tags)
        assert [shape(c) for c in doc.children[0].children] == [
            ("BOLD", ["a _b_ c"]),
            " ",
            ("ITALIC", ["d ", ("BOLD", ["e"]), " f"]),
        ]

    def test_discard_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="subrayado"):
            parse("_never closed")
        assert any("unclosed at paragraph end" in r.getMessage() for r in caplog.records)
