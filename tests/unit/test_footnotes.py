#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_footnotes.py
"""Unit tests for footnote placement.

Footnote definitions are collected wherever they appear and written at the
end of the section that first references them.

"""

import pytest
from utils import assert_idempotent, fmt

from canonmark.ast import Document, FootnoteDefinition, FootnoteReference, Heading, Paragraph, SourceLocation, Text
from canonmark.ast.visitors import collect_footnote_reference_lines, collect_footnote_reference_positions
from canonmark.renderers.markdown import CanonicalMarkdownRenderer


@pytest.mark.unit
class TestFootnotePlacement:
    """Tests for where footnote definitions end up."""

    def test_moved_before_next_section(self):
        source = "Section one text.[^1]\n\nSection Two\n-----------\n\nMore.\n\n[^1]: The note.\n"
        expected = "Section one text.[^1]\n\n[^1]: The note.\n\n\nSection Two\n-----------\n\nMore.\n"
        assert fmt(source) == expected

    def test_definition_before_reference(self):
        assert fmt("[^n]: Note first.\n\nBody[^n].\n") == "Body[^n].\n\n[^n]: Note first.\n"

    def test_ordered_by_first_reference(self):
        source = "First[^b].\n\nSecond[^a].\n\n[^a]: Alpha.\n\n[^b]: Beta.\n"
        assert fmt(source) == "First[^b].\n\nSecond[^a].\n\n[^b]: Beta.\n\n[^a]: Alpha.\n"

    def test_same_line_references_keep_reference_order(self):
        source = "A[^b] and[^a].\n\n[^a]: A.\n\n[^b]: B.\n"
        assert fmt(source) == "A[^b] and[^a].\n\n[^b]: B.\n\n[^a]: A.\n"

    def test_unreferenced_definitions_go_last(self):
        assert fmt("Text.\n\n[^u]: Unused.\n\nMore.\n") == "Text.\n\nMore.\n\n[^u]: Unused.\n"

    def test_flushed_per_section(self):
        source = (
            "Intro[^a].\n\nSection\n-------\n\nBody[^b].\n\n### Sub\n\nTail.\n\n"
            "[^b]: Bee.\n\n[^a]: Ay.\n"
        )
        expected = (
            "Intro[^a].\n\n[^a]: Ay.\n\n\nSection\n-------\n\nBody[^b].\n\n[^b]: Bee.\n\n"
            "### Sub\n\nTail.\n"
        )
        assert fmt(source) == expected

    def test_reference_on_continuation_line(self):
        source = "Line one\nline two[^1].\n\n## H\n\n[^1]: n\n"
        assert fmt(source) == "Line one line two[^1].\n\n[^1]: n\n\n\nH\n-\n"

    def test_multi_paragraph_definition(self):
        source = "Text[^n].\n\n[^n]: First para.\n\n    Second para.\n"
        assert fmt(source) == "Text[^n].\n\n[^n]: First para.\n\n    Second para.\n"

    def test_links_in_footnotes_stay_inline(self):
        source = "See[^1].\n\n[^1]: [x](https://x.com)\n"
        assert fmt(source, link_style="reference") == "See[^1].\n\n[^1]: [x](https://x.com)\n"

    @pytest.mark.parametrize(
        "source",
        [
            "Section one text.[^1]\n\nSection Two\n-----------\n\nMore.\n\n[^1]: The note.\n",
            "A[^x] and B[^y].\n\n[^y]: Why.\n\n[^x]: Ex.\n",
            "Text[^n].\n\n[^n]: First para.\n\n    Second para.\n",
        ],
    )
    def test_idempotent(self, source):
        assert_idempotent(source)


@pytest.mark.unit
class TestFootnoteReferenceLines:
    """Tests for collecting the first reference line of each footnote."""

    def test_first_reference_wins(self):
        doc = Document(
            children=[
                Paragraph(
                    content=[FootnoteReference(identifier="a", source_location=SourceLocation(line=5))],
                ),
                Paragraph(
                    content=[FootnoteReference(identifier="a", source_location=SourceLocation(line=2))],
                ),
            ]
        )
        assert collect_footnote_reference_lines(doc) == {"a": 2}

    def test_references_without_location_are_ignored(self):
        doc = Document(children=[Paragraph(content=[FootnoteReference(identifier="a")])])
        assert collect_footnote_reference_lines(doc) == {}

    def test_positions_rank_references_on_one_line(self):
        line = SourceLocation(line=3)
        doc = Document(
            children=[
                Paragraph(
                    content=[
                        FootnoteReference(identifier="b", source_location=line),
                        Text(content=" and "),
                        FootnoteReference(identifier="a", source_location=line),
                        FootnoteReference(identifier="b", source_location=line),
                    ],
                ),
            ]
        )
        assert collect_footnote_reference_positions(doc) == {"b": (3, 0), "a": (3, 1)}

    def test_rendering_without_locations_puts_footnotes_last(self):
        doc = Document(
            children=[
                FootnoteDefinition(identifier="1", content=[Paragraph(content=[Text(content="Note.")])]),
                Paragraph(content=[Text(content="Body"), FootnoteReference(identifier="1")]),
                Heading(level=2, content=[Text(content="Next")]),
            ]
        )
        result = CanonicalMarkdownRenderer().render_to_string(doc)
        assert result == "Body[^1]\n\n\nNext\n----\n\n[^1]: Note.\n"
