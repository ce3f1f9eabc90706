#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_escape.py
"""Unit tests for Markdown escaping helpers."""

import pytest

from canonmark.utils.escape import count_unescaped_pipes, escape_line_start, escape_markdown, escape_table_cell


@pytest.mark.unit
class TestEscapeMarkdown:
    """Tests for context-aware inline escaping."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("plain text", "plain text"),
            ("a*b", "a\\*b"),
            ("[x]", "\\[x\\]"),
            ("back\\slash", "back\\\\slash"),
            ("`code`", "\\`code\\`"),
            ("snake_case", "snake_case"),
            ("_lead", "\\_lead"),
            ("trail_", "trail\\_"),
            ("a < b", "a < b"),
            ("<div>", "\\<div>"),
            ("</p>", "\\</p>"),
            ("a~b", "a~b"),
            ("~~x~~", "\\~\\~x\\~\\~"),
            ("AT&T", "AT&T"),
            ("&amp;", "\\&amp;"),
            ("&#42;", "\\&#42;"),
            ("# not escaped mid-text", "# not escaped mid-text"),
        ],
    )
    def test_escape(self, text, expected):
        assert escape_markdown(text) == expected


@pytest.mark.unit
class TestEscapeLineStart:
    """Tests for escaping block syntax at the start of a line."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("# heading", "\\# heading"),
            ("###", "\\###"),
            ("#hashtag", "#hashtag"),
            ("- item", "\\- item"),
            ("+ item", "\\+ item"),
            (": details", "\\: details"),
            ("-", "\\-"),
            ("1. item", "1\\. item"),
            ("2) item", "2\\) item"),
            ("2024. A year", "2024\\. A year"),
            ("3.14 is pi", "3.14 is pi"),
            ("> quote", "\\> quote"),
            ("===", "\\==="),
            ("---", "\\---"),
            ("- - -", "\\- - -"),
            ("~~~", "\\~~~"),
            ("plain", "plain"),
            ("", ""),
        ],
    )
    def test_escape_line_start(self, text, expected):
        assert escape_line_start(text) == expected


@pytest.mark.unit
class TestTableCellEscaping:
    """Tests for pipe handling in table cells."""

    def test_pipe_is_escaped(self):
        assert escape_table_cell("a|b") == "a\\|b"

    def test_escaped_pipe_is_kept(self):
        assert escape_table_cell("a\\|b") == "a\\|b"

    def test_pipe_after_escaped_backslash_is_escaped(self):
        assert escape_table_cell("a\\\\|b") == "a\\\\\\|b"

    def test_text_without_pipes(self):
        assert escape_table_cell("plain") == "plain"

    def test_count_unescaped_pipes(self):
        assert count_unescaped_pipes("| a | b\\|c |") == 3
        assert count_unescaped_pipes("no pipes") == 0
        assert count_unescaped_pipes("|`a|b`|") == 3
