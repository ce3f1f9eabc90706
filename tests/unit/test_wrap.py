#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_wrap.py
"""Unit tests for the greedy word wrapper."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from canonmark.utils.wrap import PROTECTED_SPACE, opens_block, wrap_text, wrap_text_first_line


@pytest.mark.unit
class TestWrapText:
    """Tests for wrap_text and wrap_text_first_line."""

    def test_short_text_is_unchanged(self):
        assert wrap_text("a short line", "", 80) == "a short line"

    def test_greedy_fill(self):
        assert wrap_text_first_line("alpha beta gamma", "", "  ", 11) == "alpha beta\n  gamma"

    def test_word_longer_than_width_is_not_split(self):
        long_word = "x" * 50
        assert wrap_text(f"a {long_word} b", "", 20) == f"a\n{long_word}\nb"

    def test_whitespace_is_collapsed(self):
        assert wrap_text("one   two\tthree", "", 80) == "one two three"

    def test_prefix_applies_to_every_line(self):
        assert wrap_text("aaa bbb ccc", "> ", 9) == "> aaa bbb\n> ccc"

    def test_initial_column_counts_against_first_line(self):
        result = wrap_text_first_line("aaa bbb", "", "    ", 8, initial_column=4)
        assert result == "aaa\n    bbb"

    def test_hard_break_starts_continuation_line(self):
        assert wrap_text("one\\\ntwo", "> ", 80) == "> one\\\n> two"

    def test_protected_space_never_breaks(self):
        assert wrap_text(f"aa b{PROTECTED_SPACE}c", "", 4) == "aa\nb c"

    def test_word_before_block_opener_moves_down(self):
        assert wrap_text("aaaa bbbb 1. cc", "", 11) == "aaaa\nbbbb 1. cc"

    def test_several_openers_move_down_together(self):
        assert wrap_text("aaaa bb - # cc", "", 9) == "aaaa\nbb - # cc"

    def test_lone_block_opener_is_escaped(self):
        assert wrap_text("word - item", "", 5) == "word\n\\-\nitem"

    def test_ordered_marker_is_escaped(self):
        assert wrap_text("chapter 12. next", "", 10) == "chapter\n12\\. next"

    def test_unescapable_opener_gets_backslash(self):
        assert wrap_text("word * item", "", 5) == "word\n\\*\nitem"

    def test_carried_line_respects_continuation_prefix(self):
        result = wrap_text_first_line("aaaa bbbbbb >", "", "    ", 11)
        assert all(len(line) <= 11 for line in result.split("\n"))
        assert result == "aaaa bbbbbb\n    \\>"

    def test_trailing_whitespace_is_stripped(self):
        assert wrap_text("text", "> ", 80) == "> text"
        assert wrap_text("", "> ", 80) == ">"

    @given(
        words=st.lists(st.text(alphabet="abcdefghij", min_size=1, max_size=10), min_size=1, max_size=60),
        width=st.integers(min_value=20, max_value=100),
    )
    def test_lines_never_exceed_width(self, words, width):
        result = wrap_text(" ".join(words), "", width)
        assert all(len(line) <= width for line in result.split("\n"))
        assert result.split() == words

    @given(
        words=st.lists(st.sampled_from(["alpha", "beta", "gamma", "-", "+", "1.", "2)", "#", "##", ">", "==", "--"]),
                       min_size=1, max_size=60),
        width=st.integers(min_value=20, max_value=100),
    )
    def test_openers_never_start_a_line_or_overflow(self, words, width):
        lines = wrap_text(" ".join(words), "", width).split("\n")
        assert all(len(line) <= width for line in lines)
        assert not any(opens_block(line.split()[0]) for line in lines[1:])
        assert [word.lstrip("\\").replace("\\", "") for line in lines for word in line.split()] == words


@pytest.mark.unit
class TestOpensBlock:
    """Tests for the block-opener check used by the wrapper."""

    @pytest.mark.parametrize(
        "word",
        ["-", "+", "*", ":", "#", "######", "1.", "12)", "===", "---", "***", "___", ">", ">quote", "```", "~~~py",
         "<div>", "<!--", "[^1]:"],
    )
    def test_openers(self, word):
        assert opens_block(word)

    @pytest.mark.parametrize("word", ["word", "#######", "1.5", "a-b", "<span>", "1234567890.", "[^1]", "-x"])
    def test_non_openers(self, word):
        assert not opens_block(word)
