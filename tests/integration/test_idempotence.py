#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_idempotence.py
"""Formatting already formatted text must change nothing."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import assert_idempotent, fmt

DOCUMENTS = [
    "# Title\n\nSome *emphasis* and **strong** text.\n",
    "Term\n: Definition\n",
    "> [!NOTE]\n> Body text.\n",
    "> [!CAUTION]\n>\n> Hot.\n",
    "| a | b |\n|:-:|--:|\n| x | a\\|b |\n",
    "> quote\n>\n> - item\n>   continued\n",
    "1. one\n\n   para\n2. two\n",
    "- [ ] todo\n- [x] done\n",
    "```\ncode ~~~~ here\n```\n",
    "Text with `code | pipe` and <span>html</span>.\n",
    "[ref]: https://example.com\n\nSee [ref] here.\n",
    "Setext\n======\n\nText\n\n***\n",
    "---\ntitle: x\n---\n\n# Doc\n",
    "<div>\n<p>raw</p>\n</div>\n\nAfter.\n",
    "Line one  \nline two\\\nline three\n",
    "Text with \\* star and 1\\. number and \\# hash\n",
    "- a\n    - b\n        - c\n",
    "![alt *text*](img.png)\n",
    "Term\n:   - a\n    - b\n",
    "Term\n:   para\n\n    - li\n",
    "Term\n:   1. one\n    2. two\n\n    after\n",
    "Text\n\n  *[HTML]: Hyper Text\n",
    "aaaa bbbb cccc dddd eeee ffff gggg hhhh 1. kkkk\n",
    "one two three four five six seven eight nine ten eleven - twelve # thirteen > fourteen\n",
]

OPENERS = ["-", "+", "1.", "2)", "#", "##", ">", "=", "==", "--", "<div>", "[^x]:"]


@pytest.mark.integration
class TestIdempotence:
    """Second pass equals first pass."""

    @pytest.mark.parametrize("source", DOCUMENTS)
    def test_documents(self, source):
        assert_idempotent(source)

    @pytest.mark.parametrize("source", DOCUMENTS)
    def test_documents_narrow(self, source):
        assert_idempotent(source, line_width=12)

    def test_sample_document(self, sample_markdown):
        assert_idempotent(sample_markdown)

    def test_reference_links(self):
        once = assert_idempotent("[a](https://x.com) and [b](https://y.com)\n", link_style="reference")
        assert once == "[a][1] and [b][2]\n\n[1]: https://x.com\n[2]: https://y.com\n"

    def test_backtick_fences(self):
        assert_idempotent("~~~\nx\n~~~\n", code_fence_char="`", code_fence_min=3)

    def test_block_opener_at_wrap_boundary(self):
        once = assert_idempotent("aaaa bbbb cccc dddd eeee ffff gggg hhhh 1. kkkk\n", line_width=40)
        assert once == "aaaa bbbb cccc dddd eeee ffff gggg\nhhhh 1. kkkk\n"
        assert all(len(line) <= 40 for line in once.splitlines())

    def test_details_starting_with_list(self):
        once = assert_idempotent("Term\n:   - a\n    - b\n")
        assert once == "Term\n:    -  a\n     -  b\n"

    def test_details_with_later_list(self):
        once = assert_idempotent("Term\n:   para\n\n    - li\n")
        assert once == "Term\n:   para\n\n     -  li\n"

    def test_indented_abbreviation_is_kept(self):
        once = assert_idempotent("Text\n\n  *[HTML]: Hyper Text\n")
        assert once == "Text\n\n*[HTML]: Hyper Text\n"

    @given(
        words=st.lists(st.sampled_from(["alpha", "beta", "gamma", *OPENERS]), min_size=1, max_size=40),
        width=st.integers(min_value=8, max_value=60),
    )
    def test_wrapped_paragraphs_keep_their_meaning(self, words, width):
        source = "Start " + " ".join(words) + "\n"
        once = assert_idempotent(source, line_width=width)
        # Still a single paragraph: no blank line appears
        assert "\n\n" not in once
        assert fmt(" ".join(once.split()) + "\n", line_width=width) == once
