#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_directive_passthrough.py
"""Integration tests for formatting-control comments.

Blocks covered by a directive must come out exactly as they were written,
while everything outside the directive's scope is still formatted.

"""

import pytest
from utils import assert_idempotent, fmt

from canonmark.api import format_markdown


@pytest.mark.integration
class TestDisableNextLine:
    """Tests for ``canonmark-disable-next-line``."""

    def test_only_next_block_is_kept(self):
        source = "<!-- canonmark-disable-next-line -->\n*   keep   this\n*   list\n\nReformat   me.\n"
        expected = "<!-- canonmark-disable-next-line -->\n\n*   keep   this\n*   list\n\nReformat me.\n"
        assert fmt(source) == expected

    def test_kept_table_is_not_checked(self):
        source = "<!-- canonmark-disable-next-line -->\n\n| A | B |\n|---|---|\n| 1 | x|y |\n"
        result = format_markdown(source)
        assert result.output == source
        assert result.warnings == []


@pytest.mark.integration
class TestDisableEnable:
    """Tests for ``canonmark-disable`` and ``canonmark-enable``."""

    def test_region_is_kept(self):
        source = (
            "<!-- canonmark-disable -->\n\nSome    text   here.\n\n| a | b |\n|-|-|\n| 1 | 2 |\n\n"
            "<!-- canonmark-enable -->\n\nSome    text.\n"
        )
        expected = (
            "<!-- canonmark-disable -->\n\nSome    text   here.\n\n| a | b |\n|-|-|\n| 1 | 2 |\n\n"
            "<!-- canonmark-enable -->\n\nSome text.\n"
        )
        assert fmt(source) == expected

    def test_headings_inside_region_are_kept(self):
        source = "<!-- canonmark-disable -->\n\n# Keep   me\n"
        assert fmt(source) == source

    def test_unterminated_region_runs_to_end(self):
        source = "Fix   this.\n\n<!-- canonmark-disable -->\n\n*  keep\n\n## Keep\n"
        assert fmt(source) == "Fix this.\n\n<!-- canonmark-disable -->\n\n*  keep\n\n\n## Keep\n"


@pytest.mark.integration
class TestDisableNextSection:
    """Tests for ``canonmark-disable-next-section``."""

    def test_skips_until_next_top_level_section(self):
        source = (
            "<!-- canonmark-disable-next-section -->\n\nKeep   this.\n\n### Sub   heading\n\nKeep   too.\n\n"
            "Next\n----\n\nFormat   me.\n"
        )
        expected = (
            "<!-- canonmark-disable-next-section -->\n\nKeep   this.\n\n### Sub   heading\n\nKeep   too.\n\n\n"
            "Next\n----\n\nFormat me.\n"
        )
        assert fmt(source) == expected

    def test_enable_does_not_end_section_skip(self):
        source = (
            "<!-- canonmark-disable-next-section -->\n\nKeep   a.\n\n<!-- canonmark-enable -->\n\nKeep   b.\n\n"
            "Next\n----\n\nFix   c.\n"
        )
        expected = (
            "<!-- canonmark-disable-next-section -->\n\nKeep   a.\n\n<!-- canonmark-enable -->\n\nKeep   b.\n\n\n"
            "Next\n----\n\nFix c.\n"
        )
        assert fmt(source) == expected


@pytest.mark.integration
class TestDisableFile:
    """Tests for ``canonmark-disable-file``."""

    def test_rest_of_file_is_kept(self):
        source = "# Title\n\n<!-- canonmark-disable-file -->\n\nKeep    this.\n\n## Keep   heading\n"
        expected = "Title\n=====\n\n<!-- canonmark-disable-file -->\n\nKeep    this.\n\n## Keep   heading\n"
        assert fmt(source) == expected

    def test_enable_cannot_undo_it(self):
        source = "<!-- canonmark-disable-file -->\n\n<!-- canonmark-enable -->\n\nKeep    this.\n"
        assert fmt(source) == source

    def test_pending_footnotes_are_still_written(self):
        source = "Text[^1].\n\n<!-- canonmark-disable-file -->\n\nKeep   this.\n\n[^1]: Note.\n"
        assert fmt(source) == source


@pytest.mark.integration
class TestNonDirectiveComments:
    """Ordinary comments are plain HTML blocks."""

    def test_unknown_marker(self):
        source = "<!-- canonmark-something -->\n\nFix   me.\n"
        assert fmt(source) == "<!-- canonmark-something -->\n\nFix me.\n"

    def test_case_and_spacing_are_tolerated(self):
        source = "<!--   CANONMARK-DISABLE-NEXT-LINE   -->\n\nKeep   me.\n"
        assert fmt(source) == source

    @pytest.mark.parametrize(
        "source",
        [
            "<!-- canonmark-disable-next-line -->\n*   keep   this\n\nReformat   me.\n",
            "<!-- canonmark-disable -->\n\nA   b.\n\n<!-- canonmark-enable -->\n\nC   d.\n",
            "# T\n\n<!-- canonmark-disable-file -->\n\nKeep    this.\n",
        ],
    )
    def test_idempotent(self, source):
        assert_idempotent(source)
