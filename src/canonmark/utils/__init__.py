#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/utils/__init__.py
"""Utility modules for canonmark.

This package contains the text wrapper, the directive recognizer, Markdown
escaping helpers and input/output helpers used by the renderer and the CLI.
"""

from canonmark.utils.directives import Directive, parse_directive
from canonmark.utils.escape import escape_line_start, escape_markdown, escape_table_cell
from canonmark.utils.wrap import wrap_text, wrap_text_first_line

__all__ = [
    "Directive",
    "escape_line_start",
    "escape_markdown",
    "escape_table_cell",
    "parse_directive",
    "wrap_text",
    "wrap_text_first_line",
]
