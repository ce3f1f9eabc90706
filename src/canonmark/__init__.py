"""canonmark - a formatter that rewrites Markdown in one canonical style.

canonmark parses a Markdown document into an AST and renders it back with a
fixed layout: setext headings for the first two levels, paragraphs wrapped to
a configured width, padded tables, uniform list and quote indentation, and
footnotes gathered at the end of the section that first references them.
Formatting is idempotent; running it twice gives the same text.

HTML comment directives (``<!-- canonmark-disable -->`` and friends) leave
selected parts of a document untouched.

Examples
--------
Format a string:

    >>> from canonmark import format_markdown
    >>> result = format_markdown("Heading\\n---\\nSome   *text*.\\n")
    >>> print(result.output, end="")
    Heading
    -------
    <BLANKLINE>
    Some *text*.

Format with a narrower line width:

    >>> from canonmark import FormatterOptions
    >>> result = format_markdown(long_text, FormatterOptions(line_width=60))
    >>> for warning in result.warnings:
    ...     print(warning)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "canonmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from canonmark.api import format_file, format_markdown, render_document
from canonmark.ast import Document
from canonmark.exceptions import (
    CanonmarkError,
    FileError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from canonmark.options import FormatterOptions
from canonmark.parsers import MarkdownParser, markdown_to_ast
from canonmark.renderers import CanonicalMarkdownRenderer, FormatResult, FormatWarning

__all__ = [
    "__version__",
    "format_markdown",
    "format_file",
    "render_document",
    "markdown_to_ast",
    "Document",
    "MarkdownParser",
    "CanonicalMarkdownRenderer",
    "FormatterOptions",
    "FormatResult",
    "FormatWarning",
    "CanonmarkError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
]
