#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/renderers/__init__.py
"""AST renderers producing canonical Markdown.

Examples
--------
Render a document built by hand:

    >>> from canonmark.ast import Document, Heading, Text
    >>> from canonmark.options import FormatterOptions
    >>> from canonmark.renderers import CanonicalMarkdownRenderer
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> renderer = CanonicalMarkdownRenderer(FormatterOptions(line_width=60))
    >>> print(renderer.render_to_string(doc), end="")
    Title
    =====

"""

from canonmark.renderers._state import FormatResult, FormattingMode, FormatWarning, RenderState
from canonmark.renderers.base import BaseRenderer, InlineContentMixin
from canonmark.renderers.markdown import CanonicalMarkdownRenderer

__all__ = [
    "BaseRenderer",
    "CanonicalMarkdownRenderer",
    "FormatResult",
    "FormatWarning",
    "FormattingMode",
    "InlineContentMixin",
    "RenderState",
]
