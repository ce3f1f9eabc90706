#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/api.py
"""Public entry points for formatting Markdown.

:func:`format_markdown` parses and formats text in one call;
:func:`render_document` formats an AST that was produced elsewhere.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Optional, Sequence, Union

from canonmark.ast.nodes import Document
from canonmark.options.markdown import FormatterOptions
from canonmark.parsers.markdown import MarkdownParser
from canonmark.renderers._state import FormatResult, FormatWarning
from canonmark.renderers.markdown import CanonicalMarkdownRenderer
from canonmark.utils.decorators import debug_timer
from canonmark.utils.io_utils import read_text_input

logger = logging.getLogger(__name__)

__all__ = ["FormatResult", "FormatWarning", "format_file", "format_markdown", "render_document"]


def _resolve_options(options: Optional[FormatterOptions], **kwargs: Any) -> FormatterOptions:
    options = options or FormatterOptions()
    if kwargs:
        options = options.create_updated(**kwargs)
    return options


def render_document(
    document: Document,
    source_lines: Sequence[str] = (),
    options: Optional[FormatterOptions] = None,
    **kwargs: Any,
) -> FormatResult:
    """Render a parsed document as canonical Markdown.

    Parameters
    ----------
    document : Document
        Root of the AST
    source_lines : sequence of str, optional
        Lines of the text the AST was parsed from. Needed for verbatim
        passthrough under directives and for the table column check; without
        them disabled blocks are formatted anyway.
    options : FormatterOptions, optional
        Formatting options; defaults are used when omitted
    kwargs : Any
        Individual options overriding those in ``options``

    Returns
    -------
    FormatResult
        Formatted text and the warnings raised while rendering

    """
    renderer = CanonicalMarkdownRenderer(_resolve_options(options, **kwargs))
    with debug_timer(logger, "Rendering"):
        return renderer.format_document(document, source_lines)


def format_markdown(text: str, options: Optional[FormatterOptions] = None, **kwargs: Any) -> FormatResult:
    r"""Parse Markdown text and render it in canonical form.

    Parameters
    ----------
    text : str
        Markdown source
    options : FormatterOptions, optional
        Formatting options; defaults are used when omitted
    kwargs : Any
        Individual options overriding those in ``options``

    Returns
    -------
    FormatResult
        Formatted text and warnings

    Raises
    ------
    ParsingError
        If the text cannot be parsed

    Examples
    --------
        >>> result = format_markdown("# Title\n\n* one\n* two\n")
        >>> print(result.output, end="")
        Title
        =====
        <BLANKLINE>
         -  one
         -  two

    """
    parser = MarkdownParser()
    with debug_timer(logger, "Parsing"):
        document = parser.parse(text)
    return render_document(document, parser.source_lines, options, **kwargs)


def format_file(
    source: Union[str, Path, IO[str], IO[bytes]], options: Optional[FormatterOptions] = None, **kwargs: Any
) -> FormatResult:
    """Read a file or stream and format it; see :func:`format_markdown`.

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    FileError
        If the input cannot be read

    """
    return format_markdown(read_text_input(source), options, **kwargs)
