#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class renderers inherit from and the
mixin that text renderers use to render inline content into a string.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Sequence, Union

from canonmark.ast import Document
from canonmark.ast.nodes import Node
from canonmark.exceptions import InvalidOptionsError
from canonmark.options.base import BaseRendererOptions
from canonmark.utils.io_utils import write_text_output


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document, source_lines: Sequence[str] = ()) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        source_lines : sequence of str, optional
            Lines of the document the AST was parsed from

        Returns
        -------
        str
            Rendered document

        """
        pass

    def render(
        self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]], source_lines: Sequence[str] = ()
    ) -> None:
        """Render the AST and write the text to ``output``.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object
        source_lines : sequence of str, optional
            Lines of the document the AST was parsed from

        Raises
        ------
        OutputWriteError
            If output cannot be written

        """
        write_text_output(self.render_to_string(doc, source_lines), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


class InlineContentMixin:
    """Mixin rendering inline nodes into a string by capturing their output.

    The implementing class must have an ``_output`` attribute (list[str])
    that its visitor methods append to.

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content

        """
        saved_output = self._output
        self._output = []
        try:
            for node in content:
                node.accept(self)
            return "".join(self._output)
        finally:
            self._output = saved_output
