#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/parsers/__init__.py
"""Parsers turning Markdown text into the canonmark AST."""

from canonmark.parsers.markdown import MarkdownParser, create_markdown_it, markdown_to_ast

__all__ = ["MarkdownParser", "create_markdown_it", "markdown_to_ast"]
