#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The formatter never reads Markdown text directly: a parser builds this tree
(with source line spans) and the renderer walks it to emit canonical text.

- nodes: AST node classes representing document structure
- visitors: visitor base class and the footnote reference collector

Examples
--------
Basic usage:

    >>> from canonmark.ast import Document, Heading, Text
    >>> from canonmark.renderers.markdown import CanonicalMarkdownRenderer
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> CanonicalMarkdownRenderer().render_to_string(doc)
    'Title\\n=====\\n'

"""

from __future__ import annotations

from canonmark.ast.nodes import (
    ALERT_TYPES,
    Alert,
    AlertType,
    Alignment,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    FrontMatter,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    get_node_children,
)
from canonmark.ast.visitors import (
    FootnoteReferenceCollector,
    NodeVisitor,
    collect_footnote_reference_lines,
    collect_footnote_reference_positions,
)

__all__ = [
    "ALERT_TYPES",
    "Alert",
    "AlertType",
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "FootnoteReferenceCollector",
    "FrontMatter",
    "HTMLBlock",
    "HTMLInline",
    "Heading",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "collect_footnote_reference_lines",
    "collect_footnote_reference_positions",
    "get_node_children",
]
