#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/parsers/markdown.py
"""Markdown to AST converter.

This module provides conversion from Markdown text to the canonmark AST using
markdown-it-py (CommonMark with GFM tables and strikethrough) and
mdit-py-plugins (front matter, footnotes, definition lists). GitHub alerts and
task list items are recognised on top of the token stream.

Every block node carries a :class:`~canonmark.ast.nodes.SourceLocation` with
1-based, inclusive line numbers so the renderer can copy blocks verbatim and
cross-check tables against the source.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Any, Optional, Union

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.front_matter import front_matter_plugin

from canonmark.ast import (
    ALERT_TYPES,
    Alert,
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
)
from canonmark.exceptions import ParsingError
from canonmark.utils.io_utils import normalize_newlines, read_text_input

logger = logging.getLogger(__name__)

_ALERT_MARKER_RE = re.compile(r"\A\[!(%s)\][ \t]*(?:\n|\Z)" % "|".join(ALERT_TYPES), re.IGNORECASE)
_TASK_MARKERS = {"[ ] ": "unchecked", "[x] ": "checked", "[X] ": "checked"}
_ALIGNMENT_RE = re.compile(r"text-align:\s*(left|center|right)")


class _SourcePreservingMarkdownIt(MarkdownIt):
    """MarkdownIt that keeps link destinations exactly as written.

    The stock implementation percent-encodes destinations and drops links it
    considers unsafe, both of which would change the document when it is
    written back out.
    """

    def validateLink(self, url: str) -> bool:
        return True

    def normalizeLink(self, url: str) -> str:
        return url

    def normalizeLinkText(self, link: str) -> str:
        return link


def create_markdown_it() -> MarkdownIt:
    """Create the markdown-it instance used for parsing.

    Returns
    -------
    MarkdownIt
        CommonMark parser with tables, strikethrough, front matter, footnotes
        and definition lists enabled

    """
    md = _SourcePreservingMarkdownIt("commonmark", {"html": True})
    md.enable("table")
    md.enable("strikethrough")
    md.use(front_matter_plugin)
    md.use(footnote_plugin)
    md.use(deflist_plugin)
    # Keep footnote definitions where they are written (the tail rule moves
    # referenced ones to the end and drops the others); no ^[inline] notes
    md.disable(["footnote_tail", "footnote_inline"], ignoreInvalid=True)
    return md


class MarkdownParser:
    r"""Convert Markdown text to AST representation.

    After :meth:`parse`, :attr:`source_lines` holds the parsed text split into
    lines; pass it to the renderer along with the document.

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Hello\\n\\nThis is **bold**.")
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'Paragraph']
        >>> doc.children[1].source_location.line
        3

    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self._md = create_markdown_it()
        self._env: dict[str, Any] = {}
        self._inline_line: Optional[int] = None
        self.source_lines: list[str] = []

    def parse(self, text: str) -> Document:
        """Parse Markdown text into an AST Document.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If markdown-it fails on the input

        """
        text = normalize_newlines(text)
        self.source_lines = text.split("\n")
        self._env = {}

        try:
            tokens = self._md.parse(text, self._env)
            root = SyntaxTreeNode(tokens)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e) from e

        children = self._process_blocks(root.children)
        logger.debug("Parsed %d top-level blocks from %d lines", len(children), len(self.source_lines))
        return Document(children=children)

    def parse_file(self, source: Union[str, Path, IO[str], IO[bytes]]) -> Document:
        """Read a file or stream and parse it; see :meth:`parse`."""
        return self.parse(read_text_input(source))

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_blocks(self, nodes: list[SyntaxTreeNode]) -> list[Node]:
        result: list[Node] = []
        for tree_node in nodes:
            node = self._process_block(tree_node)
            if node is not None:
                result.append(node)
        return result

    def _process_block(self, tree_node: SyntaxTreeNode) -> Node | None:
        """Process a single block-level syntax tree node.

        Returns
        -------
        Node or None
            Resulting AST node, or None for tokens without a counterpart
            (footnote back-reference anchors)

        """
        node_type = tree_node.type

        if node_type == "front_matter":
            return self._process_front_matter(tree_node)
        elif node_type == "heading":
            return self._process_heading(tree_node)
        elif node_type == "paragraph":
            return self._process_paragraph(tree_node)
        elif node_type in ("fence", "code_block"):
            language = (tree_node.info.strip() or None) if node_type == "fence" else None
            return CodeBlock(content=tree_node.content, language=language, source_location=self._location(tree_node))
        elif node_type == "blockquote":
            return self._process_block_quote(tree_node)
        elif node_type in ("bullet_list", "ordered_list"):
            return self._process_list(tree_node)
        elif node_type == "table":
            return self._process_table(tree_node)
        elif node_type == "hr":
            return ThematicBreak(source_location=self._location(tree_node))
        elif node_type == "html_block":
            return HTMLBlock(content=tree_node.content.rstrip("\n"), source_location=self._location(tree_node))
        elif node_type in ("footnote_reference", "footnote"):
            return self._process_footnote_def(tree_node)
        elif node_type == "dl":
            return self._process_definition_list(tree_node)
        elif node_type == "footnote_anchor":
            return None

        # Unknown blocks are carried through as raw source
        logger.debug("Unhandled block token %r, keeping its source text", node_type)
        if tree_node.map is None:
            return None
        start, end = tree_node.map
        return HTMLBlock(content="\n".join(self.source_lines[start:end]).rstrip(), source_location=self._location(tree_node))

    def _location(self, tree_node: SyntaxTreeNode) -> Optional[SourceLocation]:
        token_map = tree_node.map
        if token_map is None:
            return None
        return SourceLocation(line=token_map[0] + 1, end_line=max(token_map[1], token_map[0] + 1))

    def _process_front_matter(self, tree_node: SyntaxTreeNode) -> FrontMatter:
        """Keep front matter as written, delimiters included."""
        location = self._location(tree_node)
        if tree_node.map is not None:
            start, end = tree_node.map
            content = "\n".join(self.source_lines[start:end]).rstrip()
        else:
            body = tree_node.content.rstrip("\n")
            content = "\n".join(part for part in (tree_node.markup, body, tree_node.markup) if part)
        return FrontMatter(content=content, source_location=location)

    def _process_heading(self, tree_node: SyntaxTreeNode) -> Heading:
        level = int(tree_node.tag[1:]) if tree_node.tag[1:].isdigit() else 1
        location = self._location(tree_node)
        return Heading(
            level=level,
            content=self._process_inline_children(tree_node, location),
            source_location=location,
        )

    def _process_paragraph(self, tree_node: SyntaxTreeNode) -> Paragraph:
        location = self._location(tree_node)
        return Paragraph(content=self._process_inline_children(tree_node, location), source_location=location)

    def _process_block_quote(self, tree_node: SyntaxTreeNode) -> BlockQuote | Alert:
        """Process a block quote, recognising GitHub alert syntax.

        An alert is a block quote whose first line is ``[!TYPE]``; the rest
        of the first paragraph (if any) becomes the first body paragraph.
        """
        location = self._location(tree_node)
        children = list(tree_node.children)
        first = children[0] if children else None
        if first is None or first.type != "paragraph" or not first.children:
            return BlockQuote(children=self._process_blocks(children), source_location=location)

        inline = first.children[0]
        match = _ALERT_MARKER_RE.match(inline.content)
        if match is None:
            return BlockQuote(children=self._process_blocks(children), source_location=location)

        body: list[Node] = []
        remainder = inline.content[match.end() :]
        if remainder.strip():
            first_location = self._location(first)
            if first_location is not None and first_location.line is not None:
                first_location.line += 1
            self._inline_line = first_location.line if first_location else None
            inline_tokens = self._md.parseInline(remainder, self._env)
            inline_root = SyntaxTreeNode(inline_tokens)
            content: list[Node] = []
            for inline_node in inline_root.children:
                content.extend(self._process_inline_nodes(inline_node.children))
            body.append(Paragraph(content=content, source_location=first_location))
        body.extend(self._process_blocks(children[1:]))

        return Alert(alert_type=match.group(1).lower(), children=body, source_location=location)  # type: ignore[arg-type]

    def _process_list(self, tree_node: SyntaxTreeNode) -> List:
        ordered = tree_node.type == "ordered_list"
        start = 1
        if ordered:
            try:
                start = int(tree_node.attrs.get("start", 1))
            except (TypeError, ValueError):
                start = 1

        items: list[ListItem] = []
        tight = True
        for item_node in tree_node.children:
            for child in item_node.children:
                if child.type == "paragraph" and not child.hidden:
                    tight = False
            items.append(self._process_list_item(item_node))

        return List(ordered=ordered, items=items, start=start, tight=tight, source_location=self._location(tree_node))

    def _process_list_item(self, tree_node: SyntaxTreeNode) -> ListItem:
        children = self._process_blocks(tree_node.children)
        task_status = None

        first = tree_node.children[0] if tree_node.children else None
        if children and isinstance(children[0], Paragraph) and first is not None and first.children:
            raw = first.children[0].content
            paragraph = children[0]
            for marker, status in _TASK_MARKERS.items():
                leading = paragraph.content[0] if paragraph.content else None
                if raw.startswith(marker) and isinstance(leading, Text) and leading.content.startswith(marker):
                    task_status = status
                    leading.content = leading.content[len(marker) :]
                    if not leading.content:
                        paragraph.content.pop(0)
                    break

        return ListItem(children=children, task_status=task_status, source_location=self._location(tree_node))  # type: ignore[arg-type]

    def _process_table(self, tree_node: SyntaxTreeNode) -> Table:
        """Process a table; the header row's cells fix the column alignments."""
        location = self._location(tree_node)
        header: Optional[TableRow] = None
        rows: list[TableRow] = []
        alignments: list[Any] = []

        for section in tree_node.children:
            for row_node in section.children:
                is_header = section.type == "thead"
                row_location = self._location(row_node) or location
                row = TableRow(
                    cells=[self._process_table_cell(cell, row_location) for cell in row_node.children],
                    is_header=is_header,
                    source_location=row_location,
                )
                if is_header and header is None:
                    header = row
                    alignments = [self._cell_alignment(cell) for cell in row_node.children]
                else:
                    rows.append(row)

        return Table(header=header, rows=rows, alignments=alignments, source_location=location)

    @staticmethod
    def _cell_alignment(cell_node: SyntaxTreeNode) -> Optional[str]:
        style = cell_node.attrs.get("style")
        if not isinstance(style, str):
            return None
        match = _ALIGNMENT_RE.search(style)
        return match.group(1) if match else None

    def _process_table_cell(self, cell_node: SyntaxTreeNode, row_location: Optional[SourceLocation]) -> TableCell:
        location = self._location(cell_node) or row_location
        return TableCell(content=self._process_inline_children(cell_node, location))

    def _process_footnote_def(self, tree_node: SyntaxTreeNode) -> FootnoteDefinition:
        label = str(tree_node.meta.get("label", ""))
        content = self._process_blocks(tree_node.children)

        lines = [
            line for node in tree_node.walk() if node.map is not None for line in (node.map[0] + 1, node.map[1])
        ]
        start = self._find_footnote_line(label)
        if start is None and lines:
            start = min(lines)
        end = max(lines) if lines else start
        location = SourceLocation(line=start, end_line=end) if start is not None else None
        return FootnoteDefinition(identifier=label, content=content, source_location=location)

    def _find_footnote_line(self, label: str) -> Optional[int]:
        pattern = re.compile(r"^[ \t>]*\[\^%s\]:" % re.escape(label))
        for number, line in enumerate(self.source_lines, start=1):
            if pattern.match(line):
                return number
        return None

    def _process_definition_list(self, tree_node: SyntaxTreeNode) -> DefinitionList:
        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []
        for child in tree_node.children:
            if child.type == "dt":
                location = self._location(child)
                term = DefinitionTerm(content=self._process_inline_children(child, location), source_location=location)
                items.append((term, []))
            elif child.type == "dd" and items:
                items[-1][1].append(
                    DefinitionDescription(
                        content=self._process_blocks(child.children), source_location=self._location(child)
                    )
                )
        return DefinitionList(items=items, source_location=self._location(tree_node))

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_children(self, tree_node: SyntaxTreeNode, location: Optional[SourceLocation]) -> list[Node]:
        """Process the inline token(s) under a block node.

        Line numbers of footnote references are tracked from the block's
        first line by counting line breaks.
        """
        self._inline_line = location.line if location is not None else None
        content: list[Node] = []
        for child in tree_node.children:
            if child.type == "inline":
                content.extend(self._process_inline_nodes(child.children))
        return content

    def _process_inline_nodes(self, nodes: list[SyntaxTreeNode]) -> list[Node]:
        result: list[Node] = []
        for tree_node in nodes:
            node = self._process_inline(tree_node)
            if node is None:
                continue
            # Merge adjacent text so that escapes do not fragment it
            if isinstance(node, Text) and result and isinstance(result[-1], Text):
                result[-1].content += node.content
            else:
                result.append(node)
        return result

    def _process_inline(self, tree_node: SyntaxTreeNode) -> Node | None:
        """Process a single inline syntax tree node."""
        node_type = tree_node.type

        if node_type in ("text", "text_special"):
            return Text(content=tree_node.content)
        elif node_type == "softbreak":
            self._advance_line(1)
            return LineBreak(soft=True)
        elif node_type == "hardbreak":
            self._advance_line(1)
            return LineBreak(soft=False)
        elif node_type == "code_inline":
            return Code(content=tree_node.content)
        elif node_type == "em":
            return Emphasis(content=self._process_inline_nodes(tree_node.children))
        elif node_type == "strong":
            return Strong(content=self._process_inline_nodes(tree_node.children))
        elif node_type == "s":
            return Strikethrough(content=self._process_inline_nodes(tree_node.children))
        elif node_type == "link":
            return self._process_link(tree_node)
        elif node_type == "image":
            return Image(
                url=str(tree_node.attrs.get("src", "")),
                alt_text=self._plain_text(tree_node),
                title=self._title(tree_node),
            )
        elif node_type == "html_inline":
            node = HTMLInline(content=tree_node.content)
            self._advance_line(tree_node.content.count("\n"))
            return node
        elif node_type == "footnote_ref":
            label = str(tree_node.meta.get("label", ""))
            location = SourceLocation(line=self._inline_line) if self._inline_line is not None else None
            return FootnoteReference(identifier=label, source_location=location)

        logger.debug("Unhandled inline token %r, keeping its text", node_type)
        return Text(content=tree_node.content) if tree_node.content else None

    def _process_link(self, tree_node: SyntaxTreeNode) -> Link:
        metadata: dict[str, Any] = {}
        if tree_node.markup == "autolink" or tree_node.info == "auto":
            metadata["autolink"] = True
        return Link(
            url=str(tree_node.attrs.get("href", "")),
            content=self._process_inline_nodes(tree_node.children),
            title=self._title(tree_node),
            metadata=metadata,
        )

    @staticmethod
    def _title(tree_node: SyntaxTreeNode) -> Optional[str]:
        title = tree_node.attrs.get("title")
        return str(title) if title else None

    @classmethod
    def _plain_text(cls, tree_node: SyntaxTreeNode) -> str:
        """Flatten inline children to their text, as used for image alt text."""
        parts = []
        for child in tree_node.children:
            if child.type in ("text", "text_special", "code_inline", "html_inline"):
                parts.append(child.content)
            elif child.type in ("softbreak", "hardbreak"):
                parts.append(" ")
            else:
                parts.append(cls._plain_text(child))
        return "".join(parts)

    def _advance_line(self, count: int) -> None:
        if self._inline_line is not None:
            self._inline_line += count


def markdown_to_ast(markdown_content: str) -> Document:
    r"""Convert Markdown string to AST.

    This is a convenience function that creates a parser and parses the
    markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownParser().parse(markdown_content)
