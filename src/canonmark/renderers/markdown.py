#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/renderers/markdown.py
"""Canonical Markdown rendering from AST.

This module provides the CanonicalMarkdownRenderer class which turns a parsed
document back into Markdown text in one fixed style: setext headings for
levels 1 and 2, paragraphs wrapped to the configured width, padded tables,
uniform list and quote indentation, and footnotes collected at the end of the
section that first references them.

The renderer uses the visitor pattern. All nesting context (block quotes,
lists, definition details) and the directive flags live in one
:class:`~canonmark.renderers._state.RenderState` per render.

Formatting can be switched off from inside a document with HTML comment
directives::

    <!-- canonmark-disable-next-line -->
    <!-- canonmark-disable-next-section -->
    <!-- canonmark-disable -->
    <!-- canonmark-enable -->
    <!-- canonmark-disable-file -->

Blocks covered by a directive are copied from the source unchanged.

"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from canonmark.ast.nodes import (
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
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from canonmark.ast.visitors import NodeVisitor, collect_footnote_reference_positions
from canonmark.constants import HANGING_INDENT
from canonmark.options.markdown import FormatterOptions
from canonmark.renderers._state import FormatResult, PendingFootnote, RenderState
from canonmark.renderers._tables import (
    calculate_column_widths,
    check_source_columns,
    format_row,
    format_separator,
)
from canonmark.renderers.base import BaseRenderer, InlineContentMixin
from canonmark.utils.directives import Directive
from canonmark.utils.escape import escape_line_start, escape_markdown, escape_table_cell
from canonmark.utils.wrap import PROTECTED_SPACE, restore_protected_spaces, wrap_text_first_line

logger = logging.getLogger(__name__)

# Backslash before ASCII punctuation is an escape inside a link destination
_DEST_ESCAPABLE_RE = re.compile(r"\\(?=[!-/:-@\[-`{-~])")
_TRAILING_HASHES_RE = re.compile(r"(^|\s)(#+)$")


class CanonicalMarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to canonical Markdown text.

    Parameters
    ----------
    options : FormatterOptions or None, default = None
        Formatting options

    Examples
    --------
    Basic usage:

        >>> from canonmark.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
        >>> CanonicalMarkdownRenderer().render_to_string(doc)
        'Title\\n=====\\n'

    With the source lines, directives can copy blocks verbatim and table
    rows are cross-checked for stray pipes:

        >>> from canonmark.parsers.markdown import MarkdownParser
        >>> parser = MarkdownParser()
        >>> doc = parser.parse(text)
        >>> result = CanonicalMarkdownRenderer().format_document(doc, parser.source_lines)
        >>> result.warnings
        []

    """

    def __init__(self, options: FormatterOptions | None = None):
        """Initialize the renderer with options."""
        BaseRenderer._validate_options_type(options, FormatterOptions, "markdown")
        options = options or FormatterOptions()
        BaseRenderer.__init__(self, options)
        self.options: FormatterOptions = options
        self._state = RenderState()
        self._force_inline_links = False

    @property
    def _output(self) -> list[str]:  # type: ignore[override]
        return self._state.output

    @_output.setter
    def _output(self, value: list[str]) -> None:
        self._state.output = value

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def format_document(self, document: Document, source_lines: Sequence[str] = ()) -> FormatResult:
        """Render a document and collect the warnings raised while doing so.

        Parameters
        ----------
        document : Document
            The document node to render
        source_lines : sequence of str, optional
            The text the document was parsed from, split into lines. Without
            it directives cannot copy blocks verbatim (they fall back to
            canonical rendering) and tables are not cross-checked.

        Returns
        -------
        FormatResult
            Canonical text and warnings

        """
        self._state = RenderState(source_lines=list(source_lines))
        self._force_inline_links = False
        try:
            document.accept(self)
            text = self._state.getvalue()
            warnings = list(self._state.warnings)
        finally:
            # Clear state to prevent holding on to large documents
            self._state = RenderState()

        if not text.strip():
            return FormatResult(output="", warnings=warnings)
        return FormatResult(output=text.rstrip("\n") + "\n", warnings=warnings)

    def render_to_string(self, doc: Document, source_lines: Sequence[str] = ()) -> str:
        """Render a document AST to a canonical Markdown string.

        Parameters
        ----------
        doc : Document
            The document node to render
        source_lines : sequence of str, optional
            The text the document was parsed from, split into lines

        Returns
        -------
        str
            Markdown text

        """
        return self.format_document(doc, source_lines).output

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        self._output.append(text)

    def _has_output(self) -> bool:
        return any(self._output)

    def _render_captured(self, node: Node) -> str:
        """Render a block node into a string instead of the output buffer."""
        saved_output = self._output
        self._output = []
        try:
            node.accept(self)
            return "".join(self._output)
        finally:
            self._output = saved_output

    def _render_inline_text(self, content: list[Node]) -> str:
        """Render inline nodes to a single line with ordinary spaces."""
        return restore_protected_spaces(self._render_inline_content(content)).replace("\n", " ")

    def _escape_line_starts(self, text: str) -> str:
        """Escape block syntax at the start of the text and after each hard break."""
        if not self.options.escape_special:
            return text
        return "\n".join(escape_line_start(segment) for segment in text.split("\n"))

    def _write_lines(self, content: str) -> None:
        """Write raw lines under the current block prefix."""
        prefix = self._state.block_prefix
        for line in content.split("\n"):
            self._write(f"{prefix}{line}\n" if line else self._state.blank_line)

    # ------------------------------------------------------------------
    # Document orchestration
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render the top-level blocks of a document.

        Footnote definitions are rendered first, kept aside, and flushed
        before the next section heading that follows their first reference
        (or at the end of the document).

        Parameters
        ----------
        node : Document
            Document to render

        """
        state = self._state
        state.footnote_reference_positions = collect_footnote_reference_positions(node)

        order = 0
        for child in node.children:
            if isinstance(child, FootnoteDefinition):
                self._queue_footnote(child, order)
                order += 1

        blocks = [child for child in node.children if not isinstance(child, FootnoteDefinition)]
        previous: Optional[Node] = None

        for index, child in enumerate(blocks):
            if isinstance(child, HTMLBlock):
                directive = Directive.parse(child.content)
                if directive is not None:
                    if previous is not None:
                        self._write("\n")
                    self._write(child.content.strip("\n") + "\n")
                    state.apply_directive(directive)
                    previous = child
                    if directive is Directive.DISABLE_FILE:
                        self._render_disabled_tail(blocks[index + 1 :])
                        return
                    continue

            is_section = isinstance(child, Heading) and child.level in (2, 3)
            if is_section and previous is not None:
                self._flush_link_references()
                if child.line is not None:
                    self._flush_footnotes(before_line=child.line)

            if previous is not None:
                self._write(self._block_separator(previous, child))

            self._render_top_level_block(child)
            previous = child

        self._flush_link_references()
        self._flush_footnotes()

    @staticmethod
    def _block_separator(previous: Node, current: Node) -> str:
        """Blank lines written between two top-level blocks."""
        if isinstance(previous, FrontMatter):
            return "\n"
        if isinstance(current, Heading) and current.level == 2 and not isinstance(previous, Heading):
            return "\n\n"
        return "\n"

    def _render_top_level_block(self, node: Node) -> None:
        """Render one top-level block, or copy it when a directive says so."""
        state = self._state
        if not state.formatting_mode().is_passthrough:
            node.accept(self)
            return

        state.skip_next_block = False
        if state.skip_until_section and isinstance(node, Heading) and node.level <= 2:
            state.skip_until_section = False
            if not state.formatting_mode().is_passthrough:
                logger.debug("Heading at line %s ends the skipped section", node.line)
                node.accept(self)
                return

        self._render_verbatim(node)

    def _render_verbatim(self, node: Node) -> None:
        source = self._state.source_text(node)
        if source is None:
            logger.debug("No source span for %s, rendering it canonically", type(node).__name__)
            node.accept(self)
            return
        location = node.source_location
        logger.debug(
            "Copying %s verbatim from lines %s-%s",
            type(node).__name__,
            location.line if location else None,
            location.end_line if location else None,
        )
        self._write(source + "\n")

    def _render_disabled_tail(self, blocks: list[Node]) -> None:
        """Copy every remaining block as-is, then flush what is pending."""
        logger.debug("Formatting disabled for the rest of the file (%d blocks)", len(blocks))
        for child in blocks:
            self._write("\n")
            self._render_verbatim(child)
        self._flush_link_references()
        self._flush_footnotes()

    # ------------------------------------------------------------------
    # Footnotes and reference links
    # ------------------------------------------------------------------

    def _queue_footnote(self, node: FootnoteDefinition, order: int) -> None:
        text = self._render_footnote_definition(node)
        self._state.pending_footnotes.append(
            PendingFootnote(
                identifier=node.identifier,
                text=text,
                order=order,
                reference_position=self._state.footnote_reference_positions.get(node.identifier),
            )
        )

    def _render_footnote_definition(self, node: FootnoteDefinition) -> str:
        """Render a footnote definition to a string.

        Links inside footnotes are always written inline so that reference
        numbering follows the body text.
        """
        state = self._state
        saved_output = self._output
        saved_force = self._force_inline_links
        self._output = []
        self._force_inline_links = True
        try:
            label = f"{state.block_prefix}[^{node.identifier}]:"
            with state.indented(HANGING_INDENT):
                for i, child in enumerate(node.content):
                    if i == 0 and isinstance(child, Paragraph):
                        self._write(label + " ")
                        self._render_paragraph(child, first_prefix="")
                        continue
                    if i == 0:
                        self._write(label + "\n")
                    else:
                        self._write(state.blank_line)
                    child.accept(self)
            if not node.content:
                self._write(label + "\n")
            return "".join(self._output)
        finally:
            self._output = saved_output
            self._force_inline_links = saved_force

    def _flush_footnotes(self, before_line: Optional[int] = None) -> None:
        """Emit pending footnotes, in order of first reference.

        Parameters
        ----------
        before_line : int or None, default None
            Only emit footnotes first referenced strictly before this line.
            None emits everything that is still pending.

        """
        state = self._state
        if before_line is None:
            due = list(state.pending_footnotes)
        else:
            due = [
                footnote
                for footnote in state.pending_footnotes
                if footnote.reference_line is not None and footnote.reference_line < before_line
            ]
        if not due:
            return

        logger.debug("Flushing %d footnote(s) before line %s", len(due), before_line)
        flushed = {id(footnote) for footnote in due}
        state.pending_footnotes = [fn for fn in state.pending_footnotes if id(fn) not in flushed]
        for footnote in sorted(due, key=lambda fn: fn.sort_key):
            if self._has_output():
                self._write("\n")
            self._write(footnote.text)

    def _flush_link_references(self) -> None:
        """Emit the definitions of reference-style links used since the last flush."""
        state = self._state
        if not state.pending_link_references:
            return
        self._write("\n")
        for ref_id, url, title in state.pending_link_references:
            destination = self._format_destination(url)
            if title:
                self._write(f'[{ref_id}]: {destination} "{self._escape_title(title)}"\n')
            else:
                self._write(f"[{ref_id}]: {destination}\n")
        state.pending_link_references = []

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_front_matter(self, node: FrontMatter) -> None:
        """Render front matter verbatim."""
        self._write(node.content.strip("\n") + "\n")

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node.

        Levels 1 and 2 use setext style with an underline exactly as long as
        the heading text; deeper levels use ATX style.

        Parameters
        ----------
        node : Heading
            Heading to render

        """
        self._render_heading(node, atx=False)

    def _render_heading(self, node: Heading, atx: bool) -> None:
        prefix = self._state.block_prefix
        text = self._render_inline_text(node.content).strip()

        if node.level <= 2 and text and not atx:
            text = self._escape_line_starts(text)
            underline = ("=" if node.level == 1 else "-") * len(text)
            self._write(f"{prefix}{text}\n{prefix}{underline}\n")
            return

        # A run of '#' at the end would be read as a closing sequence
        text = _TRAILING_HASHES_RE.sub(lambda m: m.group(1) + "\\" + m.group(2), text)
        self._write(f"{prefix}{'#' * node.level} {text}".rstrip() + "\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node wrapped to the configured line width."""
        self._render_paragraph(node, first_prefix=self._state.block_prefix)

    def _render_paragraph(self, node: Paragraph, first_prefix: str) -> None:
        """Wrap a paragraph.

        Parameters
        ----------
        node : Paragraph
            Paragraph to render
        first_prefix : str
            Prefix of the first line. Empty when a list marker or footnote
            label has already been written on the current line.

        """
        state = self._state
        source = state.source_text(node)
        if source is not None and source.strip().startswith("*[") and "]:" in source:
            # Abbreviation definitions are not part of the AST; keep them as written
            self._write(first_prefix + source.strip() + "\n")
            return

        text = self._escape_line_starts(self._render_inline_content(node.content))
        wrapped = wrap_text_first_line(
            text,
            first_prefix,
            state.block_prefix,
            self.options.line_width,
            initial_column=state.current_column(),
        )
        self._write(wrapped + "\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a fenced block.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        fence_char = self.options.code_fence_char
        lang = node.language or ""
        # Backtick fences cannot carry backticks in their info string
        if fence_char == "`" and "`" in lang:
            fence_char = "~"

        # Calculate required fence length (at least code_fence_min, longer if needed)
        fence_length = self.options.code_fence_min
        if fence_char in node.content:
            max_consecutive = 0
            current_consecutive = 0
            for char in node.content:
                if char == fence_char:
                    current_consecutive += 1
                    max_consecutive = max(max_consecutive, current_consecutive)
                else:
                    current_consecutive = 0
            fence_length = max(fence_length, max_consecutive + 1)

        fence = fence_char * fence_length
        prefix = self._state.block_prefix
        content = node.content[:-1] if node.content.endswith("\n") else node.content

        self._write(f"{prefix}{fence}{lang}\n")
        if node.content:
            self._write_lines(content)
        self._write(f"{prefix}{fence}\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        Parameters
        ----------
        node : BlockQuote
            Block quote to render

        """
        with self._state.block_quote():
            self._render_quote_children(node.children)

    def visit_alert(self, node: Alert) -> None:
        """Render an Alert node as a block quote with a ``[!TYPE]`` header.

        A blank line between the header and the body in the source is kept.

        Parameters
        ----------
        node : Alert
            Alert to render

        """
        state = self._state
        self._write(f"{state.block_prefix}> [!{node.alert_type.upper()}]\n")
        with state.block_quote():
            first = node.children[0] if node.children else None
            if first is not None and node.line is not None and first.line is not None and first.line > node.line + 1:
                self._write(state.blank_line)
            if node.children:
                self._render_quote_children(node.children)

    def _render_quote_children(self, children: list[Node]) -> None:
        state = self._state
        if not children:
            self._write(state.blank_line)
            return
        for i, child in enumerate(children):
            if i > 0:
                self._write(state.blank_line)
            child.accept(self)

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Markers occupy four columns (`` -  ``, ``1.  ``); item content is
        indented to the end of the marker.

        Parameters
        ----------
        node : List
            List to render

        """
        state = self._state
        list_type = "ordered" if node.ordered else "unordered"
        with state.list_context(list_type, node.tight) as base:
            for index, item in enumerate(node.items):
                if index > 0 and not node.tight:
                    self._write(state.blank_line)

                marker = self._list_marker(node, index)
                line_start = f"{state.blockquote_prefix}{base}{marker}{self._task_marker(item)}"
                state.list_item_indent = base + " " * len(marker)

                first = item.children[0] if item.children else None
                if isinstance(first, Paragraph):
                    self._write(line_start)
                else:
                    self._write(line_start.rstrip() + "\n")
                item.accept(self)

    def _list_marker(self, node: List, index: int) -> str:
        if node.ordered:
            return f"{node.start + index}.".ljust(3) + " "
        return f" {self.options.unordered_marker}  "

    @staticmethod
    def _task_marker(item: ListItem) -> str:
        if item.task_status == "checked":
            return "[x] "
        if item.task_status == "unchecked":
            return "[ ] "
        return ""

    def visit_list_item(self, node: ListItem) -> None:
        """Render the children of a ListItem; the marker is already written."""
        state = self._state
        previous: Optional[Node] = None
        for i, child in enumerate(node.children):
            if i == 0 and isinstance(child, Paragraph):
                self._render_paragraph(child, first_prefix="")
                previous = child
                continue
            if i > 0 and not state.list_tight:
                self._write(state.blank_line)
            if isinstance(child, Heading) and state.list_tight and isinstance(previous, Paragraph):
                # A setext underline would turn the paragraph above into a heading
                self._render_heading(child, atx=True)
            else:
                child.accept(self)
            previous = child

    def visit_table(self, node: Table) -> None:
        """Render a Table node with padded columns.

        The raw source rows are also scanned for pipe counts that disagree
        with the parsed column count; mismatches become warnings.

        Parameters
        ----------
        node : Table
            Table to render

        """
        state = self._state
        rows = node.all_rows
        num_cols = len(node.alignments) or max((len(row.cells) for row in rows), default=0)
        if not rows or num_cols == 0:
            return

        rendered_rows = [
            [escape_table_cell(self._render_inline_text(cell.content).strip()) for cell in row.cells] for row in rows
        ]
        col_widths = calculate_column_widths(rendered_rows, num_cols)
        prefix = state.block_prefix

        self._write(prefix + format_row(rendered_rows[0], col_widths) + "\n")
        self._write(prefix + format_separator(node.alignments, col_widths) + "\n")
        for cells in rendered_rows[1:]:
            self._write(prefix + format_row(cells, col_widths) + "\n")

        location = node.source_location
        if location is not None and location.has_span and state.source_lines:
            start, end = location.line or 1, location.end_line or 1
            for line, message in check_source_columns(state.source_lines, start, end, num_cols):
                state.warn(line, message)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._write(f"{self._state.block_prefix}{self.options.thematic_break}\n")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._write_lines(node.content.strip("\n"))

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a footnote definition in place.

        Only reached for definitions that are not top-level blocks; top-level
        definitions are deferred by :meth:`visit_document`.
        """
        self._write(self._render_footnote_definition(node))

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a DefinitionList node.

        Parameters
        ----------
        node : DefinitionList
            Definition list to render

        """
        state = self._state
        for index, (term, descriptions) in enumerate(node.items):
            if index > 0:
                self._write(state.blank_line)
            term.accept(self)
            for i, description in enumerate(descriptions):
                if i > 0 and len(descriptions[i - 1].content) > 1:
                    self._write(state.blank_line)
                description.accept(self)

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        """Render a DefinitionTerm node on a single line."""
        text = self._escape_line_starts(self._render_inline_text(node.content).strip())
        self._write(f"{self._state.block_prefix}{text}\n")

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        """Render a DefinitionDescription node.

        The first block starts on the ``:   `` marker line; following blocks
        come after a blank line, indented by four spaces. Lists manage their
        own indentation.

        Parameters
        ----------
        node : DefinitionDescription
            Description to render

        """
        state = self._state
        prefix = state.block_prefix
        if not node.content:
            self._write(f"{prefix}:\n")
            return

        with state.description_details():
            for i, child in enumerate(node.content):
                if i == 0:
                    self._render_after_marker(child, prefix, ":   ")
                    continue
                self._write(state.blank_line)
                if isinstance(child, List):
                    child.accept(self)
                else:
                    with state.indented(HANGING_INDENT):
                        child.accept(self)

    def _render_after_marker(self, child: Node, prefix: str, marker: str) -> None:
        """Render ``child`` so that its first line continues after ``marker``.

        The child is rendered indented by the marker's width and the
        indentation of its first line is replaced by the marker.
        """
        state = self._state
        indent = " " * len(marker)
        if isinstance(child, List):
            text = self._render_captured(child)
        else:
            with state.indented(indent):
                text = self._render_captured(child)

        lead = prefix + indent
        if text.startswith(lead):
            self._write(prefix + marker + text[len(lead) :])
        else:
            self._write(prefix + marker.rstrip() + "\n" + text)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node, escaping Markdown syntax."""
        text = node.content.replace("\n", " ")
        if self.options.escape_special:
            text = escape_markdown(text)
        self._write(text)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._write(f"*{self._render_inline_content(node.content)}*")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._write(f"**{self._render_inline_content(node.content)}**")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._write(f"~~{self._render_inline_content(node.content)}~~")

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        The backtick fence is one longer than the longest backtick run in the
        code, and spaces in the span never become line breaks.

        Parameters
        ----------
        node : Code
            Code to render

        """
        content = node.content
        longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
        fence = "`" * (longest + 1)
        needs_padding = (
            content.startswith("`")
            or content.endswith("`")
            or (content.startswith(" ") and content.endswith(" ") and bool(content.strip()))
        )
        pad = " " if needs_padding else ""
        self._write(f"{fence}{pad}{content}{pad}{fence}".replace(" ", PROTECTED_SPACE))

    def visit_link(self, node: Link) -> None:
        """Render a Link node.

        Parameters
        ----------
        node : Link
            Link to render

        """
        if node.metadata.get("autolink"):
            label = "".join(child.content for child in node.content if isinstance(child, Text)) or node.url
            self._write(f"<{label}>")
            return

        content = self._render_inline_content(node.content)

        if self.options.link_style == "reference" and not self._force_inline_links:
            state = self._state
            if node.url not in state.link_references:
                ref_id = len(state.link_references) + 1
                state.link_references[node.url] = ref_id
                state.pending_link_references.append((ref_id, node.url, node.title))
            self._write(f"[{content}][{state.link_references[node.url]}]")
            return

        self._write(f"[{content}]({self._format_target(node.url, node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt = escape_markdown(node.alt_text) if self.options.escape_special else node.alt_text
        self._write(f"![{alt}]({self._format_target(node.url, node.title)})")

    def _format_target(self, url: str, title: Optional[str]) -> str:
        target = self._format_destination(url)
        if title:
            target += f' "{self._escape_title(title)}"'
        return target.replace(" ", PROTECTED_SPACE)

    @staticmethod
    def _format_destination(url: str) -> str:
        """Write a link destination, in angle brackets when it needs them."""
        if not url or any(char in url for char in " <>()"):
            escaped = url.replace("\\", "\\\\").replace("<", "\\<").replace(">", "\\>")
            return f"<{escaped}>"
        return _DEST_ESCAPABLE_RE.sub(r"\\\\", url)

    @staticmethod
    def _escape_title(title: str) -> str:
        return title.replace("\\", "\\\\").replace('"', '\\"').replace("\n", " ")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node; hard breaks use a trailing backslash."""
        self._write(" " if node.soft else "\\\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._write(node.content.replace("\n", " "))

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference node."""
        self._write(f"[^{node.identifier}]")
