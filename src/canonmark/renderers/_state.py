#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/renderers/_state.py
"""Mutable render context for the canonical Markdown renderer.

One :class:`RenderState` lives for exactly one document render. Nested
contexts (block quotes, lists, definition details) are entered and left in
strict stack order: every ``enter`` returns a snapshot that the matching
``exit`` restores.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Literal, Optional

from canonmark.ast.nodes import Node
from canonmark.constants import DESCRIPTION_LIST_INDENT
from canonmark.utils.directives import Directive

logger = logging.getLogger(__name__)

ListType = Literal["ordered", "unordered"]


@dataclass(frozen=True)
class FormatWarning:
    """Diagnostic produced while rendering.

    Parameters
    ----------
    line : int
        1-based source line the warning refers to
    message : str
        Human-readable description

    """

    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass
class FormatResult:
    """Canonical text of a document plus the warnings raised rendering it.

    Parameters
    ----------
    output : str
        Formatted document, ending with a single newline unless empty
    warnings : list of FormatWarning
        Diagnostics in the order they were produced

    """

    output: str
    warnings: list[FormatWarning] = field(default_factory=list)

    def changed(self, original: str) -> bool:
        """Whether formatting changed ``original``."""
        return self.output != original


class FormattingMode(Enum):
    """How the next top-level block is emitted, in increasing precedence."""

    ENABLED = 0
    SKIP_NEXT_BLOCK = 1
    SKIP_UNTIL_SECTION = 2
    DISABLED = 3
    DISABLED_FILE = 4

    @property
    def is_passthrough(self) -> bool:
        """Whether blocks are copied from the source instead of reformatted."""
        return self is not FormattingMode.ENABLED


@dataclass(frozen=True)
class BlockquoteState:
    """Snapshot of the nesting context taken when entering a block quote."""

    in_block_quote: bool
    blockquote_prefix: str
    blockquote_outer_indent: str
    blockquote_entry_list_depth: int
    list_item_indent: str
    list_type: Optional[ListType]
    list_depth: int
    list_tight: bool
    in_description_details: bool


@dataclass(frozen=True)
class ListState:
    """Snapshot of the list context taken when entering a list or details block."""

    list_item_indent: str
    list_type: Optional[ListType]
    list_depth: int
    list_tight: bool
    in_description_details: bool


@dataclass
class PendingFootnote:
    """A rendered footnote definition waiting for its flush point.

    Parameters
    ----------
    identifier : str
        Footnote label
    text : str
        Rendered definition, ending with a newline
    order : int
        Position among the document's footnote definitions
    reference_position : tuple of (int, int) or None
        Line and walk-order rank of the first reference; None if never
        referenced

    """

    identifier: str
    text: str
    order: int
    reference_position: Optional[tuple[int, int]] = None

    @property
    def reference_line(self) -> Optional[int]:
        return None if self.reference_position is None else self.reference_position[0]

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        if self.reference_position is None:
            return (1, 0, 0, self.order)
        line, rank = self.reference_position
        return (0, line, rank, self.order)


@dataclass
class RenderState:
    """Everything the renderer tracks while walking one document.

    Parameters
    ----------
    source_lines : list of str
        The original document split into lines, without line terminators.
        Used for verbatim passthrough and table diagnostics only.

    """

    source_lines: list[str] = field(default_factory=list)
    output: list[str] = field(default_factory=list)
    warnings: list[FormatWarning] = field(default_factory=list)

    # Block quotes
    in_block_quote: bool = False
    blockquote_prefix: str = ""
    blockquote_outer_indent: str = ""
    blockquote_entry_list_depth: int = 0

    # Lists
    list_item_indent: str = ""
    list_type: Optional[ListType] = None
    list_depth: int = 0
    list_tight: bool = True
    in_description_details: bool = False

    # Directives
    formatting_disabled: bool = False
    skip_next_block: bool = False
    skip_until_section: bool = False
    disabled_file: bool = False

    # Footnotes and reference links
    footnote_reference_positions: dict[str, tuple[int, int]] = field(default_factory=dict)
    pending_footnotes: list[PendingFootnote] = field(default_factory=list)
    link_references: dict[str, int] = field(default_factory=dict)
    pending_link_references: list[tuple[int, str, Optional[str]]] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def formatting_mode(self) -> FormattingMode:
        """Resolve the directive flags to the mode with highest precedence."""
        if self.disabled_file:
            return FormattingMode.DISABLED_FILE
        if self.formatting_disabled:
            return FormattingMode.DISABLED
        if self.skip_until_section:
            return FormattingMode.SKIP_UNTIL_SECTION
        if self.skip_next_block:
            return FormattingMode.SKIP_NEXT_BLOCK
        return FormattingMode.ENABLED

    def apply_directive(self, directive: Directive) -> None:
        """Update the directive flags for a recognised directive.

        ``ENABLE`` only lifts a persistent ``DISABLE``; scoped skips keep
        running until they expire on their own.
        """
        if directive is Directive.DISABLE_FILE:
            self.disabled_file = True
        elif directive is Directive.DISABLE_NEXT_LINE:
            self.skip_next_block = True
        elif directive is Directive.DISABLE_NEXT_SECTION:
            self.skip_until_section = True
        elif directive is Directive.DISABLE:
            self.formatting_disabled = True
        elif directive is Directive.ENABLE:
            self.formatting_disabled = False
        logger.debug("Applied directive %s, formatting mode is now %s", directive.value, self.formatting_mode().name)

    # ------------------------------------------------------------------
    # Prefixes
    # ------------------------------------------------------------------

    @property
    def block_prefix(self) -> str:
        """Prefix written at the start of every line of the current block."""
        return self.blockquote_prefix + self.list_item_indent

    @property
    def blank_line(self) -> str:
        """A blank line that stays inside every enclosing block quote."""
        return self.blockquote_prefix.rstrip() + "\n"

    # ------------------------------------------------------------------
    # Block quotes
    # ------------------------------------------------------------------

    def enter_block_quote(self) -> BlockquoteState:
        """Push one quote level and start a fresh list context inside it.

        Returns
        -------
        BlockquoteState
            Snapshot to hand back to :meth:`exit_block_quote`

        """
        saved = BlockquoteState(
            in_block_quote=self.in_block_quote,
            blockquote_prefix=self.blockquote_prefix,
            blockquote_outer_indent=self.blockquote_outer_indent,
            blockquote_entry_list_depth=self.blockquote_entry_list_depth,
            list_item_indent=self.list_item_indent,
            list_type=self.list_type,
            list_depth=self.list_depth,
            list_tight=self.list_tight,
            in_description_details=self.in_description_details,
        )

        self.in_block_quote = True
        self.blockquote_prefix = self.blockquote_prefix + self.list_item_indent + "> "
        self.blockquote_outer_indent = self.list_item_indent
        self.blockquote_entry_list_depth = self.list_depth

        self.list_item_indent = ""
        self.list_type = None
        self.list_depth = 0
        self.list_tight = True
        self.in_description_details = False
        return saved

    def exit_block_quote(self, saved: BlockquoteState) -> None:
        """Restore the context captured by :meth:`enter_block_quote`."""
        self.in_description_details = saved.in_description_details
        self.list_tight = saved.list_tight
        self.list_depth = saved.list_depth
        self.list_type = saved.list_type
        self.list_item_indent = saved.list_item_indent
        self.blockquote_entry_list_depth = saved.blockquote_entry_list_depth
        self.blockquote_outer_indent = saved.blockquote_outer_indent
        self.blockquote_prefix = saved.blockquote_prefix
        self.in_block_quote = saved.in_block_quote

    @contextmanager
    def block_quote(self) -> Iterator[BlockquoteState]:
        """Scope a block quote; the outer context is restored on any exit."""
        saved = self.enter_block_quote()
        try:
            yield saved
        finally:
            self.exit_block_quote(saved)

    # ------------------------------------------------------------------
    # Lists and definition details
    # ------------------------------------------------------------------

    def save_list_state(self) -> ListState:
        return ListState(
            list_item_indent=self.list_item_indent,
            list_type=self.list_type,
            list_depth=self.list_depth,
            list_tight=self.list_tight,
            in_description_details=self.in_description_details,
        )

    def restore_list_state(self, saved: ListState) -> None:
        self.list_item_indent = saved.list_item_indent
        self.list_type = saved.list_type
        self.list_depth = saved.list_depth
        self.list_tight = saved.list_tight
        self.in_description_details = saved.in_description_details

    @contextmanager
    def list_context(self, list_type: ListType, tight: bool) -> Iterator[str]:
        """Scope one list level.

        Yields
        ------
        str
            Indent at which the list's markers are written. At the top of a
            definition details body this is shifted by the details indent.

        """
        saved = self.save_list_state()
        base = self.list_item_indent
        if self.list_depth == 0 and self.in_description_details:
            base += DESCRIPTION_LIST_INDENT
        self.list_type = list_type
        self.list_tight = tight
        self.list_depth += 1
        try:
            yield base
        finally:
            self.restore_list_state(saved)

    @contextmanager
    def indented(self, extra: str) -> Iterator[None]:
        """Scope additional indentation of continuation lines."""
        saved = self.list_item_indent
        self.list_item_indent = saved + extra
        try:
            yield
        finally:
            self.list_item_indent = saved

    @contextmanager
    def description_details(self) -> Iterator[None]:
        """Scope the body of a definition list details block."""
        saved = self.save_list_state()
        self.in_description_details = True
        self.list_depth = 0
        self.list_type = None
        try:
            yield
        finally:
            self.restore_list_state(saved)

    # ------------------------------------------------------------------
    # Source access and diagnostics
    # ------------------------------------------------------------------

    def source_text(self, node: Node) -> Optional[str]:
        """Return the original source of ``node``, or None without a usable span.

        Trailing blank lines of the span are dropped.
        """
        location = node.source_location
        if location is None or not location.has_span or not self.source_lines:
            return None
        start = location.line or 0
        end = location.end_line or 0
        if start < 1 or start > len(self.source_lines) or end < start:
            return None
        lines = self.source_lines[start - 1 : min(end, len(self.source_lines))]
        while lines and not lines[-1].strip():
            lines.pop()
        if not lines:
            return None
        return "\n".join(lines)

    def warn(self, line: int, message: str) -> None:
        """Record a warning."""
        logger.debug("Warning at line %d: %s", line, message)
        self.warnings.append(FormatWarning(line=line, message=message))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write(self, text: str) -> None:
        self.output.append(text)

    def current_column(self) -> int:
        """Number of characters already written on the current output line."""
        column = 0
        for chunk in reversed(self.output):
            newline = chunk.rfind("\n")
            if newline != -1:
                return column + len(chunk) - newline - 1
            column += len(chunk)
        return column

    def getvalue(self) -> str:
        return "".join(self.output)
