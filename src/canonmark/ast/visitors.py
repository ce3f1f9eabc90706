#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Visitors keep algorithms (rendering, collecting) separate from the node
classes. Every ``visit_*`` method of :class:`NodeVisitor` falls back to
:meth:`NodeVisitor.generic_visit`, which visits the node's children, so a
subclass only overrides the node kinds it cares about and unknown kinds still
get a best-effort walk.

"""

from __future__ import annotations

from typing import Any

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
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    get_node_children,
)


class NodeVisitor:
    """Base class for AST node visitors.

    Examples
    --------
    Simple visitor that counts headings:

        >>> class HeadingCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_heading(self, node):
        ...         self.count += 1
        ...
        >>> counter = HeadingCounter()
        >>> document.accept(counter)
        >>> print(counter.count)

    """

    def generic_visit(self, node: Node) -> Any:
        """Visit every child of ``node`` in order.

        Parameters
        ----------
        node : Node
            The node whose children should be visited

        Returns
        -------
        Any
            Always None

        """
        for child in get_node_children(node):
            child.accept(self)
        return None

    # Block nodes

    def visit_document(self, node: Document) -> Any:
        return self.generic_visit(node)

    def visit_front_matter(self, node: FrontMatter) -> Any:
        return self.generic_visit(node)

    def visit_heading(self, node: Heading) -> Any:
        return self.generic_visit(node)

    def visit_paragraph(self, node: Paragraph) -> Any:
        return self.generic_visit(node)

    def visit_code_block(self, node: CodeBlock) -> Any:
        return self.generic_visit(node)

    def visit_block_quote(self, node: BlockQuote) -> Any:
        return self.generic_visit(node)

    def visit_alert(self, node: Alert) -> Any:
        return self.generic_visit(node)

    def visit_list(self, node: List) -> Any:
        return self.generic_visit(node)

    def visit_list_item(self, node: ListItem) -> Any:
        return self.generic_visit(node)

    def visit_table(self, node: Table) -> Any:
        return self.generic_visit(node)

    def visit_table_row(self, node: TableRow) -> Any:
        return self.generic_visit(node)

    def visit_table_cell(self, node: TableCell) -> Any:
        return self.generic_visit(node)

    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        return self.generic_visit(node)

    def visit_html_block(self, node: HTMLBlock) -> Any:
        return self.generic_visit(node)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        return self.generic_visit(node)

    def visit_definition_list(self, node: DefinitionList) -> Any:
        return self.generic_visit(node)

    def visit_definition_term(self, node: DefinitionTerm) -> Any:
        return self.generic_visit(node)

    def visit_definition_description(self, node: DefinitionDescription) -> Any:
        return self.generic_visit(node)

    # Inline nodes

    def visit_text(self, node: Text) -> Any:
        return self.generic_visit(node)

    def visit_emphasis(self, node: Emphasis) -> Any:
        return self.generic_visit(node)

    def visit_strong(self, node: Strong) -> Any:
        return self.generic_visit(node)

    def visit_strikethrough(self, node: Strikethrough) -> Any:
        return self.generic_visit(node)

    def visit_code(self, node: Code) -> Any:
        return self.generic_visit(node)

    def visit_link(self, node: Link) -> Any:
        return self.generic_visit(node)

    def visit_image(self, node: Image) -> Any:
        return self.generic_visit(node)

    def visit_line_break(self, node: LineBreak) -> Any:
        return self.generic_visit(node)

    def visit_html_inline(self, node: HTMLInline) -> Any:
        return self.generic_visit(node)

    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        return self.generic_visit(node)


class FootnoteReferenceCollector(NodeVisitor):
    """Record where each footnote is first referenced.

    Walks the whole tree, including footnote bodies, so references made from
    inside another footnote are seen too. References without a known line
    are ignored. Every reference also gets a sequence number in walk order,
    which ranks references that share a line.

    Examples
    --------
        >>> collector = FootnoteReferenceCollector()
        >>> document.accept(collector)
        >>> collector.reference_lines
        {'1': 3, 'note': 12}
        >>> collector.reference_positions
        {'1': (3, 0), 'note': (12, 4)}

    """

    def __init__(self) -> None:
        self.reference_positions: dict[str, tuple[int, int]] = {}
        self._sequence = 0

    @property
    def reference_lines(self) -> dict[str, int]:
        return {name: line for name, (line, _) in self.reference_positions.items()}

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        sequence = self._sequence
        self._sequence += 1
        if node.line is None:
            return
        position = (node.line, sequence)
        known = self.reference_positions.get(node.identifier)
        if known is None or position < known:
            self.reference_positions[node.identifier] = position


def collect_footnote_reference_positions(document: Document) -> dict[str, tuple[int, int]]:
    """Map each footnote name to ``(line, sequence)`` of its first reference.

    Parameters
    ----------
    document : Document
        Document to scan

    Returns
    -------
    dict
        Footnote identifier to its 1-based line and its rank in walk order

    """
    collector = FootnoteReferenceCollector()
    document.accept(collector)
    return dict(collector.reference_positions)


def collect_footnote_reference_lines(document: Document) -> dict[str, int]:
    """Map each footnote name to the first line referencing it."""
    return {name: line for name, (line, _) in collect_footnote_reference_positions(document).items()}
