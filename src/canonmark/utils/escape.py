#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/utils/escape.py
"""Markdown text escaping utilities.

Text nodes hold unescaped content; these helpers put back the backslashes
needed for the text to parse as the same text again, and nothing more.

"""

from __future__ import annotations

import re

_ENTITY_RE = re.compile(r"&(?:#[0-9]{1,7}|#[xX][0-9a-fA-F]{1,6}|[A-Za-z][A-Za-z0-9]{1,31});")

_LINE_START_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # ATX heading
    (re.compile(r"^(#{1,6})(?=\s|$)"), r"\\\1"),
    # Bullet or definition marker followed by space
    (re.compile(r"^([-+:~])(?=\s|$)"), r"\\\1"),
    # Ordered list marker
    (re.compile(r"^(\d{1,9})([.)])(?=\s|$)"), r"\1\\\2"),
    # Block quote
    (re.compile(r"^>"), r"\\>"),
    # Setext underline or thematic break made of '=' / '-'
    (re.compile(r"^([=-])(?=[=\-\s]*$)"), r"\\\1"),
    # Tilde fence (backticks are always escaped)
    (re.compile(r"^(~~~)"), r"\\\1"),
)


def escape_markdown(text: str) -> str:
    """Escape special markdown characters with context awareness.

    - Always escaped: backslash, backtick, asterisk, brackets
    - ``_`` only at word boundaries (``snake_case`` stays readable)
    - ``<`` only where it could start a tag or autolink
    - ``~`` only when doubled (strikethrough)
    - ``&`` only where it would start a character reference

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("snake_case *stars* [x]")
        'snake_case \\\\*stars\\\\* \\\\[x\\\\]'

    """
    always_escape = "\\`*[]"

    escaped_chars = []
    for i, char in enumerate(text):
        prev_char = text[i - 1] if i > 0 else ""
        next_char = text[i + 1] if i < len(text) - 1 else ""
        if char in always_escape:
            escaped_chars.append("\\" + char)
        elif char == "_":
            # Smart underscore escaping: don't escape if in middle of word
            if prev_char.isalnum() and next_char.isalnum():
                escaped_chars.append(char)
            else:
                escaped_chars.append("\\_")
        elif char == "<":
            if next_char.isalpha() or next_char in "/!?":
                escaped_chars.append("\\<")
            else:
                escaped_chars.append(char)
        elif char == "~":
            if prev_char == "~" or next_char == "~":
                escaped_chars.append("\\~")
            else:
                escaped_chars.append(char)
        elif char == "&":
            if _ENTITY_RE.match(text, i):
                escaped_chars.append("\\&")
            else:
                escaped_chars.append(char)
        else:
            escaped_chars.append(char)

    return "".join(escaped_chars)


def escape_line_start(text: str) -> str:
    """Escape a construct at the start of a line that would open a block.

    Only the beginning of ``text`` is inspected; the caller passes the text
    that will start an output line.

    Parameters
    ----------
    text : str
        Already inline-escaped text beginning a line

    Returns
    -------
    str
        Text whose first characters no longer start a block

    Examples
    --------
        >>> escape_line_start("1. not a list")
        '1\\\\. not a list'

    """
    for pattern, replacement in _LINE_START_RULES:
        if pattern.search(text):
            return pattern.sub(replacement, text, count=1)
    return text


def escape_table_cell(text: str) -> str:
    r"""Escape pipe characters for safe embedding in a table cell.

    A pipe already preceded by an odd number of backslashes is escaped and
    left alone.

    Parameters
    ----------
    text : str
        Rendered inline cell content

    Returns
    -------
    str
        Content in which every pipe is written ``\|``

    Examples
    --------
        >>> escape_table_cell("a|b")
        'a\\|b'
        >>> escape_table_cell("a\\|b")
        'a\\|b'

    """
    if "|" not in text:
        return text

    result = []
    backslashes = 0
    for char in text:
        if char == "|" and backslashes % 2 == 0:
            result.append("\\|")
        else:
            result.append(char)
        backslashes = backslashes + 1 if char == "\\" else 0
    return "".join(result)


def count_unescaped_pipes(line: str) -> int:
    """Count pipe characters not immediately preceded by a backslash.

    Pipes inside code spans are counted too: GFM splits table cells before
    it recognises code spans.

    Parameters
    ----------
    line : str
        One raw source line

    Returns
    -------
    int
        Number of column-separating pipes

    """
    count = 0
    prev_char = ""
    for char in line:
        if char == "|" and prev_char != "\\":
            count += 1
        prev_char = char
    return count
