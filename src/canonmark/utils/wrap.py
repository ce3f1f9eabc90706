#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/utils/wrap.py
"""Greedy word wrapping for rendered inline Markdown.

The input is one logical line of rendered inline content. Newlines in it are
hard breaks and always survive as line breaks. Spaces that must not become
line breaks (inside code spans and link destinations) are carried as
:data:`PROTECTED_SPACE` and turned back into plain spaces on output.

"""

from __future__ import annotations

import re

from canonmark.utils.escape import escape_line_start

PROTECTED_SPACE = "\x00"

# HTML block start conditions 1-6 of CommonMark; only these interrupt a paragraph
_HTML_BLOCK_TAGS = (
    "address|article|aside|base|basefont|blockquote|body|caption|center|col|colgroup|dd|details|dialog|dir|div|"
    "dl|dt|fieldset|figcaption|figure|footer|form|frame|frameset|h[1-6]|head|header|hr|html|iframe|legend|li|"
    "link|main|menu|menuitem|nav|noframes|ol|optgroup|option|p|param|pre|script|search|section|style|summary|"
    "table|tbody|td|textarea|tfoot|th|thead|title|tr|track|ul"
)

# Tokens that would open a block construct (and so change the document) if
# they started a continuation line of a paragraph
_BLOCK_OPENER_RE = re.compile(
    r"""
    [-+*:~]                     # bullet, definition marker
    | \#{1,6}                   # ATX heading
    | \d{1,9}[.)]               # ordered list marker
    | =+ | -+                   # setext underline
    | \*{3,} | _{3,}            # thematic break
    | >.*                       # block quote
    | <(?:[!?].*|/?(?:%s)(?:[\s/>].*)?)  # HTML block
    | (?:`{3,}|~{3,}).*         # code fence
    | \[\^[^\]]+\]:.*           # footnote definition
    """
    % _HTML_BLOCK_TAGS,
    re.VERBOSE | re.IGNORECASE,
)


def opens_block(word: str) -> bool:
    """Return True if ``word`` at the start of a line would begin a new block.

    Parameters
    ----------
    word : str
        A single whitespace-free token

    Returns
    -------
    bool
        Whether a paragraph continuation line must not start with it

    """
    return _BLOCK_OPENER_RE.fullmatch(word) is not None


def restore_protected_spaces(text: str) -> str:
    """Replace protected spaces with ordinary spaces."""
    return text.replace(PROTECTED_SPACE, " ")


def _carry_down(line_words: list[str], word: str, prefix_len: int, width: int) -> list[str]:
    """Choose the words that start the next line when ``word`` opens a block.

    Trailing words of ``line_words`` move down with ``word`` until the new
    line starts with an ordinary word, as long as the new line still fits.
    When no such break exists ``word`` starts the line with its marker
    escaped. ``line_words`` is shortened in place.

    """
    carried = [word]
    kept = len(line_words)
    while kept > 1 and opens_block(carried[0]):
        candidate = [line_words[kept - 1], *carried]
        if prefix_len + len(" ".join(candidate)) > width:
            break
        carried = candidate
        kept -= 1

    if opens_block(carried[0]):
        escaped = escape_line_start(word)
        if escaped == word and not word[0].isalnum():
            escaped = "\\" + word
        return [escaped]
    del line_words[kept:]
    return carried


def wrap_text_first_line(
    text: str,
    first_prefix: str,
    continuation_prefix: str,
    width: int,
    initial_column: int = 0,
) -> str:
    """Wrap text greedily, with a distinct prefix for the first line.

    Words are accumulated until the next one would push the line past
    ``width``; a single word is never split, so a word longer than the width
    sits alone on an overlong line. A word that would open a block construct
    never starts a continuation line: the word before it moves down too, or
    failing that its marker is escaped.

    Parameters
    ----------
    text : str
        Rendered inline content; ``\\n`` marks hard breaks
    first_prefix : str
        Prefix of the first output line
    continuation_prefix : str
        Prefix of every following line
    width : int
        Maximum line length, prefixes included
    initial_column : int, default 0
        Characters already present on the first line before ``first_prefix``
        (for instance a list marker emitted by the caller)

    Returns
    -------
    str
        Wrapped lines joined by ``\\n``, without a trailing newline

    Examples
    --------
        >>> wrap_text_first_line("alpha beta gamma", "", "  ", 11)
        'alpha beta\\n  gamma'

    """
    lines: list[str] = []
    offset = initial_column
    prefix = first_prefix

    for segment in text.split("\n"):
        line_words: list[str] = []
        current_len = offset + len(prefix)

        for word in segment.split():
            if not line_words or current_len + 1 + len(word) <= width:
                current_len += len(word) + (1 if line_words else 0)
                line_words.append(word)
                continue

            carried = [word]
            if opens_block(word):
                carried = _carry_down(line_words, word, len(continuation_prefix), width)
            lines.append(prefix + " ".join(line_words))
            prefix = continuation_prefix
            line_words = carried
            current_len = len(prefix) + len(" ".join(line_words))

        lines.append(prefix + " ".join(line_words))
        # Hard breaks always continue on a fresh continuation line
        prefix = continuation_prefix
        offset = 0

    return restore_protected_spaces("\n".join(line.rstrip() for line in lines))


def wrap_text(text: str, prefix: str, width: int) -> str:
    """Wrap text greedily with the same prefix on every line.

    Parameters
    ----------
    text : str
        Rendered inline content; ``\\n`` marks hard breaks
    prefix : str
        Prefix of every output line (``"> "`` inside a block quote)
    width : int
        Maximum line length, prefix included

    Returns
    -------
    str
        Wrapped lines joined by ``\\n``, without a trailing newline

    """
    return wrap_text_first_line(text, prefix, prefix, width)
