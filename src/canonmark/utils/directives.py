#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/utils/directives.py
"""Recognition of formatter control comments.

A directive is an HTML comment block such as ``<!-- canonmark-disable -->``.
Recognition is a pure classification of the block's literal text; applying a
directive is the renderer's job.

"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from canonmark.constants import (
    DIRECTIVE_DISABLE,
    DIRECTIVE_DISABLE_FILE,
    DIRECTIVE_DISABLE_NEXT_LINE,
    DIRECTIVE_DISABLE_NEXT_SECTION,
    DIRECTIVE_ENABLE,
)

_COMMENT_RE = re.compile(r"\A\s*<!--(?P<body>.*?)-->\s*\Z", re.DOTALL)


class Directive(Enum):
    """Formatting-control directives, valued by their marker token."""

    DISABLE_FILE = DIRECTIVE_DISABLE_FILE
    DISABLE_NEXT_LINE = DIRECTIVE_DISABLE_NEXT_LINE
    DISABLE_NEXT_SECTION = DIRECTIVE_DISABLE_NEXT_SECTION
    DISABLE = DIRECTIVE_DISABLE
    ENABLE = DIRECTIVE_ENABLE

    @classmethod
    def parse(cls, literal: str) -> Optional[Directive]:
        """Classify the literal text of an HTML block.

        Parameters
        ----------
        literal : str
            Raw HTML block content

        Returns
        -------
        Directive or None
            The directive the comment carries, or None when the literal is
            not exactly one directive comment

        Examples
        --------
            >>> Directive.parse("<!-- canonmark-disable-next-line -->")
            <Directive.DISABLE_NEXT_LINE: 'canonmark-disable-next-line'>
            >>> Directive.parse("<!-- just a comment -->") is None
            True

        """
        match = _COMMENT_RE.match(literal)
        if match is None:
            return None
        token = match.group("body").strip().lower()
        try:
            return cls(token)
        except ValueError:
            return None


def parse_directive(literal: str) -> Optional[Directive]:
    """Classify ``literal`` as a directive; see :meth:`Directive.parse`."""
    return Directive.parse(literal)
