#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for canonical Markdown rendering.

This module defines the options that control the formatter's output style.
"""
# src/canonmark/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from canonmark.constants import (
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_LINE_WIDTH,
    DEFAULT_LINK_STYLE,
    DEFAULT_THEMATIC_BREAK,
    DEFAULT_UNORDERED_MARKER,
    CodeFenceChar,
    LinkStyleType,
    UnorderedMarker,
)
from canonmark.exceptions import ValidationError
from canonmark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class FormatterOptions(BaseRendererOptions):
    r"""Options for rendering an AST back to canonical Markdown.

    Parameters
    ----------
    line_width : int, default 80
        Maximum width of wrapped paragraph lines, prefixes included.
    code_fence_char : {"\`", "~"}, default "~"
        Character used for code fences.
    code_fence_min : int, default 4
        Minimum length of code fences. Fences grow past any run of the fence
        character inside the code.
    unordered_marker : {"-", "\*", "+"}, default "-"
        Bullet character for unordered lists.
    thematic_break : str, default "\*  \*  \*  \*  \*"
        Literal used for thematic breaks.
    link_style : {"inline", "reference"}, default "inline"
        Link style to use:
        - "inline": [text](url) style links
        - "reference": [text][n] style with definitions flushed at each section
          boundary and at the end of the document
    escape_special : bool, default True
        Whether to escape special Markdown characters in text content.

    """

    line_width: int = field(
        default=DEFAULT_LINE_WIDTH,
        metadata={"help": "Maximum line width for wrapped paragraphs", "type": int},
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={"help": "Character to use for code fences", "choices": ["`", "~"]},
    )
    code_fence_min: int = field(
        default=DEFAULT_CODE_FENCE_MIN,
        metadata={"help": "Minimum code fence length", "type": int},
    )
    unordered_marker: UnorderedMarker = field(
        default=DEFAULT_UNORDERED_MARKER,
        metadata={"help": "Bullet character for unordered lists", "choices": ["-", "*", "+"]},
    )
    thematic_break: str = field(
        default=DEFAULT_THEMATIC_BREAK,
        metadata={"help": "Literal used for thematic breaks"},
    )
    link_style: LinkStyleType = field(
        default=DEFAULT_LINK_STYLE,
        metadata={"help": "Link style to use", "choices": ["inline", "reference"]},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape special Markdown characters in text content"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and choices.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.line_width <= 0:
            raise ValueError(f"line_width must be positive, got {self.line_width}")

        if self.code_fence_min < 3:
            raise ValueError(f"code_fence_min must be at least 3, got {self.code_fence_min}")

        for name in ("code_fence_char", "unordered_marker", "link_style"):
            choices = self.__dataclass_fields__[name].metadata["choices"]
            value = getattr(self, name)
            if value not in choices:
                raise ValueError(f"{name} must be one of {choices}, got {value!r}")

        stripped = self.thematic_break.replace(" ", "")
        if len(stripped) < 3 or len(set(stripped)) != 1 or stripped[0] not in "-*_":
            raise ValueError(f"thematic_break is not a valid thematic break: {self.thematic_break!r}")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any], base: FormatterOptions | None = None) -> FormatterOptions:
        """Build options from a configuration mapping.

        Keys may use dashes or underscores (``line-width`` or ``line_width``).

        Parameters
        ----------
        config : Mapping
            Configuration values, typically loaded from a config file
        base : FormatterOptions, optional
            Options to start from; defaults are used when omitted

        Returns
        -------
        FormatterOptions
            Options with the configured values applied

        Raises
        ------
        ValidationError
            If a key is unknown or a value is invalid

        """
        known = cls.field_names()
        updates: dict[str, Any] = {}
        for raw_key, value in config.items():
            key = str(raw_key).replace("-", "_")
            if key not in known:
                raise ValidationError(
                    f"Unknown configuration key: {raw_key!r}", parameter_name=str(raw_key), parameter_value=value
                )
            updates[key] = value

        try:
            return (base or cls()).create_updated(**updates)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid configuration: {e}", original_error=e) from e
