#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options for the canonical Markdown formatter."""

from canonmark.options.base import BaseRendererOptions, CloneFrozenMixin
from canonmark.options.markdown import FormatterOptions

__all__ = ["BaseRendererOptions", "CloneFrozenMixin", "FormatterOptions"]
