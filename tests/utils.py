"""Test utilities for the canonmark test suite.

This module provides helpers for temporary directories and for running text
through the full parse and render pipeline.
"""

import shutil
import tempfile
from pathlib import Path

from canonmark.api import format_markdown
from canonmark.options import FormatterOptions


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def fmt(text: str, **options) -> str:
    """Format ``text`` and return only the output."""
    return format_markdown(text, FormatterOptions(**options)).output


def assert_idempotent(text: str, **options) -> str:
    """Format ``text`` twice and check the second pass changes nothing.

    Returns
    -------
    str
        The formatted text

    """
    once = fmt(text, **options)
    twice = fmt(once, **options)
    assert twice == once, f"not idempotent:\n--- first ---\n{once}\n--- second ---\n{twice}"
    return once
