#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/utils/io_utils.py
"""I/O utilities for reading Markdown sources and writing formatted output.

Line endings are normalised to ``\\n`` on read; the formatter works on
``\\n``-separated text only.

"""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Union

from canonmark.exceptions import FileError, FileNotFoundError, OutputWriteError


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_text_input(source: Union[str, Path, IO[str], IO[bytes]], encoding: str = "utf-8") -> str:
    """Read Markdown text from a path or a file-like object.

    Parameters
    ----------
    source : str, Path, IO[str] or IO[bytes]
        File path or open stream
    encoding : str, default "utf-8"
        Encoding used for paths and binary streams

    Returns
    -------
    str
        Document text with normalised line endings

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    FileError
        If the file cannot be read or decoded

    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(str(path))
        try:
            text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e
        return normalize_newlines(text)

    try:
        data = source.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read input stream: {e}", original_error=e) from e
    if isinstance(data, bytes):
        try:
            data = data.decode(encoding)
        except UnicodeDecodeError as e:
            raise FileError(f"Could not decode input stream: {e}", original_error=e) from e
    return normalize_newlines(data)


def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]], encoding: str = "utf-8") -> None:
    """Write text to a file path or file-like object.

    Parameters
    ----------
    text : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        Destination. Binary streams receive ``text`` encoded with ``encoding``.
    encoding : str, default "utf-8"
        Encoding for paths and binary streams

    Raises
    ------
    OutputWriteError
        If the destination cannot be written

    """
    if isinstance(output, (str, Path)):
        path = Path(output)
        try:
            # newline="" keeps "\n" as-is on every platform
            with open(path, "w", encoding=encoding, newline="") as f:
                f.write(text)
        except OSError as e:
            raise OutputWriteError(str(path), original_error=e) from e
        return

    try:
        if isinstance(output, io.TextIOBase) or "b" not in getattr(output, "mode", "w"):
            try:
                output.write(text)  # type: ignore[arg-type]
                return
            except TypeError:
                pass
        output.write(text.encode(encoding))  # type: ignore[arg-type]
    except OSError as e:
        raise OutputWriteError(getattr(output, "name", "<stream>"), original_error=e) from e
