"""Command-line interface for the canonmark Markdown formatter.

Files are rewritten in place unless ``--check`` or ``--diff`` is given.
Options come from the built-in defaults, then a configuration file (see
:mod:`canonmark.cli.config`), then command-line flags.

Examples
--------
Format files in place::

    $ canonmark README.md docs/*.md

Fail in CI when anything would change::

    $ canonmark --check docs/*.md

Show what would change::

    $ canonmark --diff README.md

Format standard input::

    $ cat notes.md | canonmark --stdin --line-width 100

Exit codes: 0 success, 1 ``--check`` found unformatted files, 3 invalid
options or configuration, 4 file errors, 6 parsing errors.

"""

import argparse
import difflib
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional, Sequence

from canonmark import __version__
from canonmark.api import format_markdown
from canonmark.cli.config import load_config_with_priority
from canonmark.constants import (
    EXIT_CHECK_FAILED,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from canonmark.exceptions import FileError, OutputWriteError, ParsingError, ValidationError
from canonmark.logging_utils import configure_logging
from canonmark.options.markdown import FormatterOptions
from canonmark.renderers._state import FormatResult
from canonmark.utils.io_utils import read_text_input, write_text_output

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser", "build_options"]

STDIN_NAME = "<stdin>"


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    """Add one flag per FormatterOptions field, driven by its field metadata."""
    group = parser.add_argument_group("formatting options")
    for field in fields(FormatterOptions):
        metadata = field.metadata
        flag = "--" + field.name.replace("_", "-")
        kwargs: dict[str, Any] = {"dest": field.name, "default": None, "help": metadata.get("help")}

        if field.type in (bool, "bool"):
            kwargs["action"] = argparse.BooleanOptionalAction
        else:
            if "choices" in metadata:
                kwargs["choices"] = metadata["choices"]
            if metadata.get("type") in (int, float):
                kwargs["type"] = metadata["type"]
                kwargs["metavar"] = "N"
        group.add_argument(flag, **kwargs)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the canonmark command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="canonmark",
        description="Rewrite Markdown files in canonical form.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Markdown files to format")
    parser.add_argument("--stdin", action="store_true", help="Read from standard input and write to standard output")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="Do not write; exit 1 if any file would change")
    mode.add_argument("--diff", action="store_true", help="Do not write; print a unified diff of the changes")

    parser.add_argument("--config", metavar="PATH", help="Configuration file to use instead of discovery")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    _add_option_arguments(parser)
    return parser


def build_options(parsed_args: argparse.Namespace, config: dict[str, Any]) -> FormatterOptions:
    """Combine defaults, configuration file values and command-line flags.

    Raises
    ------
    ValidationError
        If a configuration key is unknown or any value is invalid

    """
    options = FormatterOptions.from_mapping(config)
    overrides = {
        field.name: getattr(parsed_args, field.name)
        for field in fields(FormatterOptions)
        if getattr(parsed_args, field.name, None) is not None
    }
    return FormatterOptions.from_mapping(overrides, base=options)


def _report_warnings(name: str, result: FormatResult) -> None:
    for warning in result.warnings:
        print(f"{name}:{warning.line}: warning: {warning.message}", file=sys.stderr)


def _unified_diff(name: str, original: str, formatted: str) -> str:
    return "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            formatted.splitlines(keepends=True),
            fromfile=name,
            tofile=name,
        )
    )


def _process_source(
    name: str, source: Any, options: FormatterOptions, parsed_args: argparse.Namespace
) -> int:
    """Format one input and write, check or diff it.

    Returns
    -------
    int
        Exit code for this input

    """
    original = read_text_input(source)
    result = format_markdown(original, options)
    _report_warnings(name, result)
    changed = result.changed(original)

    if parsed_args.check:
        if changed:
            print(f"would reformat {name}", file=sys.stderr)
            return EXIT_CHECK_FAILED
        return EXIT_SUCCESS

    if parsed_args.diff:
        if changed:
            sys.stdout.write(_unified_diff(name, original, result.output))
        return EXIT_SUCCESS

    if name == STDIN_NAME:
        sys.stdout.write(result.output)
    elif changed:
        write_text_output(result.output, source)
        logger.info("Reformatted %s", name)
    else:
        logger.debug("%s already formatted", name)
    return EXIT_SUCCESS


def _process_with_exit_code(
    name: str, source: Any, options: FormatterOptions, parsed_args: argparse.Namespace
) -> int:
    """Run :func:`_process_source`, mapping canonmark errors to exit codes."""
    try:
        return _process_source(name, source, options, parsed_args)
    except ParsingError as e:
        print(f"{name}: error: {e}", file=sys.stderr)
        return EXIT_PARSING_ERROR
    except (FileError, OutputWriteError) as e:
        print(f"{name}: error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR


def main(args: Optional[Sequence[str]] = None) -> int:
    """Run the canonmark command.

    Parameters
    ----------
    args : sequence of str, optional
        Command-line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        "DEBUG" if parsed_args.trace else parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
    )

    if not parsed_args.files and not parsed_args.stdin:
        print("canonmark: error: no input files (pass FILE arguments or --stdin)", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    if parsed_args.files and parsed_args.stdin:
        print("canonmark: error: FILE arguments cannot be combined with --stdin", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        config = load_config_with_priority(parsed_args.config, no_config=parsed_args.no_config)
        options = build_options(parsed_args, config)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"canonmark: error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    logger.debug("Using options: %s", options.to_dict())

    if parsed_args.stdin:
        return _process_with_exit_code(STDIN_NAME, sys.stdin, options, parsed_args)

    exit_code = EXIT_SUCCESS
    for file_name in parsed_args.files:
        code = _process_with_exit_code(file_name, Path(file_name), options, parsed_args)
        exit_code = max(exit_code, code)
    return exit_code
