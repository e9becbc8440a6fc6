#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Highlight the changes between two files.

This module provides the ``diff`` command, which renders the second file
with the changes relative to the first highlighted, exactly as the commit
browser shows a changed file, and pages (or prints, or writes) the result.
"""
import argparse
import logging
import sys
from pathlib import Path

from difftrail.cli.builder import EXIT_FILE_ERROR, EXIT_SUCCESS, add_common_arguments, get_exit_code_for_exception
from difftrail.exceptions import DiffTrailError, FileError

logger = logging.getLogger(__name__)


def _create_diff_parser() -> argparse.ArgumentParser:
    """Parser for `difftrail diff ORIGINAL MODIFIED`."""
    parser = argparse.ArgumentParser(
        prog="difftrail diff",
        description="Show MODIFIED with the changes relative to ORIGINAL highlighted",
        add_help=True,
    )

    parser.add_argument("original", help="Original file (use '-' for stdin)")
    parser.add_argument("modified", help="Modified file (use '-' for stdin)")

    parser.add_argument("--output", "-o", help="Write the highlighted output to a file instead of paging it")
    parser.add_argument("--no-pager", action="store_true", help="Write to stdout instead of the pager")
    parser.add_argument("--pager", metavar="COMMAND", help="Pager command (default: less -R)")
    parser.add_argument(
        "--granularity",
        type=_validate_granularity,
        default=None,
        help="Merge changes within a line separated by fewer unchanged bytes than this (default: 2)",
    )
    add_common_arguments(parser)

    return parser


def _validate_granularity(value: str) -> int:
    """Argparse type for --granularity: a non-negative integer."""
    try:
        granularity = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"granularity must be an integer, got '{value}'") from e
    if granularity < 0:
        raise argparse.ArgumentTypeError(f"granularity must be non-negative, got {granularity}")
    return granularity


def _read_input(source: str) -> bytes:
    """Read a file, or stdin for ``-``.

    Raises
    ------
    FileError
        If the file does not exist or cannot be read

    """
    if source == "-":
        return sys.stdin.buffer.read()

    path = Path(source)
    if not path.is_file():
        raise FileError(f"Source file not found: {source}", source)
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileError(f"Cannot read {source}: {e}", source, e) from e


def handle_diff_command(args: list[str] | None = None) -> int:
    """Run `difftrail diff` with the arguments that follow the command name.

    Returns the process exit code.
    """
    parser = _create_diff_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    if parsed.original == "-" and parsed.modified == "-":
        print("Error: Cannot read both original and modified from stdin", file=sys.stderr)
        return EXIT_FILE_ERROR

    from difftrail.cli import load_options, setup_logging
    from difftrail.cli.pager import page_bytes, write_stdout
    from difftrail.diff.renderers.highlight import HighlightRenderer

    setup_logging(parsed)

    try:
        highlight_options, session_options = load_options(parsed)
        if parsed.granularity is not None:
            highlight_options = highlight_options.create_updated(byte_granularity=parsed.granularity)

        before = _read_input(parsed.original)
        after = _read_input(parsed.modified)
        output = HighlightRenderer(highlight_options).render(before, after)

        if parsed.output:
            output_path = Path(parsed.output)
            try:
                output_path.write_bytes(output)
            except OSError as e:
                raise FileError(f"Cannot write {output_path}: {e}", str(output_path), e) from e
            logger.info("Diff written to %s", output_path)
        elif parsed.no_pager or not sys.stdout.isatty():
            write_stdout(output)
        else:
            page_bytes(output, session_options.pager_command)

    except DiffTrailError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS
