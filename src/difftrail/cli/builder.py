#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/difftrail/cli/builder.py
"""Argument parser and exit codes for the difftrail CLI."""

import argparse
import os

from difftrail import __version__
from difftrail.constants import ENV_LOG_LEVEL
from difftrail.exceptions import (
    ConfigError,
    DirtyTreeError,
    FileError,
    GitError,
    PagerError,
    RunError,
    ValidationError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_GIT_ERROR = 5
EXIT_DIRTY_TREE = 6
EXIT_RUN_ERROR = 7

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging arguments shared by every command."""
    parser.add_argument("--config", metavar="PATH", help="Configuration file (TOML, YAML or JSON)")
    parser.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore configuration files, including DIFFTRAIL_CONFIG and auto-discovered files",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=os.environ.get(ENV_LOG_LEVEL, "WARNING").upper(),
        help="Logging level (default: WARNING, or DIFFTRAIL_LOG_LEVEL)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose log format with timestamps and logger names")


def create_parser() -> argparse.ArgumentParser:
    """Create the parser for the commit browser (the default command)."""
    parser = argparse.ArgumentParser(
        prog="difftrail",
        description="Step through the commits of a branch, showing what each commit changed. "
        "Use 'difftrail diff OLD NEW' to highlight the changes between two files.",
    )
    parser.add_argument("head", metavar="HEAD-REV", help="Branch or revision whose history to walk")
    parser.add_argument("--repo", "-C", metavar="PATH", default=None, help="Repository directory (default: cwd)")
    parser.add_argument("--pager", metavar="COMMAND", help="Pager command (default: less -R)")
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the screen between commits")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    add_common_arguments(parser)
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    # Most specific first: DirtyTreeError is also a GitError
    if isinstance(exception, DirtyTreeError):
        return EXIT_DIRTY_TREE

    if isinstance(exception, GitError):
        return EXIT_GIT_ERROR

    if isinstance(exception, (ValidationError, ConfigError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, (RunError, PagerError)):
        return EXIT_RUN_ERROR

    return EXIT_ERROR
