#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/difftrail/cli/commands/__init__.py
"""Subcommand dispatch for the difftrail CLI."""

import logging
import sys

# Note: command handlers are imported lazily in dispatch_command

logger = logging.getLogger(__name__)


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Run a subcommand if the arguments name one.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments

    Returns
    -------
    int or None
        Exit code if a subcommand was handled, None otherwise

    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] == "diff":
        from difftrail.cli.commands.diff import handle_diff_command

        return handle_diff_command(args[1:])

    return None
