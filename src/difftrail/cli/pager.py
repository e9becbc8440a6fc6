#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/difftrail/cli/pager.py
"""Hand rendered output to a pager.

Highlighted output carries raw ANSI escapes, so the pager must pass them
through (``less -R``). If the pager cannot be started at all the output is
written straight to stdout instead.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from typing import BinaryIO, Sequence

from difftrail.constants import ENV_PAGER
from difftrail.exceptions import PagerError

logger = logging.getLogger(__name__)


def resolve_pager_command(configured: Sequence[str]) -> list[str]:
    """Return the pager command, preferring the ``DIFFTRAIL_PAGER`` environment variable."""
    env_pager = os.environ.get(ENV_PAGER, "").strip()
    if env_pager:
        return shlex.split(env_pager)
    return list(configured)


def write_stdout(content: bytes, stream: BinaryIO | None = None) -> None:
    target = stream or sys.stdout.buffer
    target.write(content)
    target.flush()


def page_bytes(content: bytes, command: Sequence[str]) -> bool:
    """Feed ``content`` to ``command`` on stdin and wait for it to exit.

    Parameters
    ----------
    content : bytes
        Rendered output
    command : Sequence[str]
        Pager command line

    Returns
    -------
    bool
        False if the pager could not be started and ``content`` was written
        to stdout instead

    Raises
    ------
    PagerError
        If the pager exits with a non-zero status

    """
    command = list(command)
    try:
        result = subprocess.run(command, input=content, check=False)
    except OSError as e:
        logger.warning("Could not start pager %s (%s); writing to stdout", command[0], e)
        write_stdout(content)
        return False

    if result.returncode != 0:
        raise PagerError(f"pager {command[0]} exited with status {result.returncode}", command, result.returncode)
    return True
