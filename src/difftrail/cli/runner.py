#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/difftrail/cli/runner.py
"""Build and run the project at the checked-out commit."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from difftrail.exceptions import RunError
from difftrail.options.session import SessionOptions

logger = logging.getLogger(__name__)


def run_project(options: SessionOptions, cwd: str | Path | None = None) -> int:
    """Run the build command, then the run command, in ``cwd``.

    The build output is captured and only shown on failure; the program
    itself inherits the terminal. The build artifact, if configured, is
    removed afterwards whatever the outcome.

    Parameters
    ----------
    options : SessionOptions
        Provides the build/run commands and the artifact name
    cwd : str or Path, optional
        Working tree to run in; defaults to the current directory

    Returns
    -------
    int
        Exit status of the run command

    Raises
    ------
    RunError
        If the build fails or either command cannot be started

    """
    workdir = Path(cwd) if cwd is not None else Path.cwd()
    try:
        if options.build_command:
            _build(list(options.build_command), workdir)

        command = list(options.run_command)
        logger.info("Running %s", " ".join(command))
        try:
            result = subprocess.run(command, cwd=workdir, check=False)
        except OSError as e:
            raise RunError(f"Could not start {command[0]}: {e}", command=command, original_error=e) from e
        if result.returncode != 0:
            logger.warning("%s exited with status %d", command[0], result.returncode)
        return result.returncode
    finally:
        if options.artifact:
            (workdir / options.artifact).unlink(missing_ok=True)


def _build(command: list[str], workdir: Path) -> None:
    logger.info("Building with %s", " ".join(command))
    try:
        result = subprocess.run(command, cwd=workdir, capture_output=True, check=False)
    except OSError as e:
        raise RunError(f"Could not start {command[0]}: {e}", command=command, original_error=e) from e
    if result.returncode != 0:
        raise RunError(
            f"build failed (exit status {result.returncode})",
            command=command,
            returncode=result.returncode,
            output=(result.stdout + result.stderr).decode("utf-8", errors="replace"),
        )
