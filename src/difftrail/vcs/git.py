#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/difftrail/vcs/git.py
"""Read commits and file contents from a git repository.

All access goes through the ``git`` command line, so any repository git
itself can read is supported. Commands run with captured output; a failing
command raises :class:`~difftrail.exceptions.GitError` carrying that output.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from difftrail.exceptions import GitError

logger = logging.getLogger(__name__)


class GitRepository:
    """Thin wrapper around the git plumbing commands difftrail needs.

    Parameters
    ----------
    path : str or Path, optional
        Working directory of the repository; defaults to the current directory
    git : str, default "git"
        Git executable

    """

    def __init__(self, path: str | Path | None = None, git: str = "git"):
        """Initialize the repository wrapper."""
        self.path = Path(path) if path is not None else None
        self.git = git

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        command = [self.git, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            return subprocess.run(command, cwd=self.path, capture_output=True, check=False)
        except OSError as e:
            raise GitError(f"Could not run {self.git}: {e}", command=command, original_error=e) from e

    def _check(self, what: str, *args: str) -> bytes:
        result = self._run(*args)
        if result.returncode != 0:
            output = (result.stdout + result.stderr).decode("utf-8", errors="replace")
            raise GitError(
                f"{what} failed (exit status {result.returncode})",
                command=result.args,
                returncode=result.returncode,
                output=output,
            )
        return result.stdout

    def log(self, rev: str) -> list[str]:
        """Return the hashes of the commits reachable from ``rev``, oldest first."""
        out = self._check(f"git log {rev}", "log", "--pretty=format:%H", "--reverse", rev)
        return out.decode("ascii").split()

    def is_clean(self) -> bool:
        """Return True if the working tree has no uncommitted changes."""
        result = self._run("status", "-s")
        return result.returncode == 0 and not result.stdout and not result.stderr

    def message(self, rev: str) -> str:
        """Return the full commit message of ``rev``."""
        out = self._check(f"git show {rev}", "show", "--pretty=format:%B", "-s", rev)
        return out.decode("utf-8", errors="replace").strip()

    def read_blob(self, object_hash: str) -> bytes:
        """Return the raw contents of a blob."""
        return self._check(f"git cat-file {object_hash}", "cat-file", "-p", object_hash)

    def list_files(self, rev: str) -> dict[str, bytes]:
        """Return the top-level files of ``rev`` mapped to their contents.

        Only blobs directly in the root tree are returned; subdirectories and
        submodules are skipped.
        """
        # -z: NUL-terminated entries with paths left unquoted
        out = self._check(f"git ls-tree {rev}", "ls-tree", "-z", rev)
        files: dict[str, bytes] = {}
        for entry in out.decode("utf-8", errors="surrogateescape").split("\0"):
            # <mode> SP <type> SP <object> TAB <path>
            meta, sep, name = entry.partition("\t")
            parts = meta.split()
            if not sep or len(parts) != 3:
                continue
            _mode, object_type, object_hash = parts
            if object_type != "blob":
                logger.debug("Skipping %s entry %s", object_type, name)
                continue
            files[name] = self.read_blob(object_hash)
        return files

    def checkout(self, rev: str) -> None:
        """Check out ``rev`` in the working tree."""
        self._check(f"git checkout {rev}", "checkout", rev)
        logger.info("Checked out %s", rev)


def changed_files(previous: dict[str, bytes], current: dict[str, bytes]) -> list[str]:
    """Return the sorted names in ``current`` whose content differs from ``previous``.

    Files that only exist in ``previous`` (deleted files) are not listed since
    there is nothing left to show for them.
    """
    return sorted(name for name, body in current.items() if previous.get(name) != body)


def short_hash(commit: str, length: int = 10) -> str:
    return commit[:length]
