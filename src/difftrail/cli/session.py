#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/difftrail/cli/session.py
"""Interactive walk through the commits of a branch.

Each screen shows one commit: its message, the files it changed and a
one-letter menu. The user moves to the next or previous commit, opens a
changed file as a highlighted diff against the previous commit, or checks
the commit out and runs the project. The original head is checked out again
when the session ends.
"""

from __future__ import annotations

import logging
import sys
from io import StringIO
from pathlib import Path
from typing import Callable, Iterator, Sequence, TextIO

from difftrail.constants import CLEAR_SCREEN, MAX_SELECTABLE_FILES
from difftrail.diff.renderers.highlight import HighlightRenderer
from difftrail.exceptions import DirtyTreeError, GitError, RunError
from difftrail.options.highlight import HighlightOptions
from difftrail.options.session import SessionOptions
from difftrail.vcs.git import GitRepository, changed_files, short_hash

logger = logging.getLogger(__name__)

Pager = Callable[[bytes, Sequence[str]], bool]
Runner = Callable[[SessionOptions], int]


def _default_pager(content: bytes, command: Sequence[str]) -> bool:
    from difftrail.cli.pager import page_bytes

    return page_bytes(content, command)


def _default_runner(options: SessionOptions, cwd: Path | None = None) -> int:
    from difftrail.cli.runner import run_project

    return run_project(options, cwd=cwd)


class CommitBrowser:
    """Step through the history of ``head`` one commit at a time.

    Parameters
    ----------
    repo : GitRepository
        Repository to browse
    head : str
        Revision whose history is browsed; checked out again on exit
    options : SessionOptions, optional
        Pager and run step configuration
    highlight_options : HighlightOptions, optional
        Options for rendering file diffs
    stdin : TextIO, optional
        Source of menu choices; defaults to ``sys.stdin``
    stdout : TextIO, optional
        Destination of the menu screens; defaults to ``sys.stdout``
    pager : callable, optional
        ``pager(content, command)`` displays a rendered diff and returns
        False if it had to print it instead of paging it
    runner : callable, optional
        ``runner(options)`` builds and runs the checked-out project

    """

    def __init__(
        self,
        repo: GitRepository,
        head: str,
        options: SessionOptions | None = None,
        highlight_options: HighlightOptions | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        pager: Pager | None = None,
        runner: Runner | None = None,
    ):
        """Initialize the browser."""
        self.repo = repo
        self.head = head
        self.options = options or SessionOptions()
        self.renderer = HighlightRenderer(highlight_options)
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.pager = pager or _default_pager
        self.runner = runner or (lambda opts: _default_runner(opts, cwd=repo.path))
        self._tokens = self._read_tokens()
        self._files: dict[str, dict[str, bytes]] = {}

    def run(self) -> None:
        """Run the interactive loop until the user quits.

        Raises
        ------
        DirtyTreeError
            If the working tree has uncommitted changes
        GitError
            If ``head`` has no commits or a git command fails

        """
        commits = self.repo.log(self.head)
        if not commits:
            raise GitError(f"no commits found for {self.head}")
        if not self.repo.is_clean():
            raise DirtyTreeError()

        try:
            self._loop(commits)
        finally:
            self.repo.checkout(self.head)

    def _loop(self, commits: list[str]) -> None:
        index = 0
        while True:
            commit = commits[index]
            files = self._list_files(commit)
            previous = self._list_files(commits[index - 1]) if index > 0 else {}
            changed = changed_files(previous, files)

            opts = self.menu_options(index, len(commits), changed)
            choice = self.read_choice(self.build_screen(self.repo.message(commit), changed, opts), opts)

            if choice == "q":
                return
            if choice == "n":
                index = min(index + 1, len(commits) - 1)
            elif choice == "p":
                index = max(index - 1, 0)
            elif choice == "r":
                self._run_commit(commit)
            else:
                name = changed[int(choice) - 1]
                self.show_file(name, previous.get(name, b""), files[name])

    def _list_files(self, commit: str) -> dict[str, bytes]:
        if commit not in self._files:
            self._files[commit] = self.repo.list_files(commit)
        return self._files[commit]

    @staticmethod
    def menu_options(index: int, count: int, changed: Sequence[str]) -> str:
        """Return the menu letters valid on the screen for commit ``index``."""
        opts = "qr"
        if index > 0:
            opts += "p"
        if index < count - 1:
            opts += "n"
        for number in range(1, min(len(changed), MAX_SELECTABLE_FILES) + 1):
            opts += str(number)
        return opts

    def build_screen(self, message: str, changed: Sequence[str], opts: str) -> str:
        """Format the screen for one commit, ending with the choice prompt."""
        screen = StringIO()
        if self.options.clear_screen:
            screen.write(CLEAR_SCREEN)
        screen.write(f"{message}\n\n")
        if changed:
            screen.write("Changed files:\n")
            for number, name in enumerate(changed, start=1):
                if number <= MAX_SELECTABLE_FILES:
                    screen.write(f"  [{number}] {name}\n")
                else:
                    screen.write(f"      {name}\n")
            screen.write("\n")
            if len(changed) > MAX_SELECTABLE_FILES:
                logger.warning("Only the first %d changed files can be selected", MAX_SELECTABLE_FILES)
        screen.write(f"Choice [{opts}]: ")
        return screen.getvalue()

    def _read_tokens(self) -> Iterator[str]:
        for line in self.stdin:
            yield from line.split()

    def read_choice(self, prompt: str, opts: str) -> str:
        """Prompt until the user enters a token starting with one of ``opts``.

        Only the first character of the token counts. End of input is
        treated as ``q``.
        """
        while True:
            self.stdout.write(prompt)
            self.stdout.flush()
            token = next(self._tokens, None)
            if token is None:
                self.stdout.write("\n")
                return "q"
            choice = token[:1]
            if choice in opts:
                return choice

    def show_file(self, name: str, before: bytes, after: bytes) -> None:
        """Render the diff of one file and hand it to the pager."""
        logger.info("Showing %s", name)
        if not self.pager(self.renderer.render(before, after), self.options.pager_command):
            # The printed diff would be cleared by the next screen
            self._wait_for_enter()

    def _run_commit(self, commit: str) -> None:
        self.repo.checkout(commit)
        try:
            status = self.runner(self.options)
        except RunError as e:
            self.stdout.write(f"{e}\n")
        else:
            self.stdout.write(f"\n[{short_hash(commit)}] exited with status {status}\n")
        self._wait_for_enter()

    def _wait_for_enter(self) -> None:
        self.stdout.write("Press Enter to continue...")
        self.stdout.flush()
        self.stdin.readline()
