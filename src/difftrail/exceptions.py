#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for difftrail.

The diff and highlight engine itself never raises: it is defined for any two
byte strings. These exceptions cover the layers around it (options, config,
git plumbing, pager and run step).

Exception Hierarchy
-------------------
- DiffTrailError (base exception)

  - ValidationError (invalid option values)
  - ConfigError (unreadable or malformed configuration files)
  - FileError (files given on the command line)

  - GitError (git command failures)
    - DirtyTreeError (working tree has uncommitted changes)

  - PagerError (pager exited with an error)
  - RunError (build or run step failures)

"""

from typing import Any, Sequence


class DiffTrailError(Exception):
    """Root of the difftrail error hierarchy.

    Parameters
    ----------
    message : str
        What went wrong, suitable for printing to the user
    original_error : Exception, optional
        Lower-level exception this one wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DiffTrailError):
    """An option was given a value it cannot take.

    ``parameter_name`` and ``parameter_value`` identify the offending option
    when known.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigError(DiffTrailError):
    """A configuration file is missing, unreadable or malformed; ``config_path`` names it."""

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(DiffTrailError):
    """A file named on the command line cannot be read or written."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None) -> None:
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class _CommandError(DiffTrailError):
    """Shared shape for errors raised by external commands."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        output: str = "",
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.command = list(command) if command is not None else []
        self.returncode = returncode
        self.output = output

    def __str__(self) -> str:
        if self.output:
            return f"{self.message}\n{self.output.rstrip()}"
        return self.message


class GitError(_CommandError):
    """Exception raised when a git command fails.

    Parameters
    ----------
    message : str
        Description of the failed operation
    command : Sequence[str], optional
        The git command line that failed
    returncode : int, optional
        Exit status of the command
    output : str, optional
        Combined stdout and stderr of the command

    """


class DirtyTreeError(GitError):
    """Exception raised when the working tree has uncommitted changes."""

    def __init__(self, message: str | None = None):
        """Initialize with a default hint to run git status."""
        super().__init__(message or "git tree isn't clean; run git status and resolve")


class PagerError(_CommandError):
    """Exception raised when the pager exits with a failure status."""


class RunError(_CommandError):
    """Exception raised when the build or run step fails."""
