"""Configuration options for the interactive commit browser."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Any

from difftrail.constants import (
    DEFAULT_ARTIFACT,
    DEFAULT_BUILD_COMMAND,
    DEFAULT_PAGER_COMMAND,
    DEFAULT_RUN_COMMAND,
)
from difftrail.exceptions import ValidationError
from difftrail.options.base import BaseOptions


def _to_command(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(shlex.split(value))
    if isinstance(value, (list, tuple)) and all(isinstance(part, str) for part in value):
        return tuple(value)
    raise ValidationError(f"{name} must be a string or a list of strings, got {value!r}", name, value)


@dataclass(frozen=True)
class SessionOptions(BaseOptions):
    """Configuration options for browsing commits.

    Parameters
    ----------
    pager_command : tuple[str, ...]
        Pager that receives highlighted diffs on stdin; it must pass ANSI
        escapes through (``less -R``)
    build_command : tuple[str, ...]
        Build step run in the checked-out tree; empty to skip building
    run_command : tuple[str, ...]
        Program run after a successful build
    artifact : str or None
        File produced by the build and removed after the run
    clear_screen : bool
        Clear the terminal before showing each commit

    """

    pager_command: tuple[str, ...] = field(
        default=tuple(DEFAULT_PAGER_COMMAND),
        metadata={"help": "Pager command reading highlighted output on stdin"},
    )
    build_command: tuple[str, ...] = field(
        default=tuple(DEFAULT_BUILD_COMMAND),
        metadata={"help": "Build command run before the run command (empty to skip)"},
    )
    run_command: tuple[str, ...] = field(
        default=tuple(DEFAULT_RUN_COMMAND),
        metadata={"help": "Command run in the checked-out tree"},
    )
    artifact: str | None = field(
        default=DEFAULT_ARTIFACT,
        metadata={"help": "Build output removed after the run command finishes"},
    )
    clear_screen: bool = field(
        default=True,
        metadata={"help": "Clear the terminal before each commit screen"},
    )

    def __post_init__(self) -> None:
        """Validate command shapes.

        Raises
        ------
        ValidationError
            If the pager or run command is empty.

        """
        if not self.pager_command:
            raise ValidationError("pager_command must not be empty", "pager_command", self.pager_command)
        if not self.run_command:
            raise ValidationError("run_command must not be empty", "run_command", self.run_command)

    @classmethod
    def _convert_value(cls, name: str, value: Any) -> Any:
        if name.endswith("_command"):
            return _to_command(name, value)
        if name == "artifact":
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"artifact must be a string, got {value!r}", name, value)
            return value or None
        if name == "clear_screen" and not isinstance(value, bool):
            raise ValidationError(f"clear_screen must be a boolean, got {value!r}", name, value)
        return value
