"""Command-line interface for difftrail.

``difftrail HEAD-REV`` walks the history of ``HEAD-REV`` in the repository in
the current directory, one commit at a time. For each commit it shows the
message and the changed files; picking a file pages the new version with its
changes highlighted.

Environment Variable Support
----------------------------
- ``DIFFTRAIL_CONFIG``: configuration file used when ``--config`` is not given
- ``DIFFTRAIL_PAGER``: pager command, overriding the configuration
- ``DIFFTRAIL_LOG_LEVEL``: default for ``--log-level``

Examples
--------
Walk the history of main::

    $ difftrail main

Use a different pager::

    $ DIFFTRAIL_PAGER="less -RS" difftrail main

Highlight the changes between two files::

    $ difftrail diff old.go new.go

"""

import argparse
import logging
import os
import shlex
import sys

from difftrail.cli.builder import EXIT_SUCCESS, create_parser, get_exit_code_for_exception
from difftrail.cli.commands import dispatch_command
from difftrail.constants import ENV_CONFIG
from difftrail.exceptions import DiffTrailError
from difftrail.logging_utils import configure_logging
from difftrail.options.highlight import HighlightOptions
from difftrail.options.session import SessionOptions

logger = logging.getLogger(__name__)


def setup_logging(parsed_args: argparse.Namespace) -> None:
    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def load_options(parsed_args: argparse.Namespace) -> tuple[HighlightOptions, SessionOptions]:
    """Load configuration files according to the CLI flags and build options.

    Raises
    ------
    ConfigError
        If a configuration file cannot be loaded
    ValidationError
        If the configuration contains invalid values

    """
    from difftrail.cli.config import build_options, load_config_with_priority
    from difftrail.cli.pager import resolve_pager_command

    if parsed_args.no_config:
        config = {}
    else:
        config = load_config_with_priority(parsed_args.config, os.environ.get(ENV_CONFIG))

    highlight_options, session_options = build_options(config)

    pager_command = resolve_pager_command(session_options.pager_command)
    if getattr(parsed_args, "pager", None):
        pager_command = shlex.split(parsed_args.pager)
    session_options = session_options.create_updated(pager_command=tuple(pager_command))

    if getattr(parsed_args, "no_clear", False):
        session_options = session_options.create_updated(clear_screen=False)

    return highlight_options, session_options


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    command_result = dispatch_command(args)
    if command_result is not None:
        return command_result

    parser = create_parser()
    parsed_args = parser.parse_args(args)
    setup_logging(parsed_args)

    from difftrail.cli.session import CommitBrowser
    from difftrail.vcs.git import GitRepository

    try:
        highlight_options, session_options = load_options(parsed_args)
        browser = CommitBrowser(
            GitRepository(parsed_args.repo),
            parsed_args.head,
            options=session_options,
            highlight_options=highlight_options,
        )
        browser.run()
    except DiffTrailError as e:
        logger.debug("Aborting", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except KeyboardInterrupt:
        print("", file=sys.stderr)
        return EXIT_SUCCESS

    return EXIT_SUCCESS
