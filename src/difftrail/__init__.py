#  Copyright (c) 2025 Tom Villani, Ph.D.
"""difftrail - walk a branch's history and see what each commit changed.

The core of the package is the diff/highlight engine: it renders the new
version of a file with inserted and changed text highlighted, ignoring
changes that only move spaces around.

Examples
--------
Highlight the changes between two versions of a file:
    >>> from difftrail import render_highlight
    >>> output = render_highlight(b"line1\\nline2\\n", b"line1\\nLINE2\\n")

Compute a minimal edit script under a custom equality:
    >>> from difftrail import diff_sequences
    >>> diff_sequences(["a", "b"], ["A", "b"], lambda x, y: x.lower() == y.lower())
    []

"""

__version__ = "0.3.0"

from difftrail.diff import (  # noqa: E402
    Change,
    HighlightRenderer,
    diff_lines,
    diff_sequences,
    merge_granular,
    render_highlight,
    space_insensitive_equal,
    strip_markers,
)
from difftrail.options import HighlightMarkers, HighlightOptions, SessionOptions  # noqa: E402

__all__ = [
    "Change",
    "HighlightMarkers",
    "HighlightOptions",
    "HighlightRenderer",
    "SessionOptions",
    "__version__",
    "diff_lines",
    "diff_sequences",
    "merge_granular",
    "render_highlight",
    "space_insensitive_equal",
    "strip_markers",
]
