#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/difftrail/diff/__init__.py
"""Diff and highlight engine.

This package compares two versions of a file and renders the new version
with its changes highlighted for display in a pager.

Key Features
------------
- Minimal edit scripts under any equality predicate (Myers O(ND), linear space)
- Line comparison that ignores realigned spaces
- Byte-level highlighting when a single line was edited
- Merging of nearby byte changes into one readable span

Examples
--------
Highlight the changes between two versions:
    >>> from difftrail.diff import render_highlight
    >>> output = render_highlight(b"line1\\nline2\\n", b"line1\\nLINE2\\n")

Compute a raw edit script:
    >>> from difftrail.diff import diff_sequences
    >>> diff_sequences("abc", "abd")
    [Change(before_pos=2, after_pos=2, delete_count=1, insert_count=1)]

"""

from difftrail.diff.renderers.highlight import HighlightRenderer, render_highlight, strip_markers
from difftrail.diff.sequence import (
    Change,
    diff_lines,
    diff_sequences,
    merge_granular,
    space_insensitive_equal,
    split_lines,
    strip_spaces,
)

__all__ = [
    "Change",
    "HighlightRenderer",
    "diff_lines",
    "diff_sequences",
    "merge_granular",
    "render_highlight",
    "space_insensitive_equal",
    "split_lines",
    "strip_markers",
    "strip_spaces",
]
