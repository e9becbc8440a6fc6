#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/difftrail/diff/renderers/__init__.py
"""Diff renderers.

Available Renderers
-------------------
- HighlightRenderer: the new version of a file with inserted and changed
  spans wrapped in terminal highlight markers, ready for ``less -R``

Examples
--------
Render a diff for the terminal:
    >>> from difftrail.diff.renderers import HighlightRenderer
    >>> output = HighlightRenderer().render(b"line2\\n", b"LINE2\\n")

"""

from difftrail.diff.renderers.highlight import HighlightRenderer, render_highlight, strip_markers

__all__ = [
    "HighlightRenderer",
    "render_highlight",
    "strip_markers",
]
