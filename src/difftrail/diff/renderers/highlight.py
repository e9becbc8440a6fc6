#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/difftrail/diff/renderers/highlight.py
"""Highlighted rendering of the new version of a file.

The renderer shows the *after* content in full and wraps whatever was
inserted or changed in a pair of highlight markers. Deleted lines are not
shown; their absence is the signal. Lines that only moved spaces around
(e.g. realigned by a code formatter) are treated as unchanged.

When exactly one line is replaced by exactly one line, the line is diffed
again byte by byte so that only the edited part lights up.
"""

from __future__ import annotations

import logging
from io import BytesIO

from difftrail.diff.sequence import (
    LINE_TERMINATOR,
    Change,
    diff_lines,
    diff_sequences,
    merge_granular,
    split_lines,
)
from difftrail.options.highlight import HighlightMarkers, HighlightOptions

logger = logging.getLogger(__name__)


class HighlightRenderer:
    """Render the after-content of a diff with changed spans highlighted.

    Parameters
    ----------
    options : HighlightOptions, optional
        Markers, granularity and tab handling; defaults are used if omitted

    Examples
    --------
    Highlight an edited line with neutral markers:
        >>> from difftrail.options import HighlightMarkers, HighlightOptions
        >>> options = HighlightOptions(markers=HighlightMarkers(b"<", b">"))
        >>> HighlightRenderer(options).render(b"foobar\\n", b"foobaz\\n")
        b'fooba<z>\\n'

    """

    def __init__(self, options: HighlightOptions | None = None):
        """Initialize the renderer."""
        self.options = options or HighlightOptions()

    @property
    def markers(self) -> HighlightMarkers:
        return self.options.markers

    def render(self, before: bytes, after: bytes) -> bytes:
        """Render ``after`` with the changes relative to ``before`` highlighted.

        Parameters
        ----------
        before : bytes
            Previous content of the file
        after : bytes
            Current content of the file

        Returns
        -------
        bytes
            ``after`` with changed spans wrapped in the highlight markers and
            tabs expanded to spaces

        """
        changes = diff_lines(before, after)
        before_lines = split_lines(before)
        after_lines = split_lines(after)
        logger.debug(
            "%d line change(s) between %d and %d lines", len(changes), len(before_lines), len(after_lines)
        )

        rendered: list[bytes] = []
        pos = 0
        for change in changes:
            rendered.extend(after_lines[pos : change.after_pos])
            rendered.extend(self._render_change(change, before_lines, after_lines))
            pos = change.after_end
        rendered.extend(after_lines[pos:])

        output = LINE_TERMINATOR.join(rendered)
        return self._expand_tabs(output)

    def _render_change(self, change: Change, before_lines: list[bytes], after_lines: list[bytes]) -> list[bytes]:
        inserted = after_lines[change.after_pos : change.after_end]
        if self._is_intraline(change, before_lines, after_lines):
            return [self.render_line(before_lines[change.before_pos], inserted[0])]
        return [self.markers.wrap(line) for line in inserted]

    def _is_intraline(self, change: Change, before_lines: list[bytes], after_lines: list[bytes]) -> bool:
        if not self.options.intraline or change.delete_count != 1 or change.insert_count != 1:
            return False
        limit = self.options.intraline_max_bytes
        return len(before_lines[change.before_pos]) <= limit and len(after_lines[change.after_pos]) <= limit

    def render_line(self, before_line: bytes, after_line: bytes) -> bytes:
        """Highlight the bytes of ``after_line`` that differ from ``before_line``.

        Changes closer together than ``byte_granularity`` unchanged bytes are
        merged so a rewritten word shows as one span rather than a flicker
        of single characters.
        """
        changes = merge_granular(diff_sequences(before_line, after_line), self.options.byte_granularity)

        output = BytesIO()
        pos = 0
        for change in changes:
            output.write(after_line[pos : change.after_pos])
            output.write(self.markers.wrap(after_line[change.after_pos : change.after_end]))
            pos = change.after_end
        output.write(after_line[pos:])
        return output.getvalue()

    def _expand_tabs(self, content: bytes) -> bytes:
        # Markers take no columns on screen, so a pager would misplace tab stops
        return content.replace(b"\t", b" " * self.options.tab_width)


def render_highlight(before: bytes, after: bytes, options: HighlightOptions | None = None) -> bytes:
    """Render ``after`` with changes relative to ``before`` highlighted.

    Parameters
    ----------
    before : bytes
        Previous content of the file
    after : bytes
        Current content of the file
    options : HighlightOptions, optional
        Renderer options

    Returns
    -------
    bytes
        Highlighted rendering ready for a pager

    """
    return HighlightRenderer(options).render(before, after)


def strip_markers(rendered: bytes, markers: HighlightMarkers | None = None) -> bytes:
    """Remove highlight markers from rendered output.

    Parameters
    ----------
    rendered : bytes
        Output of :func:`render_highlight`
    markers : HighlightMarkers, optional
        Markers used when rendering; defaults to the standard pair

    Returns
    -------
    bytes
        The rendered text without any marker bytes

    """
    markers = markers or HighlightMarkers()
    return rendered.replace(markers.begin, b"").replace(markers.end, b"")
