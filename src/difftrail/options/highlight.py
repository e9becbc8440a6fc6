#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the highlight renderer.

This module defines the marker pair wrapped around changed spans and the
tunables that control how finely changes are highlighted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from difftrail.constants import (
    DEFAULT_BYTE_GRANULARITY,
    DEFAULT_HIGHLIGHT_BEGIN,
    DEFAULT_HIGHLIGHT_END,
    DEFAULT_INTRALINE_MAX_BYTES,
    DEFAULT_TAB_WIDTH,
)
from difftrail.exceptions import ValidationError
from difftrail.options.base import BaseOptions


@dataclass(frozen=True)
class HighlightMarkers:
    """Begin/end byte sequences wrapped around a highlighted span.

    Parameters
    ----------
    begin : bytes
        Emitted before a changed span (an ANSI "bold green" by default)
    end : bytes
        Emitted after a changed span (an ANSI reset by default)

    """

    begin: bytes = DEFAULT_HIGHLIGHT_BEGIN
    end: bytes = DEFAULT_HIGHLIGHT_END

    def __post_init__(self) -> None:
        """Reject markers that would break rendering."""
        for name in ("begin", "end"):
            value = getattr(self, name)
            if not isinstance(value, bytes) or not value:
                raise ValidationError(f"highlight {name} marker must be non-empty bytes", name, value)
            if b"\t" in value or b"\n" in value:
                raise ValidationError(f"highlight {name} marker may not contain tabs or newlines", name, value)

    def wrap(self, span: bytes) -> bytes:
        """Wrap ``span`` in the marker pair; empty spans are returned as is."""
        if not span:
            return span
        return self.begin + span + self.end


def _to_marker_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise ValidationError(f"highlight marker must be a string, got {type(value).__name__}", parameter_value=value)


@dataclass(frozen=True)
class HighlightOptions(BaseOptions):
    """Configuration options for the highlight renderer.

    Parameters
    ----------
    markers : HighlightMarkers
        Marker pair wrapped around changed spans
    byte_granularity : int, default 2
        Changes inside a single edited line that are separated by fewer
        unchanged bytes than this are highlighted as one span
    tab_width : int, default 8
        Number of spaces each tab character is expanded to
    intraline : bool, default True
        Highlight only the changed bytes when exactly one line is replaced
        by exactly one line
    intraline_max_bytes : int, default 4096
        Longest line, on either side, eligible for byte-level highlighting

    """

    markers: HighlightMarkers = field(
        default_factory=HighlightMarkers,
        metadata={"help": "Begin/end byte sequences wrapped around changed spans"},
    )
    byte_granularity: int = field(
        default=DEFAULT_BYTE_GRANULARITY,
        metadata={"help": "Merge intra-line changes separated by fewer unchanged bytes than this", "type": int},
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Spaces substituted for each tab character", "type": int},
    )
    intraline: bool = field(
        default=True,
        metadata={"help": "Highlight changed bytes within a single replaced line"},
    )
    intraline_max_bytes: int = field(
        default=DEFAULT_INTRALINE_MAX_BYTES,
        metadata={"help": "Longest line eligible for byte-level highlighting", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if not isinstance(self.markers, HighlightMarkers):
            raise ValidationError("markers must be a HighlightMarkers instance", "markers", self.markers)
        if self.byte_granularity < 0:
            raise ValidationError(
                f"byte_granularity must be non-negative, got {self.byte_granularity}",
                "byte_granularity",
                self.byte_granularity,
            )
        if self.tab_width < 1:
            raise ValidationError(f"tab_width must be at least 1, got {self.tab_width}", "tab_width", self.tab_width)
        if self.intraline_max_bytes < 0:
            raise ValidationError(
                f"intraline_max_bytes must be non-negative, got {self.intraline_max_bytes}",
                "intraline_max_bytes",
                self.intraline_max_bytes,
            )

    @classmethod
    def _convert_value(cls, name: str, value: Any) -> Any:
        if name == "markers":
            if isinstance(value, HighlightMarkers):
                return value
            if not isinstance(value, dict):
                raise ValidationError("markers must be a table with 'begin' and 'end'", "markers", value)
            defaults = HighlightMarkers()
            return HighlightMarkers(
                begin=_to_marker_bytes(value.get("begin", defaults.begin)),
                end=_to_marker_bytes(value.get("end", defaults.end)),
            )
        if name == "intraline":
            if not isinstance(value, bool):
                raise ValidationError(f"intraline must be a boolean, got {value!r}", name, value)
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{name} must be an integer, got {value!r}", name, value)
        return value
