#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for difftrail.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy and ``from_mapping`` to build one from a configuration file table.
"""

from __future__ import annotations

from difftrail.options.base import BaseOptions, CloneFrozenMixin
from difftrail.options.highlight import HighlightMarkers, HighlightOptions
from difftrail.options.session import SessionOptions

__all__ = [
    "BaseOptions",
    "CloneFrozenMixin",
    "HighlightMarkers",
    "HighlightOptions",
    "SessionOptions",
]
