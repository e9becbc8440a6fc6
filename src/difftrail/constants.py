#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for difftrail.

Constants are organized by category:
1. Highlighting - Terminal markers and diff granularity
2. Session - Pager, build and run commands
3. Configuration - Config file discovery
"""

from __future__ import annotations

# =============================================================================
# Highlighting
# =============================================================================

# Bold bright green, then reset
DEFAULT_HIGHLIGHT_BEGIN = b"\x1b[1;92m"
DEFAULT_HIGHLIGHT_END = b"\x1b[0m"

# Changes separated by fewer equal bytes than this are shown as one span
DEFAULT_BYTE_GRANULARITY = 2

DEFAULT_TAB_WIDTH = 8

# Lines longer than this are highlighted in full instead of byte by byte
DEFAULT_INTRALINE_MAX_BYTES = 4096

# =============================================================================
# Session
# =============================================================================

CLEAR_SCREEN = "\x1b[2J\x1b[;H"

DEFAULT_PAGER_COMMAND = ["less", "-R"]
DEFAULT_BUILD_COMMAND = ["go", "build", "-o", "a.out"]
DEFAULT_RUN_COMMAND = ["./a.out"]
DEFAULT_ARTIFACT = "a.out"

# Changed files are picked with a single digit
MAX_SELECTABLE_FILES = 9

# =============================================================================
# Configuration
# =============================================================================

CONFIG_DIR_FILENAMES = [".difftrail.toml", ".difftrail.yaml", ".difftrail.yml", ".difftrail.json"]
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_SECTION = "difftrail"

ENV_CONFIG = "DIFFTRAIL_CONFIG"
ENV_PAGER = "DIFFTRAIL_PAGER"
ENV_LOG_LEVEL = "DIFFTRAIL_LOG_LEVEL"
