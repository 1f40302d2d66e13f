"""Constants used across the md2html package."""

from __future__ import annotations

# Indentation
SPACE_WIDTH = 1
TAB_WIDTH = 4

# Markers
BULLET_MARKERS = ("-", "+", "*")
MARKER_SEPARATORS = (" ", "\t")
ORDERED_MARKER_SUFFIX = "."
CODE_FENCE = "```"
CODE_FENCE_LENGTH = len(CODE_FENCE)
HORIZONTAL_RULE_MIN_RUN = 3
PAIRED_DELIMITER_RUN = 2  # ~~strike~~ and ==highlight==
MAX_EMPHASIS_LEVEL = 3
HARD_BREAK_MIN_SPACES = 2

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
