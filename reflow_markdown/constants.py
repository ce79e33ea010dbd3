"""Constants used across the reflow-markdown package."""

from __future__ import annotations

from .config import ReflowConfig

DEFAULT_CONFIG = ReflowConfig()

# Markdown syntax
CODE_FENCE = "```"
HEADER_CHAR = "#"
BULLET_CHARS = ("*", "-")
INDENT = "    "
INDENT_WIDTH = len(INDENT)

# Characters that end the numbering part of a list token, e.g. "4.2`code`"
DEPTH_TERMINATORS = frozenset("`[<'\"(")

# Boundary detection
BOUNDARY_WINDOW_SIZE = 3
PARAGRAPH_SEPARATOR = "\n\n"
TRAILER_MARKERS = ("## Related posts", "Blog Comments", "Contents")
TRAILER_HEADER_PREFIX = "##"
TRAILER_HEADER_EXEMPTION = "Summary"

# Input files and limits
INPUT_EXTENSIONS = (".md", ".markdown", ".txt", ".text")
ARTICLE_EXTENSION = ".md"
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
