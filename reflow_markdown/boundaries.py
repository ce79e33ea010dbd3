"""Locate the article body inside converted markdown."""

from __future__ import annotations

import logging

from .constants import (
    BOUNDARY_WINDOW_SIZE,
    PARAGRAPH_SEPARATOR,
    TRAILER_HEADER_EXEMPTION,
    TRAILER_HEADER_PREFIX,
    TRAILER_MARKERS,
)
from .models import Boundaries

_logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    r"""Split text on ``\n`` or ``\r\n`` line endings only.

    Other Unicode line separators (``\u2028``, ``\x0c``, ...) stay inside
    their line. A trailing line ending does not produce an extra empty line.

    Examples:
        split_lines("One\r\nTwo\n")  # ["One", "Two"]
        split_lines("One\u2028Two")  # ["One\u2028Two"]
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def normalize_for_comparison(text: str) -> str:
    """Reduce text to alphanumerics separated by single spaces.

    Markdown punctuation and formatting are dropped so that ``**Hello**,
    [world](x)`` and ``Hello world x`` compare equal.

    Args:
        text: Text to normalize.

    Returns:
        str: Alphanumeric words joined by single spaces.

    Examples:
        normalize_for_comparison("## Hello,   *world*!")  # "Hello world"
    """
    kept = "".join(character for character in text if character.isalnum() or character.isspace())
    return " ".join(kept.split())


def first_paragraph(plain: str) -> str:
    """Return the plain reference text up to its first blank line, trimmed."""
    return plain.split(PARAGRAPH_SEPARATOR, 1)[0].strip()


def is_trailer_line(line: str) -> bool:
    """Check whether a line marks the start of trailing boilerplate.

    Args:
        line: Raw markdown line.

    Returns:
        bool: True for related-posts, comment and contents markers, and for
            second-level (or deeper) headers that are not a summary.
    """
    if any(marker in line for marker in TRAILER_MARKERS):
        return True
    return line.startswith(TRAILER_HEADER_PREFIX) and TRAILER_HEADER_EXEMPTION not in line


def find_content_boundaries(markdown: str, plain: str) -> Boundaries:
    """Find the line range of real content within converted markdown.

    The start is the first three-line window whose normalized text contains the
    normalized first paragraph of `plain`. The end is the last trailer line
    after the start (see `is_trailer_line`). Both fall back to the full range.

    Args:
        markdown: Markdown produced by an HTML to markdown converter.
        plain: Plain-text extraction of the same document.

    Returns:
        Boundaries: Half-open range over ``split_lines(markdown)``.

    Examples:
        find_content_boundaries("Nav\\nMenu\\nHello world\\n## Related posts", "Hello world")
    """
    markdown_lines = split_lines(markdown)
    reference = normalize_for_comparison(first_paragraph(plain))

    start_line = 0
    for index in range(len(markdown_lines) - BOUNDARY_WINDOW_SIZE + 1):
        window = " ".join(markdown_lines[index : index + BOUNDARY_WINDOW_SIZE])
        if reference in normalize_for_comparison(window):
            start_line = index
            break

    end_line = len(markdown_lines)
    for index in range(len(markdown_lines) - 1, start_line, -1):
        if is_trailer_line(markdown_lines[index]):
            end_line = index
            break

    _logger.debug(
        "Content boundaries %d..%d of %d lines", start_line, end_line, len(markdown_lines)
    )
    return Boundaries(start_line=start_line, end_line=end_line)
