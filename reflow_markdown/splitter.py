"""Repair headers that a converter glued onto the end of a line."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import HEADER_CHAR

_logger = logging.getLogger(__name__)


@dataclass
class _ProtectionScanner:
    """Counters for the inline contexts opened so far in a line."""

    backticks: int = 0
    angle_balance: int = 0
    bracket_depth: int = 0
    paren_depth: int = 0

    def advance(self, character: str) -> None:
        if character == "`":
            self.backticks += 1
        elif character == "<":
            self.angle_balance += 1
        elif character == ">":
            self.angle_balance -= 1
        elif character == "[":
            self.bracket_depth += 1
        elif character == "]":
            self.bracket_depth -= 1
        elif character == "(" and self.bracket_depth == 0:
            self.paren_depth += 1
        elif character == ")" and self.bracket_depth == 0:
            self.paren_depth -= 1

    @property
    def protected(self) -> bool:
        return (
            self.backticks % 2 == 1
            or self.angle_balance > 0
            or self.bracket_depth > 0
            or self.paren_depth > 0
        )


def is_protected(text: str, pos: int) -> bool:
    """Check whether a position sits inside inline code, an HTML tag, or a link.

    Only the text before `pos` is considered. A position is protected when an
    odd number of backticks precede it, when more ``<`` than ``>`` precede it,
    or when a ``[`` or a parenthesis opened outside brackets (such as a link
    target) is still open.

    Args:
        text: Line being scanned.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when the character must not be treated as markup.

    Examples:
        is_protected("`#tag`", 1)  # True
        is_protected("[a # b](url)", 3)  # True
        is_protected("done. # Next", 6)  # False
    """
    scanner = _ProtectionScanner()
    for character in text[:pos]:
        scanner.advance(character)
    return scanner.protected


def _header_run_end(line: str, pos: int) -> int:
    end = pos
    while end < len(line) and line[end] == HEADER_CHAR:
        end += 1
    return end


def split_header_content(line: str) -> list[str]:
    """Split a header off the prose it was merged into.

    Only the first unprotected run of ``#`` followed by whitespace or the end
    of the line is considered; the remainder is not scanned again. The line
    is walked once, carrying the protection counters along.

    Args:
        line: Line to repair.

    Returns:
        list[str]: ``[prose, header]`` when a merged header was found, the
            trimmed line on its own otherwise, or an empty list for a blank
            line.

    Examples:
        split_header_content("two regions.### Region recovery")
        # ["two regions.", "### Region recovery"]
        split_header_content("use `#include` here")  # ["use `#include` here"]
    """
    scanner = _ProtectionScanner()
    pos = 0
    while pos < len(line):
        if line[pos] != HEADER_CHAR or scanner.protected:
            scanner.advance(line[pos])
            pos += 1
            continue

        # "#" does not move the counters, so a rejected run is skipped whole
        run_end = _header_run_end(line, pos)
        if run_end < len(line) and not line[run_end].isspace():
            pos = run_end
            continue

        leading = line[:pos].strip()
        header = line[pos:].strip()
        if not leading:
            break

        _logger.debug("Split merged header %r", header)
        return [leading, header]

    trimmed = line.strip()
    return [trimmed] if trimmed else []
