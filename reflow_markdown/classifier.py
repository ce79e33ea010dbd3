"""Line classification for the markdown normalizer."""

from __future__ import annotations

from .constants import BULLET_CHARS, CODE_FENCE, DEPTH_TERMINATORS, HEADER_CHAR, INDENT_WIDTH
from .models import (
    BlockType,
    CodeBlockEnd,
    CodeBlockStart,
    Header,
    ListItem,
    MarkerKind,
    Normal,
)


def _first_token(line: str) -> str | None:
    tokens = line.split(None, 1)
    return tokens[0] if tokens else None


def get_list_marker(line: str) -> MarkerKind:
    """Determine the marker kind from the first token of a line.

    Args:
        line: Line to inspect; leading whitespace is ignored.

    Returns:
        MarkerKind: ``NUMBER`` for a leading ASCII digit, ``LETTER`` for a
            leading ASCII lowercase letter, ``BULLET`` for ``*`` or ``-``, and
            ``NONE`` otherwise.

    Examples:
        get_list_marker("2.1 Sub item")  # MarkerKind.NUMBER
        get_list_marker("and so on")  # MarkerKind.LETTER
        get_list_marker("Some prose")  # MarkerKind.NONE
    """
    token = _first_token(line)
    if not token:
        return MarkerKind.NONE

    first = token[0]
    if first.isascii() and first.isdigit():
        return MarkerKind.NUMBER
    if first.isascii() and first.islower():
        return MarkerKind.LETTER
    if token.startswith(BULLET_CHARS):
        return MarkerKind.BULLET
    return MarkerKind.NONE


def get_list_depth(line: str) -> int:
    """Compute the nesting depth of a list line.

    Composite numbering wins over indentation: each ``.`` that follows a digit
    in the first token counts one level, minus one when the token ends on a
    dot. Scanning stops at the first character that opens inline code, a link,
    an HTML tag, a quote, or a parenthesis. Without dots, depth is the number
    of leading whitespace characters divided by four.

    Args:
        line: Line to inspect, including its original indentation.

    Returns:
        int: Non-negative depth.

    Examples:
        get_list_depth("1. Item")  # 0
        get_list_depth("1.2 Item")  # 1
        get_list_depth("1.2.3.1`code` text")  # 3
        get_list_depth("        * nested")  # 2
    """
    token = _first_token(line)
    if token is None:
        return 0

    found_number = False
    dots = 0
    for character in token:
        if character in DEPTH_TERMINATORS:
            break
        if character.isascii() and character.isdigit():
            found_number = True
        elif character == "." and found_number:
            dots += 1
            found_number = False

    if dots:
        # A trailing dot ("1.2.") closes the number instead of opening a level
        return dots if found_number else dots - 1

    spaces = len(line) - len(line.lstrip())
    return spaces // INDENT_WIDTH


def classify_line(line: str, in_code_block: bool) -> BlockType:
    """Classify a line without looking at its neighbours.

    Args:
        line: Line to classify, including its original indentation.
        in_code_block: Whether a fence is currently open. Only decides between
            `CodeBlockStart` and `CodeBlockEnd`; the caller owns the flag.

    Returns:
        BlockType: The line's block type.

    Examples:
        classify_line("## Title", False)  # Header()
        classify_line("a. Sub item", False)  # ListItem(depth=0, marker=MarkerKind.LETTER)
        classify_line("```python", True)  # CodeBlockEnd()
    """
    trimmed = line.lstrip()
    if not trimmed:
        return Normal()
    if trimmed.startswith(HEADER_CHAR):
        return Header()

    marker = get_list_marker(trimmed)
    if marker is not MarkerKind.NONE:
        return ListItem(depth=get_list_depth(line), marker=marker)

    if trimmed.startswith(CODE_FENCE):
        return CodeBlockEnd() if in_code_block else CodeBlockStart()

    return Normal()


def is_list_continuation(line: str, prev_block_type: BlockType) -> bool:
    """Decide whether a line is wrapped prose of the preceding list item.

    Args:
        line: Candidate line.
        prev_block_type: Type recorded for the previous line.

    Returns:
        bool: True when the previous line was a list item, `line` carries no
            marker of its own, and it sits deeper than the item, or at the same
            depth without starting a header.

    Examples:
        is_list_continuation("Some text", ListItem(0, MarkerKind.NUMBER))  # True
        is_list_continuation("# Title", ListItem(0, MarkerKind.NUMBER))  # False
    """
    if not isinstance(prev_block_type, ListItem):
        return False

    trimmed = line.lstrip()
    if get_list_marker(trimmed) is not MarkerKind.NONE:
        return False

    line_depth = get_list_depth(line)
    if line_depth > prev_block_type.depth:
        return True
    return line_depth == prev_block_type.depth and not trimmed.startswith(HEADER_CHAR)
