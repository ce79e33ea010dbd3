"""Normalize spacing and list nesting of converted markdown."""

from __future__ import annotations

import logging

from .boundaries import find_content_boundaries, split_lines
from .classifier import classify_line, is_list_continuation
from .constants import CODE_FENCE, INDENT, PARAGRAPH_SEPARATOR
from .models import (
    BlockType,
    CodeBlockEnd,
    CodeBlockStart,
    Header,
    ListItem,
    MarkerKind,
    Normal,
    ReflowContext,
)
from .splitter import split_header_content

_logger = logging.getLogger(__name__)


def indent_line(line: str, depth: int) -> str:
    """Indent the trimmed line by four spaces per depth level."""
    return f"{INDENT * depth}{line.lstrip()}"


def needs_spacing_before(block_type: BlockType, prev_block_type: BlockType) -> bool:
    """Check whether a blank line must separate `block_type` from what precedes it.

    Args:
        block_type: Type of the line about to be added.
        prev_block_type: Type of the previous line.

    Returns:
        bool: True for headers and opening fences, and for list items that do
            not follow another list item.
    """
    if isinstance(block_type, (Header, CodeBlockStart)):
        return True
    if isinstance(block_type, ListItem):
        return not isinstance(prev_block_type, ListItem)
    return False


def needs_spacing_after(block_type: BlockType, next_block_type: BlockType) -> bool:
    """Check whether a blank line must follow `block_type`.

    Args:
        block_type: Type of the line just added.
        next_block_type: Forward classification of the next raw line.

    Returns:
        bool: True after headers and closing fences, after list items not
            followed by another list item, and after prose followed by a
            header, a list item, or more prose.
    """
    if isinstance(block_type, (Header, CodeBlockEnd)):
        return True
    if isinstance(block_type, ListItem):
        return not isinstance(next_block_type, ListItem)
    if isinstance(block_type, Normal):
        return isinstance(next_block_type, (Header, ListItem, Normal))
    return False


def resolve_list_depth(item: ListItem, ctx: ReflowContext) -> int:
    """Pick the depth a list item is rendered at.

    A list opens at depth zero. Inside a list, switching from numbers to
    letters nests one level deeper than the previous item and switching back
    returns one level out. Letters following letters keep the level of their
    run. Everything else uses the depth computed from the item's own marker.

    Deeper alternation (numbers, letters, numbers again as a third level) is
    not modelled; each switch only moves one level.

    Args:
        item: Classified list item.
        ctx: Current reflow state; `prev_block_type` and `prev_list_depth`
            describe the previous line.

    Returns:
        int: Non-negative depth.
    """
    prev = ctx.prev_block_type
    if not isinstance(prev, ListItem):
        return 0

    if prev.marker is MarkerKind.NUMBER and item.marker is MarkerKind.LETTER:
        return ctx.prev_list_depth + 1
    if prev.marker is MarkerKind.LETTER and item.marker is MarkerKind.NUMBER:
        return max(ctx.prev_list_depth - 1, 0)
    if prev.marker is MarkerKind.LETTER and item.marker is MarkerKind.LETTER:
        return max(ctx.prev_list_depth + item.depth - prev.depth, 0)
    return item.depth


def normalize_line(
    line: str, block_type: BlockType, is_continuation: bool, ctx: ReflowContext
) -> str:
    """Render a sub-line according to its block type.

    Args:
        line: Trimmed sub-line.
        block_type: Type resolved for the sub-line.
        is_continuation: Whether the sub-line continues the previous list item.
        ctx: Current reflow state; updated with the depth of rendered list
            items. Continuation lines keep the depth of the item they continue
            and leave the state alone.

    Returns:
        str: Text to append to the current block.
    """
    if isinstance(block_type, ListItem):
        if is_continuation:
            return indent_line(line, block_type.depth)
        depth = resolve_list_depth(block_type, ctx)
        ctx.prev_list_depth = depth
        return indent_line(line, depth)

    return line


def normalize_markdown(markdown: str, plain: str) -> str:
    """Trim boilerplate, restore paragraph spacing, and re-indent lists.

    Works on the content range found by `find_content_boundaries`, walking it
    once. Each line is right-trimmed and passed through
    `split_header_content`; every resulting sub-line is classified (or kept in
    the previous list item when it continues it), rendered, and appended to
    the current block. Spacing rules decide when the block is flushed; flushed
    blocks are joined by one blank line.

    Never raises: unusual input results in less normalization.

    Args:
        markdown: Markdown produced by an HTML to markdown converter.
        plain: Plain-text extraction of the same document, used to find where
            the article starts.

    Returns:
        str: Normalized markdown.

    Examples:
        normalize_markdown("First sentence.\\nSecond sentence.", "")
        # "First sentence.\\n\\nSecond sentence."
    """
    markdown_lines = split_lines(markdown)
    boundaries = find_content_boundaries(markdown, plain)
    content_lines = markdown_lines[boundaries.start_line : boundaries.end_line]

    ctx = ReflowContext()

    for index, raw_line in enumerate(content_lines):
        sub_lines = split_header_content(raw_line.rstrip())
        for split_index, line in enumerate(sub_lines):
            if not line:
                continue

            is_continuation = is_list_continuation(line, ctx.prev_block_type)
            if is_continuation:
                current_type = ctx.prev_block_type
            else:
                current_type = classify_line(line, ctx.in_code_block)

            if line.startswith(CODE_FENCE):
                ctx.in_code_block = not ctx.in_code_block

            if isinstance(current_type, ListItem):
                if not ctx.in_list:
                    ctx.flush()
                    ctx.in_list = True
            elif not is_continuation and ctx.in_list:
                ctx.flush()
                ctx.in_list = False

            if split_index > 0 and isinstance(current_type, Header):
                ctx.flush()

            if needs_spacing_before(current_type, ctx.prev_block_type):
                ctx.flush()

            ctx.current_block.append(normalize_line(line, current_type, is_continuation, ctx))

            if index + 1 < len(content_lines):
                next_type = classify_line(content_lines[index + 1], ctx.in_code_block)
            else:
                next_type = Normal()

            if (
                split_index == len(sub_lines) - 1
                and needs_spacing_after(current_type, next_type)
                and not (isinstance(next_type, ListItem) and ctx.in_list)
            ):
                ctx.flush()

            ctx.prev_block_type = current_type

    ctx.flush()

    _logger.debug("Normalized %d lines into %d blocks", len(content_lines), len(ctx.result))
    return PARAGRAPH_SEPARATOR.join(block for block in ctx.result if block)
