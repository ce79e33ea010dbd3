"""Data models for reflow-markdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


class MarkerKind(Enum):
    """Lexical family of a list item's leading token.

    Attributes:
        NUMBER: Numeric markers such as ``1.``, ``2.1`` or ``4.3.``.
        LETTER: Lowercase lettered markers such as ``a.``.
        BULLET: ``*`` or ``-`` bullets.
        NONE: The line does not start with a list marker.
    """

    NUMBER = auto()
    LETTER = auto()
    BULLET = auto()
    NONE = auto()


@dataclass(frozen=True)
class Header:
    """A line whose trimmed text starts with ``#``."""


@dataclass(frozen=True)
class ListItem:
    """A list item line.

    Attributes:
        depth: Nesting depth derived from the numbering grammar or indentation.
        marker: Kind of marker that opened the item.
    """

    depth: int = 0
    marker: MarkerKind = MarkerKind.BULLET


@dataclass(frozen=True)
class CodeBlockStart:
    """An opening code fence."""


@dataclass(frozen=True)
class CodeBlockEnd:
    """A closing code fence."""


@dataclass(frozen=True)
class Normal:
    """Prose, blank lines and anything else."""


BlockType = Union[Header, ListItem, CodeBlockStart, CodeBlockEnd, Normal]


@dataclass(frozen=True)
class Boundaries:
    """Half-open line range holding the real content of a document.

    Attributes:
        start_line: Zero-based index of the first content line.
        end_line: Zero-based index one past the last content line.
    """

    start_line: int
    end_line: int


@dataclass
class ReflowContext:
    """State threaded through a single normalization pass.

    Attributes:
        in_code_block: Whether a fence has been opened and not yet closed.
        in_list: Whether the pass is inside a run of list items.
        prev_block_type: Type recorded for the previous sub-line.
        prev_list_depth: Depth at which the previous list item was rendered.
        current_block: Normalized lines waiting to be flushed.
        result: Flushed blocks in output order.
    """

    in_code_block: bool = False
    in_list: bool = False
    prev_block_type: BlockType = field(default_factory=Normal)
    prev_list_depth: int = 0
    current_block: list[str] = field(default_factory=list)
    result: list[str] = field(default_factory=list)

    def flush(self) -> None:
        """Move the accumulated block to the result, if it holds any lines."""
        if self.current_block:
            self.result.append("\n".join(self.current_block))
            self.current_block = []
