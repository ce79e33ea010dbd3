"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class ReflowError(Exception):
    """Base class for errors raised around the normalizer.

    The normalizer never raises; these cover reading inputs and writing
    articles.
    """


class InputFileError(ReflowError):
    """Raised when an input file cannot be used.

    Args:
        filepath: Path to the offending file.
        reason: Human readable explanation.
    """

    def __init__(self, filepath: Path, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}: {reason}")


class ArticleWriteError(ReflowError):
    """Raised when a normalized article cannot be persisted."""
