"""
reflow-markdown: spacing and list normalizer for converted article markdown.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    reflow-markdown article.md --plain article.txt

Library Usage:
    from pathlib import Path
    from reflow_markdown import normalize_markdown

    markdown = Path("article.md").read_text()
    plain = Path("article.txt").read_text()
    normalized = normalize_markdown(markdown, plain)
"""

from .article import ArticleMetadata, article_path, compose_article, write_article
from .boundaries import find_content_boundaries, normalize_for_comparison
from .classifier import classify_line, get_list_depth, get_list_marker, is_list_continuation
from .config import ConfigError, ReflowConfig
from .exceptions import ArticleWriteError, InputFileError, ReflowError
from .models import (
    BlockType,
    Boundaries,
    CodeBlockEnd,
    CodeBlockStart,
    Header,
    ListItem,
    MarkerKind,
    Normal,
)
from .normalizer import normalize_markdown
from .splitter import split_header_content

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "normalize_markdown",
    "find_content_boundaries",
    "normalize_for_comparison",
    "classify_line",
    "get_list_depth",
    "get_list_marker",
    "is_list_continuation",
    "split_header_content",
    # Data models
    "BlockType",
    "Boundaries",
    "CodeBlockEnd",
    "CodeBlockStart",
    "Header",
    "ListItem",
    "MarkerKind",
    "Normal",
    # Articles
    "ArticleMetadata",
    "article_path",
    "compose_article",
    "write_article",
    "ReflowConfig",
    # Exceptions
    "ArticleWriteError",
    "ConfigError",
    "InputFileError",
    "ReflowError",
    # Version
    "__version__",
]
