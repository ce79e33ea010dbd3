"""Compose and save normalized articles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .config import ReflowConfig, validate_config
from .constants import ARTICLE_EXTENSION
from .filesystem import atomic_write
from .slugify import generate_slug

_logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


@dataclass
class ArticleMetadata:
    """Details about a saved item, rendered as front matter.

    Attributes:
        title: Article title.
        url: Source URL.
        date_added: When the item was added to the reading list.
        author: Byline reported by the readability extractor.
        site_name: Name of the publishing site.
        published_time: Publication timestamp as reported by the source.
        excerpt: Short summary.
    """

    title: str | None = None
    url: str | None = None
    date_added: str | None = None
    author: str | None = None
    site_name: str | None = None
    published_time: str | None = None
    excerpt: str | None = None

    def items(self) -> list[tuple[str, str]]:
        """Return the non-empty fields in declaration order."""
        present = []
        for field_ in fields(self):
            value = getattr(self, field_.name)
            if value:
                present.append((field_.name, " ".join(str(value).split())))
        return present


def article_path(output_dir: Path, item_id: str) -> Path:
    """Build the path an article is saved under.

    Args:
        output_dir: Directory holding saved articles.
        item_id: Identifier of the item; an empty identifier becomes
            ``untitled``.

    Returns:
        Path: ``<output_dir>/<slug>.md``.

    Examples:
        article_path(Path("articles"), "4242")  # Path("articles/4242.md")
        article_path(Path("articles"), "")  # Path("articles/untitled.md")
    """
    return output_dir / f"{generate_slug(item_id)}{ARTICLE_EXTENSION}"


def render_front_matter(metadata: ArticleMetadata) -> str:
    """Render metadata as a YAML front matter block.

    Values are quoted by the YAML emitter when needed, so titles such as
    ``Part 1: Intro`` load back unchanged.

    Returns:
        str: The block followed by a blank line, or an empty string when no
            field is set.
    """
    entries = metadata.items()
    if not entries:
        return ""
    body = yaml.safe_dump(
        dict(entries), sort_keys=False, allow_unicode=True, width=float("inf")
    )
    return f"{FRONT_MATTER_DELIMITER}\n{body}{FRONT_MATTER_DELIMITER}\n\n"


def compose_article(
    normalized: str,
    *,
    markdown: str = "",
    plain: str = "",
    metadata: ArticleMetadata | None = None,
    config: ReflowConfig | None = None,
) -> str:
    """Assemble the text of a saved article.

    The layout is front matter (when enabled and metadata is present), then,
    when `include_sources` is set, the plain reference and the raw markdown
    each followed by a separator line, and finally the normalized markdown.

    Args:
        normalized: Output of `normalize_markdown`.
        markdown: Raw converted markdown, embedded when sources are included.
        plain: Plain-text reference, embedded when sources are included.
        metadata: Optional item details for the front matter.
        config: Output configuration. Defaults to a new `ReflowConfig`.

    Returns:
        str: Article text ending with a newline.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        compose_article("Body", metadata=ArticleMetadata(title="Hello"))
        # "---\\ntitle: Hello\\n---\\n\\nBody\\n"
    """
    config = config or ReflowConfig()
    validate_config(config)

    parts = []
    if config.front_matter and metadata is not None:
        parts.append(render_front_matter(metadata))

    if config.include_sources:
        for source in (plain, markdown):
            parts.append(source if source.endswith("\n") or not source else f"{source}\n")
            parts.append(f"{config.separator}\n\n")

    parts.append(normalized.rstrip("\n") + "\n")
    return "".join(parts)


def write_article(path: Path, content: str) -> Path:
    """Persist an article atomically.

    Args:
        path: Destination, usually built with `article_path`.
        content: Text produced by `compose_article`.

    Returns:
        Path: The written path.

    Raises:
        ArticleWriteError: If the article cannot be written.
    """
    atomic_write(path, content)
    _logger.info("Saved article to %s", path)
    return path
