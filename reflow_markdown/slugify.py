"""Filename slugs for saved articles."""

from __future__ import annotations

import re
import string
import unicodedata


def generate_slug(name: str) -> str:
    """Generate a filesystem-safe slug from an item identifier or title.

    Converts the name to lowercase ASCII, removes punctuation except hyphens
    and underscores, collapses whitespace to single hyphens, and returns
    ``"untitled"`` when nothing remains.

    Args:
        name: Item identifier or title.

    Returns:
        str: Hyphen-separated slug usable as a file stem.

    Examples:
        generate_slug("4242")  # "4242"
        generate_slug("What's New?")  # "whats-new"
        generate_slug("../../etc")  # "etc"
        generate_slug("   ")  # "untitled"
    """
    punctuation = string.punctuation.replace("-", "").replace("_", "")

    normalized = unicodedata.normalize("NFKD", name)
    slug = normalized.encode("ascii", "ignore").decode("utf-8", "ignore")

    slug = slug.casefold()
    slug = slug.translate(str.maketrans("", "", punctuation))

    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    slug = slug.strip("-")

    return slug if slug else "untitled"
