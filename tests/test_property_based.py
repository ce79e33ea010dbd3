from __future__ import annotations

from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st
from reflow_markdown.article import article_path
from reflow_markdown.boundaries import (
    find_content_boundaries,
    normalize_for_comparison,
    split_lines,
)
from reflow_markdown.classifier import get_list_depth
from reflow_markdown.normalizer import normalize_markdown
from reflow_markdown.slugify import generate_slug
from reflow_markdown.splitter import is_protected, split_header_content

CAPITALIZED = ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel"]
LOWERCASE = ["apple", "banana", "cherry", "date", "fig", "grape", "kiwi", "lemon"]

sentence_strategy = st.builds(
    lambda first, rest, end: " ".join([first, *rest]) + end,
    st.sampled_from(CAPITALIZED),
    st.lists(st.sampled_from(LOWERCASE), max_size=8),
    st.sampled_from([".", "!", "?", ""]),
)


@given(st.text(max_size=300), st.text(max_size=100))
def test_normalize_markdown_never_raises(markdown: str, plain: str):
    assert isinstance(normalize_markdown(markdown, plain), str)


@given(st.text(max_size=300), st.text(max_size=100))
def test_normalize_markdown_is_deterministic(markdown: str, plain: str):
    assert normalize_markdown(markdown, plain) == normalize_markdown(markdown, plain)


@given(st.text(max_size=300))
def test_blocks_are_separated_by_single_blank_lines(markdown: str):
    normalized = normalize_markdown(markdown, "")

    assert "\n\n\n" not in normalized
    assert all(line == "" or line.strip() for line in normalized.split("\n"))


@given(st.lists(sentence_strategy, min_size=1, max_size=12))
def test_adjacent_prose_lines_get_one_blank_line(sentences: list[str]):
    assert normalize_markdown("\n".join(sentences), "") == "\n\n".join(sentences)


@given(st.lists(sentence_strategy, min_size=1, max_size=12))
def test_spaced_prose_is_unchanged(sentences: list[str]):
    document = "\n\n".join(sentences)

    assert normalize_markdown(document, document) == document


@given(st.text(max_size=300), st.text(max_size=100))
def test_boundaries_stay_within_document(markdown: str, plain: str):
    boundaries = find_content_boundaries(markdown, plain)

    assert 0 <= boundaries.start_line
    assert boundaries.end_line <= len(split_lines(markdown))
    assert boundaries.start_line <= boundaries.end_line


@given(st.text(max_size=100))
def test_normalize_for_comparison_is_idempotent(text: str):
    once = normalize_for_comparison(text)

    assert normalize_for_comparison(once) == once


@given(st.text(max_size=200))
def test_split_header_content_preserves_text(line: str):
    parts = split_header_content(line)

    assert len(parts) <= 2
    assert all(part and part == part.strip() for part in parts)
    assert all(part in line for part in parts)


@given(st.text(max_size=60))
def test_list_depth_is_never_negative(line: str):
    assert get_list_depth(line) >= 0


@given(st.integers(min_value=1, max_value=6))
def test_dotted_numbering_depth(levels: int):
    token = ".".join(str(number) for number in range(1, levels + 1))

    assert get_list_depth(f"{token} Item") == levels - 1
    assert get_list_depth(f"{token}. Item") == levels - 1


@given(st.text())
def test_article_file_names_are_safe(item_id: str):
    slug = generate_slug(item_id)

    assert slug
    assert "/" not in slug
    assert slug not in {".", ".."}
    assert article_path(Path("articles"), item_id).parent.name == "articles"


def _split_by_rescanning(line: str) -> list[str]:
    for pos, character in enumerate(line):
        if character != "#" or is_protected(line, pos):
            continue
        end = pos
        while end < len(line) and line[end] == "#":
            end += 1
        if end < len(line) and not line[end].isspace():
            continue
        if not line[:pos].strip():
            break
        return [line[:pos].strip(), line[pos:].strip()]
    return [line.strip()] if line.strip() else []


@given(st.text(alphabet="ab #`<>[]() \t", max_size=80))
def test_split_header_content_matches_prefix_rescan(line: str):
    assert split_header_content(line) == _split_by_rescanning(line)
