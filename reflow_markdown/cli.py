"""
Normalizes markdown converted from a web article.
If an item identifier is given, saves the article; otherwise, it outputs it to stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .article import ArticleMetadata, article_path, compose_article, write_article
from .config import ConfigError, build_config
from .exceptions import ReflowError
from .filesystem import get_max_file_size, normalize_filepath, read_input
from .normalizer import normalize_markdown

__all__ = ["cli"]


def _resolve_input(raw_path: str, base_dir: Path, param_hint: str) -> Path:
    try:
        return normalize_filepath(raw_path, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error), param_hint=param_hint) from error


@click.command()
@click.version_option(package_name="reflow-markdown")
@click.option(
    "--plain",
    "plain_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Plain-text extraction of the same article, used to trim boilerplate",
)
@click.option("--item-id", help="Save the article as <output-dir>/<item-id>.md")
@click.option("--output-dir", help="Directory for saved articles")
@click.option("--title", help="Title written to the front matter")
@click.option("--url", help="Source URL written to the front matter")
@click.option(
    "--include-sources/--no-include-sources",
    default=None,
    help="Embed the plain text and raw markdown above the normalized article",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debugging details to stderr")
@click.argument("markdown_path", type=click.Path(exists=True, dir_okay=False))
def cli(
    markdown_path: str,
    plain_path: str | None = None,
    item_id: str | None = None,
    output_dir: str | None = None,
    title: str | None = None,
    url: str | None = None,
    include_sources: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for normalizing converted article markdown.

    Args:
        markdown_path: Markdown produced by an HTML to markdown converter.
        plain_path: Optional plain-text extraction of the same article.
        item_id: Identifier used as the saved file name.
        output_dir: Override for the configured output directory.
        title: Title for the front matter.
        url: Source URL for the front matter.
        include_sources: Override for embedding the source texts.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If input paths or configuration values are invalid.
        click.ClickException: If reading inputs or writing the article fails.

    Examples:
        reflow-markdown 4242.md --plain 4242.txt --item-id 4242
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    base_dir = Path.cwd().resolve()
    markdown_file = _resolve_input(markdown_path, base_dir, "MARKDOWN_PATH")
    plain_file = _resolve_input(plain_path, base_dir, "--plain") if plain_path else None

    try:
        config = build_config(
            markdown_file.parent,
            output_dir=output_dir,
            include_sources=include_sources,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        markdown = read_input(markdown_file, max_file_size)
        plain = read_input(plain_file, max_file_size) if plain_file else ""
    except ReflowError as error:
        raise click.ClickException(str(error)) from error

    if not plain:
        click.echo("Warning: no plain reference text, boilerplate is not trimmed", err=True)

    normalized = normalize_markdown(markdown, plain)
    metadata = ArticleMetadata(title=title, url=url)
    content = compose_article(
        normalized, markdown=markdown, plain=plain, metadata=metadata, config=config
    )

    # Saves article
    if item_id is not None:
        destination = article_path(Path(config.output_dir), item_id)
        try:
            write_article(destination, content)
        except ReflowError as error:
            raise click.ClickException(str(error)) from error
        click.echo(str(destination))
    # Prints article
    else:
        click.echo(content, nl=False)


if __name__ == "__main__":
    cli()
