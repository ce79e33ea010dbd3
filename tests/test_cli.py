from __future__ import annotations

import textwrap
from pathlib import Path

import reflow_markdown.cli as cli_module
from reflow_markdown.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_article_inputs(tmp_path: Path) -> tuple[Path, Path]:
    markdown = _write(
        tmp_path,
        "4242.md",
        """
        First sentence.
        Second sentence.
        """,
    )
    plain = _write(tmp_path, "4242.txt", "First sentence.\n")
    return markdown, plain


def test_cli_prints_normalized_markdown(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain)])

    assert result.exit_code == 0
    assert result.output == "First sentence.\n\nSecond sentence.\n"
    assert not (tmp_path / "articles").exists()


def test_cli_reflows_lists(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown = _write(
        tmp_path,
        "steps.md",
        """
        Steps:
        1. First
        a. Detail
        2. Second
        """,
    )
    plain = _write(tmp_path, "steps.txt", "Steps:\n")

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain)])

    assert result.exit_code == 0
    assert result.output == "Steps:\n\n1. First\n    a. Detail\n2. Second\n"


def test_cli_saves_article_with_front_matter(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(
        cli,
        [
            str(markdown),
            "--plain",
            str(plain),
            "--item-id",
            "4242",
            "--title",
            "Hello",
            "--url",
            "https://example.com",
        ],
    )

    assert result.exit_code == 0
    assert result.output == "articles/4242.md\n"
    saved = tmp_path / "articles" / "4242.md"
    assert saved.read_text(encoding="utf-8") == (
        "---\ntitle: Hello\nurl: https://example.com\n---\n\n"
        "First sentence.\n\nSecond sentence.\n"
    )


def test_cli_empty_item_id_saves_untitled(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain), "--item-id", ""])

    assert result.exit_code == 0
    assert (tmp_path / "articles" / "untitled.md").exists()


def test_cli_includes_sources(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(
        cli, [str(markdown), "--plain", str(plain), "--include-sources"]
    )

    assert result.exit_code == 0
    assert result.output == (
        "First sentence.\n"
        "--------\n\n"
        "First sentence.\nSecond sentence.\n"
        "--------\n\n"
        "First sentence.\n\nSecond sentence.\n"
    )


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.reflow-markdown]
        output_dir = "saved"
        include_sources = true
        separator = "===="
        """,
    )

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain), "--item-id", "7"])

    assert result.exit_code == 0
    contents = (tmp_path / "saved" / "7.md").read_text(encoding="utf-8")
    assert contents.startswith("First sentence.\n====\n\n")
    assert contents.endswith("====\n\nFirst sentence.\n\nSecond sentence.\n")


def test_cli_flags_override_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.reflow-markdown]
        output_dir = "saved"
        include_sources = true
        """,
    )

    result = cli_runner.invoke(
        cli,
        [
            str(markdown),
            "--plain",
            str(plain),
            "--item-id",
            "7",
            "--output-dir",
            "elsewhere",
            "--no-include-sources",
        ],
    )

    assert result.exit_code == 0
    assert not (tmp_path / "saved").exists()
    contents = (tmp_path / "elsewhere" / "7.md").read_text(encoding="utf-8")
    assert contents == "First sentence.\n\nSecond sentence.\n"


def test_cli_warns_without_plain_reference(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, _ = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(cli, [str(markdown)])

    assert result.exit_code == 0
    assert "no plain reference text" in result.output
    assert "Second sentence." in result.output


def test_cli_rejects_unsupported_files(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "page.html", "<p>Body</p>\n")

    result = cli_runner.invoke(cli, [str(page)])

    assert result.exit_code == 2
    assert "not a markdown or text file" in result.output


def test_cli_rejects_missing_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])

    assert result.exit_code == 2


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.reflow-markdown]
        max_file_size = 0
        """,
    )

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain)])

    assert result.exit_code == 2
    assert "max_file_size" in result.output


def test_cli_enforces_size_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REFLOW_MARKDOWN_MAX_FILE_SIZE", "5")
    markdown, plain = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 5 bytes" in result.output


def test_cli_rejects_invalid_size_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REFLOW_MARKDOWN_MAX_FILE_SIZE", "lots")
    markdown, plain = _write_article_inputs(tmp_path)

    result = cli_runner.invoke(cli, [str(markdown), "--plain", str(plain)])

    assert result.exit_code == 1
    assert "REFLOW_MARKDOWN_MAX_FILE_SIZE" in result.output


def test_cli_reports_unwritable_output(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    markdown, plain = _write_article_inputs(tmp_path)
    _write(tmp_path, "blocked.txt", "not a directory\n")

    result = cli_runner.invoke(
        cli,
        [str(markdown), "--plain", str(plain), "--item-id", "1", "--output-dir", "blocked.txt"],
    )

    assert result.exit_code == 1
    assert "Cannot create directory" in result.output


def test_cli_public_api():
    assert cli_module.__all__ == ["cli"]
