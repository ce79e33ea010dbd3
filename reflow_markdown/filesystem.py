"""Filesystem helpers for reflow-markdown."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, INPUT_EXTENSIONS
from .exceptions import ArticleWriteError, InputFileError

MAX_FILE_SIZE_ENV_VAR = "REFLOW_MARKDOWN_MAX_FILE_SIZE"
DEFAULT_ARTICLE_PERMISSIONS = 0o644


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed input file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["REFLOW_MARKDOWN_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink.

    Args:
        path: Path to inspect.

    Returns:
        bool: True when a symlink is encountered, otherwise False.
    """
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate an input filepath under a base directory.

    Args:
        raw_path: User-supplied path to a markdown or plain-text file.
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, is
            outside `base_dir`, uses an unsupported extension, or traverses a
            symlink.

    Examples:
        normalize_filepath("downloads/4242.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    if resolved.suffix.lower() not in INPUT_EXTENSIONS:
        error_message = f"{resolved} is not a markdown or text file.\n"
        error_message += f"Supported extensions are: {', '.join(INPUT_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata gathered without following symlinks.

    Raises:
        InputFileError: If the path is inaccessible, a symlink, or not a
            regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise InputFileError(filepath, f"cannot be accessed ({error})") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise InputFileError(filepath, "symlinks are not supported")

    if not stat.S_ISREG(stat_result.st_mode):
        raise InputFileError(filepath, "not a regular file")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        InputFileError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise InputFileError(filepath, f"exceeds the maximum allowed size of {max_size} bytes")


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        InputFileError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("4242.md")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise InputFileError(filepath, f"cannot be opened ({error})") from error


def read_input(filepath: Path, max_size: int) -> str:
    """Read a whole input file after checking its type and size.

    Args:
        filepath: Validated path to the file.
        max_size: Maximum allowed size in bytes.

    Returns:
        str: File contents.

    Raises:
        InputFileError: If the file fails a safety check, is too large, or is
            not valid UTF-8.
    """
    enforce_file_size(collect_file_stat(filepath), max_size, filepath)
    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise InputFileError(filepath, f"invalid UTF-8 sequence ({error})") from error


def atomic_write(filepath: Path, content: str):
    """Write a file through a temporary sibling and an atomic rename.

    Missing parent directories are created. An existing file at `filepath`
    is replaced only once the new content is fully on disk.

    Args:
        filepath: Destination path.
        content: Text to write.

    Raises:
        ArticleWriteError: If the directory cannot be created, the destination
            is a symlink, or the write fails.

    Examples:
        atomic_write(Path("articles/4242.md"), "# Title\\n")
    """
    if filepath.is_symlink():
        raise ArticleWriteError(f"Refusing to overwrite symlink {filepath}")

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise ArticleWriteError(f"Cannot create directory {filepath.parent}: {error}") from error

    temp_path: Path | None = None
    try:
        permissions = DEFAULT_ARTICLE_PERMISSIONS
        if filepath.exists():
            permissions = stat.S_IMODE(filepath.stat().st_mode)

        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        raise ArticleWriteError(f"Cannot write {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
