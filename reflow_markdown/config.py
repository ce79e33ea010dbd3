"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class ReflowConfig:
    """Configuration for writing normalized articles.

    The normalizer itself has no settings; these values only shape how the
    command line tool reads inputs and persists articles.

    Attributes:
        output_dir: Directory where articles are written.
        include_sources: Whether to embed the plain reference and the raw
            markdown above the normalized text.
        separator: Line placed between embedded sections.
        front_matter: Whether to emit front matter when metadata is available.
        max_file_size: Maximum input file size in bytes.

    Examples:
        ReflowConfig(output_dir="notes", include_sources=True)
    """

    # Output
    output_dir: str = "articles"
    include_sources: bool = False
    separator: str = "--------"
    front_matter: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> ReflowConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.reflow-markdown]`` table from `pyproject.toml` and the
    ``[reflow-markdown]`` or ``[tool.reflow-markdown]`` table from
    `.reflow-markdown.toml` when present. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ReflowConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("articles"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "reflow-markdown")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".reflow-markdown.toml",
            table_paths=[("reflow-markdown",), ("tool", "reflow-markdown")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ReflowConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ReflowConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ReflowConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ReflowConfig()

    try:
        return ReflowConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ReflowConfig) -> None:
    """Validate a `ReflowConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If text fields are empty or not strings, flags are not
            booleans, or the size limit is not a positive integer.

    Examples:
        validate_config(ReflowConfig(max_file_size=1024))
    """
    for key in ("output_dir", "separator"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"`{key}` must be a non-empty string")

    for key in ("include_sources", "front_matter"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    if isinstance(config.max_file_size, bool) or not isinstance(config.max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: ReflowConfig, **overrides: object) -> ReflowConfig:
    """Apply override values to a `ReflowConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ReflowConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ReflowConfig`.

    Examples:
        updated = apply_overrides(config, output_dir="notes", include_sources=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ReflowConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ReflowConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_dir="notes")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
