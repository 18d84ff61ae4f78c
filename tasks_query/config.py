"""Configuration management for tasks-query."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from tasks_query.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from tasks_query.query.settings import GlobalFilter, GlobalQuery

logger = logging.getLogger(__name__)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "tasks-query" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        global_filter: Text a list item must contain to be treated as a task.
            Empty means every checkbox item is a task.
        global_query: Query instructions prepended to every query.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    global_filter: str = ""
    global_query: str = ""
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        if self.global_filter != self.global_filter.strip():
            warnings.append(
                f"query.global_filter={self.global_filter!r} has surrounding whitespace"
            )

        global_query = GlobalQuery(self.global_query)
        if not global_query.is_empty():
            error = global_query.query().error
            if error is not None:
                warnings.append(f"query.global_query has an error:\n{error}")

        return warnings

    def settings(self) -> tuple[GlobalFilter, GlobalQuery]:
        """Settings values to hand to query call sites."""
        return GlobalFilter(self.global_filter), GlobalQuery(self.global_query)


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: tasks-query init-config"
        )
        return config, warnings + config.validate()

    logger.debug("Loading config from %s", config_path)
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    return config, warnings + config.validate()


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [query] section
    query = data.get("query", {})
    if "global_filter" in query:
        value = query["global_filter"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.global_filter", value, "must be a string")
        config.global_filter = value

    if "global_query" in query:
        value = query["global_query"]
        if not isinstance(value, str):
            raise ConfigValidationError("query.global_query", value, "must be a string")
        config.global_query = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "query": {
            "global_filter": config.global_filter,
            "global_query": config.global_query,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
