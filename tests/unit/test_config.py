"""Unit tests for configuration."""

from pathlib import Path

import pytest

from tasks_query.config import Config, load_config, save_config
from tasks_query.exceptions import ConfigParseError, ConfigValidationError


def test_default_config() -> None:
    """Test that default config has sensible values."""
    config = Config()
    assert config.colored_output is True
    assert config.global_filter == ""
    assert config.global_query == ""


def test_load_missing_config(temp_dir: Path) -> None:
    """Test loading when config file doesn't exist."""
    config_path = temp_dir / "nonexistent.toml"
    config, warnings = load_config(config_path)

    assert config == Config()
    assert len(warnings) == 1
    assert "tasks-query init-config" in warnings[0]


def test_load_valid_config(sample_config: Path) -> None:
    """Test loading a valid config file."""
    config, warnings = load_config(sample_config)

    assert config.global_filter == "#task"
    assert config.global_query == "not done"
    assert config.colored_output is False
    assert config.config_path == sample_config.resolve()
    assert warnings == []


def test_load_invalid_toml(temp_dir: Path) -> None:
    """Test loading invalid TOML raises error."""
    config_path = temp_dir / "invalid.toml"
    config_path.write_text("this is not valid [ toml")

    with pytest.raises(ConfigParseError):
        load_config(config_path)


@pytest.mark.parametrize(
    ("content", "key"),
    [
        ('[display]\ncolored_output = "not a boolean"\n', "display.colored_output"),
        ("[query]\nglobal_filter = 1\n", "query.global_filter"),
        ("[query]\nglobal_query = ['not done']\n", "query.global_query"),
    ],
)
def test_config_validation_invalid_type(temp_dir: Path, content: str, key: str) -> None:
    """Test that invalid types raise validation error."""
    config_path = temp_dir / "bad_types.toml"
    config_path.write_text(content)

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(config_path)
    assert exc_info.value.key == key


def test_global_query_error_is_a_warning(temp_dir: Path) -> None:
    config_path = temp_dir / "config.toml"
    config_path.write_text('[query]\nglobal_query = "wibble"\n')

    config, warnings = load_config(config_path)
    assert config.global_query == "wibble"
    assert len(warnings) == 1
    assert warnings[0].startswith("query.global_query has an error:")
    assert 'Problem line: "wibble"' in warnings[0]


def test_settings() -> None:
    global_filter, global_query = Config(global_filter="#todo", global_query="done").settings()
    assert global_filter.get() == "#todo"
    assert global_query.get() == "done"


def test_save_and_reload(temp_dir: Path) -> None:
    config_path = temp_dir / "nested" / "config.toml"
    save_config(Config(global_filter="#task", global_query="not done\nlimit 5"), config_path)

    config, warnings = load_config(config_path)
    assert config.global_filter == "#task"
    assert config.global_query == "not done\nlimit 5"
    assert warnings == []
