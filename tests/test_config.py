"""Tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from timed_input.config import (
    CONFIG_FILE,
    PromptConfig,
    ReaderConfig,
    TimedInputConfig,
    load_config,
    save_config,
)
from timed_input.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Remove config overrides that may be set in the environment."""
    for name in ("TIMED_INPUT_DEADLINE", "TIMED_INPUT_ENCODING", "TIMED_INPUT_DEFAULT_ANSWER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path for a config file in a temp directory."""
    return tmp_path / CONFIG_FILE


class TestTimedInputConfig:
    """Tests for TimedInputConfig dataclass."""

    def test_default_values(self) -> None:
        """Default config has sensible values."""
        config = TimedInputConfig()

        assert config.reader.deadline_seconds == 30.0
        assert config.reader.encoding == "utf-8"
        assert config.prompt.default_answer is None
        assert config.prompt.confirm_default is True

    def test_nested_configs(self) -> None:
        """Nested configs are properly initialized."""
        config = TimedInputConfig()

        assert isinstance(config.reader, ReaderConfig)
        assert isinstance(config.prompt, PromptConfig)


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_defaults_when_no_file(self, config_path: Path) -> None:
        """Returns defaults when the config file doesn't exist."""
        config = load_config(config_path)
        assert config.reader.deadline_seconds == 30.0

    def test_default_path_is_cwd(self, tmp_path: Path, monkeypatch) -> None:
        """Without a path, timed-input.yaml in the working directory is used."""
        (tmp_path / CONFIG_FILE).write_text(yaml.dump({"reader": {"deadline_seconds": 7}}))
        monkeypatch.chdir(tmp_path)

        assert load_config().reader.deadline_seconds == 7.0

    def test_loads_from_file(self, config_path: Path) -> None:
        """Loads values from the YAML file."""
        config_path.write_text(
            yaml.dump(
                {
                    "reader": {"deadline_seconds": 2.5, "encoding": "latin-1"},
                    "prompt": {"default_answer": "guest", "confirm_default": False},
                }
            )
        )

        config = load_config(config_path)

        assert config.reader.deadline_seconds == 2.5
        assert config.reader.encoding == "latin-1"
        assert config.prompt.default_answer == "guest"
        assert config.prompt.confirm_default is False

    def test_partial_file_keeps_defaults(self, config_path: Path) -> None:
        """Missing keys fall back to defaults."""
        config_path.write_text(yaml.dump({"reader": {"encoding": "ascii"}}))

        config = load_config(config_path)

        assert config.reader.deadline_seconds == 30.0
        assert config.reader.encoding == "ascii"
        assert config.prompt.confirm_default is True

    def test_empty_file(self, config_path: Path) -> None:
        """An empty file yields defaults."""
        config_path.write_text("")
        assert load_config(config_path) == TimedInputConfig()

    def test_invalid_yaml_uses_defaults(self, config_path: Path, caplog) -> None:
        """Unparseable YAML logs a warning and keeps defaults."""
        config_path.write_text("reader: [unclosed")

        with caplog.at_level("WARNING", logger="timed_input.config"):
            config = load_config(config_path)

        assert config.reader.deadline_seconds == 30.0
        assert "Failed to parse config file" in caplog.text

    def test_non_numeric_deadline_in_file(self, config_path: Path) -> None:
        """A non-numeric deadline is a ConfigError."""
        config_path.write_text(yaml.dump({"reader": {"deadline_seconds": "soon"}}))

        with pytest.raises(ConfigError, match="soon"):
            load_config(config_path)


    @pytest.mark.parametrize(
        "data",
        [{"reader": 5}, {"prompt": ["a"]}, {"reader": "fast"}],
        ids=["scalar-reader", "list-prompt", "string-reader"],
    )
    def test_non_mapping_section(self, config_path: Path, data) -> None:
        """Sections that are not mappings are a ConfigError."""
        config_path.write_text(yaml.dump(data))

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(config_path)

    def test_non_mapping_file(self, config_path: Path) -> None:
        """A file whose top level is not a mapping is a ConfigError."""
        config_path.write_text(yaml.dump(["reader", "prompt"]))

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(config_path)

    @pytest.mark.parametrize("value", ["sometimes", 1, None])
    def test_non_bool_confirm_default(self, config_path: Path, value) -> None:
        """confirm_default must be true or false."""
        config_path.write_text(yaml.dump({"prompt": {"confirm_default": value}}))

        with pytest.raises(ConfigError, match="confirm_default"):
            load_config(config_path)


class TestEnvOverrides:
    """Environment variables override file values."""

    def test_deadline_override(self, config_path: Path, monkeypatch) -> None:
        """TIMED_INPUT_DEADLINE overrides the file."""
        config_path.write_text(yaml.dump({"reader": {"deadline_seconds": 5}}))
        monkeypatch.setenv("TIMED_INPUT_DEADLINE", "0.5")

        assert load_config(config_path).reader.deadline_seconds == 0.5

    def test_encoding_and_default_answer(self, config_path: Path, monkeypatch) -> None:
        """Encoding and default answer can be overridden."""
        monkeypatch.setenv("TIMED_INPUT_ENCODING", "utf-16")
        monkeypatch.setenv("TIMED_INPUT_DEFAULT_ANSWER", "nobody")

        config = load_config(config_path)

        assert config.reader.encoding == "utf-16"
        assert config.prompt.default_answer == "nobody"

    def test_invalid_deadline_override(self, config_path: Path, monkeypatch) -> None:
        """A non-numeric env deadline is a ConfigError."""
        monkeypatch.setenv("TIMED_INPUT_DEADLINE", "ten")

        with pytest.raises(ConfigError, match="TIMED_INPUT_DEADLINE"):
            load_config(config_path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved config loads back unchanged."""
        config = TimedInputConfig(
            reader=ReaderConfig(deadline_seconds=12.0, encoding="latin-1"),
            prompt=PromptConfig(default_answer="x", confirm_default=False),
        )

        path = save_config(config, tmp_path / "nested" / CONFIG_FILE)

        assert path.exists()
        assert load_config(path) == config
