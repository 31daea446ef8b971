"""Configuration management for timed-input.

Handles YAML configuration loading and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from timed_input.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "timed-input.yaml"


@dataclass
class ReaderConfig:
    """Bounded read settings."""

    deadline_seconds: float = 30.0
    encoding: str = "utf-8"


@dataclass
class PromptConfig:
    """Defaults used by the prompt helpers."""

    default_answer: str | None = None
    confirm_default: bool = True


@dataclass
class TimedInputConfig:
    """Complete timed-input configuration.

    Can be loaded from timed-input.yaml or constructed with defaults.
    Environment variables override config file values.
    """

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)


def _parse_seconds(value: Any, source: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid deadline in {source}: {value!r}") from None


def _section(data: Any, name: str, source: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' in {source} must be a mapping, got {section!r}")
    return section


def _parse_bool(value: Any, key: str, source: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Invalid {key} in {source}: {value!r} (expected true or false)")
    return value


def load_config(config_path: Path | None = None) -> TimedInputConfig:
    """Load configuration from a YAML file.

    Falls back to defaults if the file doesn't exist.
    Environment variables override config file values.

    Args:
        config_path: Path to the YAML file (default ./timed-input.yaml)

    Returns:
        Loaded TimedInputConfig

    Raises:
        ConfigError: If a deadline is not a number or a section is malformed
    """
    config = TimedInputConfig()
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILE

    if config_path.exists():
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {config_path} must contain a mapping")

            if "reader" in data:
                reader = _section(data, "reader", str(config_path))
                config.reader = ReaderConfig(
                    deadline_seconds=_parse_seconds(
                        reader.get("deadline_seconds", 30.0), str(config_path)
                    ),
                    encoding=reader.get("encoding", "utf-8"),
                )

            if "prompt" in data:
                prompt = _section(data, "prompt", str(config_path))
                config.prompt = PromptConfig(
                    default_answer=prompt.get("default_answer"),
                    confirm_default=_parse_bool(
                        prompt.get("confirm_default", True), "confirm_default", str(config_path)
                    ),
                )

        except yaml.YAMLError as e:
            logger.warning("Failed to parse config file %s: %s. Using defaults.", config_path, e)
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    return _apply_env_overrides(config)


def _apply_env_overrides(config: TimedInputConfig) -> TimedInputConfig:
    """Apply environment variable overrides to config."""
    if env_val := os.environ.get("TIMED_INPUT_DEADLINE"):
        config.reader.deadline_seconds = _parse_seconds(env_val, "TIMED_INPUT_DEADLINE")
    if env_val := os.environ.get("TIMED_INPUT_ENCODING"):
        config.reader.encoding = env_val
    if env_val := os.environ.get("TIMED_INPUT_DEFAULT_ANSWER"):
        config.prompt.default_answer = env_val

    return config


def save_config(config: TimedInputConfig, config_path: Path) -> Path:
    """Save configuration as YAML.

    Args:
        config: Configuration to save
        config_path: Destination file

    Returns:
        Path to saved config file
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "reader": {
            "deadline_seconds": config.reader.deadline_seconds,
            "encoding": config.reader.encoding,
        },
        "prompt": {
            "default_answer": config.prompt.default_answer,
            "confirm_default": config.prompt.confirm_default,
        },
    }

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    return config_path
