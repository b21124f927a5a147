"""
pylox configuration.

Settings come from, lowest priority first: built-in defaults, the
[tool.pylox] table of pyproject.toml, a pylox.toml file, and PYLOX_*
environment variables.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pylox.toml"

_ENV_VARS = {
    "prompt": "PYLOX_PROMPT",
    "log_level": "PYLOX_LOG_LEVEL",
    "color": "PYLOX_COLOR",
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """A config file is not valid TOML or has the wrong shape."""


class LoxSettings(BaseModel):
    """Complete pylox configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    prompt: str = "> "
    log_level: str = "WARNING"
    color: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e


def load_settings(
    start: Path | None = None,
    environ: dict[str, str] | None = None,
) -> LoxSettings:
    """Load settings for a working directory.

    Args:
        start: Directory holding pyproject.toml / pylox.toml (default: cwd).
        environ: Environment mapping (default: os.environ).

    Returns:
        Validated settings.

    Raises:
        ConfigError: If a file is not valid TOML or [tool.pylox] is not a table.
        pydantic.ValidationError: If a value is invalid.
    """
    root = start if start is not None else Path.cwd()
    env = environ if environ is not None else os.environ
    data: dict[str, Any] = {}

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _read_toml(pyproject).get("tool", {})
        section = tool.get("pylox", {}) if isinstance(tool, dict) else {}
        if not isinstance(section, dict):
            raise ConfigError(f"{pyproject}: [tool.pylox] must be a table")
        data.update(section)

    config_file = root / CONFIG_FILENAME
    if config_file.is_file():
        logger.debug("Loading settings from %s", config_file)
        data.update(_read_toml(config_file))

    for key, var in _ENV_VARS.items():
        if var in env:
            data[key] = env[var]

    return LoxSettings.model_validate(data)
