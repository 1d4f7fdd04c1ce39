"""
Linter configuration.

Read from the `[tool.html-nesting-linter]` table of a `pyproject.toml`:

    [tool.html-nesting-linter]
    enable = true
    severity = "warning"
    languages = ["html", "vue"]
    extra_suffixes = { ".jinja" = "html" }

The analysis core never sees this; it only controls which documents are
linted and how diagnostics are reported.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .diagnostics import Severity
from .languages import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

TOOL_TABLE = "html-nesting-linter"


class ConfigError(Exception):
    """Configuration could not be read or is invalid."""


class LinterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    enable: bool = True
    severity: Severity = Severity.ERROR
    languages: list[str] = Field(default_factory=lambda: list(SUPPORTED_LANGUAGES))
    extra_suffixes: dict[str, str] = Field(default_factory=dict)

    def handles(self, language_id: str | None) -> bool:
        return self.enable and language_id is not None and language_id in self.languages


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from `start` (default: cwd) to the nearest `pyproject.toml`."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def config_from_mapping(data: dict[str, Any]) -> LinterConfig:
    try:
        return LinterConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.{TOOL_TABLE}] configuration:\n{exc}") from exc


def load_config(path: Path | str | None = None) -> LinterConfig:
    """
    Load configuration from `path`, or from the nearest `pyproject.toml`.

    A missing file or missing table yields the defaults. An explicitly given
    path that does not exist is an error.
    """
    if path is not None:
        pyproject = Path(path)
        if not pyproject.is_file():
            raise ConfigError(f"Config file not found: {pyproject}")
    else:
        pyproject = find_pyproject()
        if pyproject is None:
            logger.debug("No pyproject.toml found; using default config")
            return LinterConfig()

    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Could not read {pyproject}: {exc}") from exc

    table = data.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        logger.debug("No [tool.%s] table in %s", TOOL_TABLE, pyproject)
        return LinterConfig()

    logger.debug("Loaded config from %s", pyproject)
    return config_from_mapping(table)
