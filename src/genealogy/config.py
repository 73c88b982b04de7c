"""Run configuration.

Settings come from three sources, highest precedence first:

1. command-line arguments,
2. ``GENEALOGY_*`` environment variables (``.env`` is loaded on import of the
   package),
3. the first ``.recs.config`` file found in the working directory or in the
   home directory.  Its first line names the post folder, its optional second
   line the output file.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .lib.genealogists import DEFAULT_GENEALOGISTS

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".recs.config"
ENV_PREFIX = "GENEALOGY_"


class Settings(BaseModel):
    """Validated configuration of one run."""

    post_folder: Path = Field(..., description="Folder the posts are loaded from")
    output_file: Path | None = Field(None, description="File the JSON is written to; stdout if missing")
    per_post: int = Field(3, ge=1, description="Number of recommendations per post")
    genealogists: tuple[str, ...] = Field(DEFAULT_GENEALOGISTS, description="Names of the genealogist services to procure")
    weights: dict[str, float] = Field(default_factory=dict)
    default_weight: float = 1.0
    workers: int = Field(1, ge=1, description="Threads used to score pairs of posts")
    timeout: float | None = Field(None, gt=0, description="Deadline for scoring, in seconds")
    random_seed: int | None = None
    log_level: str = "INFO"

    @field_validator("post_folder")
    @classmethod
    def post_folder_is_directory(cls, value: Path) -> Path:
        if not value.exists():
            raise ValueError(f"Post path doesn't exist: {value}")
        if not value.is_dir():
            raise ValueError(f"Post path is no directory: {value}")
        return value

    @field_validator("output_file")
    @classmethod
    def output_file_is_writable(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        value = Path.cwd() / value
        if not value.parent.is_dir():
            raise ValueError(f"Output folder doesn't exist: {value.parent}")
        if value.exists() and not os.access(value, os.W_OK):
            raise ValueError(f"Output path is not writable: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @model_validator(mode="before")
    @classmethod
    def require_post_folder(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("post_folder"):
            raise ConfigError("No post folder defined.")
        return data


def parse_weights(text: str) -> dict[str, float]:
    """Parse ``tag=1.0, repo=0.5`` into a mapping from relation type to weight."""
    weights: dict[str, float] = {}
    for entry in text.split(","):
        if not entry.strip():
            continue
        name, equals, value = entry.partition("=")
        if not equals or not name.strip():
            raise ConfigError(f"Weight should look like NAME=VALUE: {entry.strip()}")
        try:
            weights[name.strip()] = float(value)
        except ValueError:
            raise ConfigError(f"Weight of '{name.strip()}' is no number: {value.strip()}") from None
    return weights


def _split_names(text: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in text.split(",") if name.strip())


def from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect the settings given as environment variables."""
    environ = os.environ if environ is None else environ
    parsers = {
        "post_folder": str,
        "output_file": str,
        "per_post": str,
        "genealogists": _split_names,
        "weights": parse_weights,
        "default_weight": str,
        "workers": str,
        "timeout": str,
        "random_seed": str,
        "log_level": str,
    }
    values: dict[str, Any] = {}
    for field, parse in parsers.items():
        raw = environ.get(ENV_PREFIX + field.upper())
        if raw is not None and raw.strip():
            values[field] = parse(raw.strip())
    return values


def read_config_file(candidates: list[Path] | None = None) -> dict[str, Any]:
    """Read post folder and output file from the first existing config file."""
    if candidates is None:
        candidates = [Path.cwd() / CONFIG_FILE_NAME, Path.home() / CONFIG_FILE_NAME]
    for path in candidates:
        if not path.is_file():
            continue
        logger.debug("Reading configuration from %s", path)
        lines = [line.strip() for line in path.read_text(encoding="utf-8").splitlines()]
        values: dict[str, Any] = {}
        if len(lines) >= 1 and lines[0]:
            values["post_folder"] = lines[0]
        if len(lines) >= 2 and lines[1]:
            values["output_file"] = lines[1]
        return values
    return {}


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_files: list[Path] | None = None,
) -> Settings:
    """Merge all configuration sources into validated settings.

    ``None`` values in *overrides* count as "not given".

    Raises
    ------
    ConfigError
        If the merged configuration is incomplete or invalid.
    """
    values = read_config_file(config_files)
    values.update(from_env(environ))
    values.update({key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
