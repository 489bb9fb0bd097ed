"""Layered settings: defaults, YAML file, environment, command line."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .buffer import DEFAULT_CHUNK_SIZE, MAX_BUFFER_SIZE
from .client import DEFAULT_URL_TEMPLATE, Transport
from .errors import ConfigError
from .prompt import DEFAULT_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "img.txt"

# Environment variable -> settings field
ENV_VARS = {
    "BREED_FETCH_URL_TEMPLATE": "url_template",
    "BREED_FETCH_OUTPUT": "output_path",
    "BREED_FETCH_TRANSPORT": "transport",
    "BREED_FETCH_TIMEOUT": "timeout",
}


class Settings(BaseModel):
    """Runtime settings for one breed-fetch run."""

    model_config = ConfigDict(extra="forbid")

    url_template: str = DEFAULT_URL_TEMPLATE
    output_path: str = DEFAULT_OUTPUT_PATH
    prompt: str = DEFAULT_PROMPT
    transport: Transport = Transport.CLIENT
    timeout: Optional[float] = Field(default=None, gt=0)
    allow_missing: bool = False
    echo_breed: bool = False
    max_buffer_size: int = Field(default=MAX_BUFFER_SIZE, gt=0)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)

    @field_validator("url_template")
    @classmethod
    def _require_breed_placeholder(cls, value: str) -> str:
        if "{breed}" not in value:
            raise ValueError("url_template must contain '{breed}'")
        return value


def load_config_file(path: str) -> Dict[str, Any]:
    """Read a YAML mapping of settings."""
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for var, field in ENV_VARS.items():
        if env.get(var):
            values[field] = env[var]
    return values


def load_settings(
    config_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Merge settings sources, later ones winning.

    Overrides whose value is ``None`` are ignored so unset command-line
    flags do not mask lower layers.
    """
    values: Dict[str, Any] = {}
    if config_file:
        values.update(load_config_file(config_file))
    values.update(settings_from_env(environ))
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    logger.debug("Resolved settings keys: %s", list(values))
    try:
        return Settings.model_validate(values)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid settings: {details}") from e
