from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pipe_stream.config.models import AppConfig
from pipe_stream.domain.errors import PipeStreamError


class ConfigError(PipeStreamError, ValueError):
    # Raised for invalid configuration (fail fast).
    pass


def load_yaml_config(path: Path) -> dict[str, Any]:
    # YAML loader; returns a raw mapping for validation.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config is not valid YAML: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def parse_config(raw: dict[str, Any]) -> AppConfig:
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: Path) -> AppConfig:
    return parse_config(load_yaml_config(path))
