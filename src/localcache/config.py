from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as SchemaValidationError

DEFAULT_CACHE_DIR = "/media/cache/"
CACHE_DIR_ENV = "CACHE_DIR"
SCOPE_ENV = "GITHUB_REPOSITORY"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    cache_dir: str = DEFAULT_CACHE_DIR
    scope: str = ""

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("cache_dir must not be empty")
        return normalized

    @field_validator("scope")
    @classmethod
    def validate_scope(cls, value: str) -> str:
        normalized = value.strip().lstrip("/")
        if ".." in Path(normalized).parts:
            raise ValueError(f"scope must not contain '..': {value}")
        return normalized

    @property
    def directory(self) -> Path:
        return Path(self.cache_dir) / self.scope

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CacheSettings:
        env = os.environ if environ is None else environ
        return cls(
            cache_dir=env.get(CACHE_DIR_ENV, "").strip() or DEFAULT_CACHE_DIR,
            scope=env.get(SCOPE_ENV, ""),
        )


def load_settings(path: str | Path) -> CacheSettings:
    raw = Path(path).read_text(encoding="utf-8")
    payload = _parse_yaml_or_json(raw)
    try:
        return CacheSettings.model_validate(payload)
    except SchemaValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


def _parse_yaml_or_json(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = _parse_yaml(raw)
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed


def _parse_yaml(raw: str) -> dict[str, Any]:
    try:
        import yaml  # type: ignore[import-not-found]
    except ModuleNotFoundError as exc:
        raise ValueError(
            "YAML parsing requires PyYAML. Use JSON-compatible YAML or install pyyaml."
        ) from exc

    parsed = yaml.safe_load(raw)
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed
