from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rating_params import RatingParams

CONFIG_PATH_ENV = "OYSTERSCORE_CONFIG"


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///oysterscore.db"
    echo: bool = False


class LoggingSettings(BaseModel):
    level: str = "INFO"
    log_dir: str | None = None
    retention_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)

    @model_validator(mode="before")
    @classmethod
    def _alias_dir(cls, data: Any) -> Any:
        if isinstance(data, dict) and "dir" in data and "log_dir" not in data:
            data = dict(data)
            data["log_dir"] = data.pop("dir")
        return data


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="OYSTERSCORE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    rating: RatingParams = Field(default_factory=RatingParams)


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_settings(yaml_path: str | os.PathLike[str] | None = None) -> Settings:
    """Build settings from the environment, overlaid with an optional YAML file.

    The YAML path falls back to ``$OYSTERSCORE_CONFIG``. Sections present in
    the file (``database``, ``logging``, ``rating``) take precedence over
    environment variables.
    """
    path = yaml_path or os.getenv(CONFIG_PATH_ENV)
    if not path:
        return Settings()
    overrides = _load_yaml(Path(path))
    known = {k: v for k, v in overrides.items() if k in Settings.model_fields}
    return Settings(**known)


__all__ = [
    "CONFIG_PATH_ENV",
    "DatabaseSettings",
    "LoggingSettings",
    "Settings",
    "load_settings",
]
