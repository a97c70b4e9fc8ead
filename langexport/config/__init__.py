"""Configuration helpers for langexport runtime settings.

Settings come from ``settings.yaml`` next to this module unless an explicit
path or the ``LANGEXPORT_SETTINGS`` environment variable points elsewhere.
The YAML payload is validated into ``ExportSettings`` so the pipeline only
ever sees typed values.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from langexport.core.errors import ConfigError


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"
SETTINGS_ENV_VAR = "LANGEXPORT_SETTINGS"


load_dotenv(override=False)


class ControlSheetNames(BaseModel):
    """Names of the two registry sheets."""

    model_config = ConfigDict(frozen=True)

    languages: str = "导出语言管理"
    sheets: str = "导出sheet管理"


class DateSerialSettings(BaseModel):
    """Bounds of the float-as-date heuristic."""

    enabled: bool = True
    lower: float = 30000
    upper: float = 70000

    @model_validator(mode="after")
    def _check_bounds(self) -> "DateSerialSettings":
        if self.lower >= self.upper:
            raise ValueError("date_serial.lower must be smaller than date_serial.upper")
        return self


class OutputSettings(BaseModel):
    root: Path | None = None
    timestamp_format: str = "%Y%m%d_%H%M%S"
    json_indent: int = Field(default=2, ge=0)
    keep_staging: bool = False


class ProgressSettings(BaseModel):
    strict: bool = False
    queue_size: int = Field(default=1000, ge=1)


class ExportSettings(BaseModel):
    """Complete settings file model."""

    model_config = ConfigDict(extra="forbid")

    control_sheets: ControlSheetNames = Field(default_factory=ControlSheetNames)
    root_mode_marker: str = Field(default="root", min_length=1)
    date_serial: DateSerialSettings = Field(default_factory=DateSerialSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    progress: ProgressSettings = Field(default_factory=ProgressSettings)


def resolve_settings_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path)
    env = os.getenv(SETTINGS_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_SETTINGS_PATH


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"配置文件未找到: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"配置文件解析失败: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("配置必须是字典结构")
    return data


def load_settings(path: str | Path | None = None) -> ExportSettings:
    """Load and validate export settings."""

    settings_path = resolve_settings_path(path)
    raw = _load_yaml(settings_path)
    try:
        return ExportSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"配置错误: {settings_path}: {exc}") from exc


__all__ = [
    "ControlSheetNames",
    "DateSerialSettings",
    "ExportSettings",
    "OutputSettings",
    "ProgressSettings",
    "load_settings",
    "resolve_settings_path",
]
