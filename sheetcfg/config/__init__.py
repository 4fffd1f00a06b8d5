"""Runtime settings for sheetcfg.

Settings come from an optional YAML file and are overridden by CLI options.
``ConvertContext`` freezes the resolved scan root and output root once so
that every conversion computes paths from the same values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from sheetcfg.core.errors import ConfigError


DEFAULT_SHEET_NAME = "Sheet1"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".xlsx", ".xls")
DEFAULT_OUTPUT_DIRNAME = "json"


class ConvertSettings(BaseModel):
    """User-facing conversion settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_dir: Path = Path("./")
    output_dir: Optional[Path] = None
    sheet_name: str = DEFAULT_SHEET_NAME
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    strict_types: bool = False
    fail_fast: bool = False
    indent: str = "\t"
    sort_keys: bool = False
    report_path: Optional[Path] = None

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> Tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        normalized = []
        for item in value or ():
            ext = str(item).strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            normalized.append(ext)
        if not normalized:
            raise ValueError("extensions 不能为空")
        return tuple(dict.fromkeys(normalized))

    @field_validator("sheet_name")
    @classmethod
    def _require_sheet_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("sheet_name 不能为空")
        return value

    def merged(self, overrides: Mapping[str, Any]) -> "ConvertSettings":
        """Return a copy with non-``None`` overrides applied and re-validated."""

        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return build_settings(payload)


def build_settings(payload: Mapping[str, Any]) -> ConvertSettings:
    try:
        return ConvertSettings(**payload)
    except ValidationError as exc:
        raise ConfigError(f"配置项校验失败: {exc}") from exc


def load_settings(path: str | Path | None = None) -> ConvertSettings:
    """Load settings from YAML, falling back to defaults when no path is given."""

    if path is None:
        return ConvertSettings()
    return build_settings(_load_yaml(Path(path)))


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"配置文件未找到: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"配置文件解析失败: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("配置文件必须是字典结构")
    return data


@dataclass(frozen=True)
class ConvertContext:
    """Values computed once at startup and read by every conversion."""

    root: Path
    output_root: Path
    settings: ConvertSettings

    @classmethod
    def from_settings(cls, settings: ConvertSettings, cwd: Path | None = None) -> "ConvertContext":
        base = Path(cwd) if cwd is not None else Path.cwd()
        root = settings.source_dir
        if not root.is_absolute():
            root = base / root
        output_root = settings.output_dir or Path(DEFAULT_OUTPUT_DIRNAME)
        if not output_root.is_absolute():
            output_root = base / output_root
        return cls(root=root.resolve(), output_root=output_root.resolve(), settings=settings)


__all__ = [
    "ConvertContext",
    "ConvertSettings",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_SHEET_NAME",
    "build_settings",
    "load_settings",
]
