"""Engine configuration: OmegaConf merge of defaults, pyproject, YAML and env."""

from __future__ import annotations

from functools import lru_cache
import os
from pathlib import Path
import tomllib
from typing import Any

from omegaconf import OmegaConf
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import (
    DEFAULT_EFFICIENCY_PCT,
    DEFAULT_WEIGHT_KG,
    HYDRATION_BASE_ML,
    MAX_EFFICIENCY_PCT,
    MAX_FTP,
    MIN_EFFICIENCY_PCT,
    MIN_FTP,
    PROTEIN_FRACTION,
    SUPER_MAX_FTP,
)


DEFAULT_CONFIG_FILE = "config/ftp_zones.yaml"


class BoundsSettings(BaseModel):
    """FTP bounds in watts."""

    model_config = ConfigDict(frozen=True)

    min_ftp: float = MIN_FTP
    max_ftp: float = MAX_FTP
    super_max_ftp: float = SUPER_MAX_FTP

    @model_validator(mode="after")
    def _ordered(self) -> "BoundsSettings":
        if not 0 < self.min_ftp <= self.max_ftp <= self.super_max_ftp:
            raise ValueError("bounds must satisfy 0 < min_ftp <= max_ftp <= super_max_ftp")
        return self


class NutritionSettings(BaseModel):
    """Defaults used by the requirement deriver."""

    model_config = ConfigDict(frozen=True)

    default_weight_kg: float = DEFAULT_WEIGHT_KG
    efficiency_pct: float = DEFAULT_EFFICIENCY_PCT
    protein_fraction: float = PROTEIN_FRACTION
    hydration_base_ml: float = HYDRATION_BASE_ML

    @field_validator("default_weight_kg", "hydration_base_ml")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("nutrition defaults must be > 0")
        return value

    @field_validator("efficiency_pct")
    @classmethod
    def _efficiency(cls, value: float) -> float:
        if not MIN_EFFICIENCY_PCT <= value <= MAX_EFFICIENCY_PCT:
            raise ValueError(
                f"efficiency_pct must be within [{MIN_EFFICIENCY_PCT:g}, {MAX_EFFICIENCY_PCT:g}]"
            )
        return value

    @field_validator("protein_fraction")
    @classmethod
    def _fraction(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("protein_fraction must be within [0, 1]")
        return value


class DiagnosticsSettings(BaseModel):
    """Controls for the diagnostics channel."""

    model_config = ConfigDict(frozen=True)

    log_events: bool = True


class FtpZonesConfig(BaseModel):
    """Typed, immutable configuration for the engine."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    bounds: BoundsSettings = Field(default_factory=BoundsSettings)
    nutrition: NutritionSettings = Field(default_factory=NutritionSettings)
    diagnostics: DiagnosticsSettings = Field(default_factory=DiagnosticsSettings)


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the directory holding `pyproject.toml`, if any."""
    env_root = os.getenv("FTP_ZONES_PROJECT_ROOT")
    if env_root:
        return _resolve_path(Path(env_root), Path.cwd())

    cursor = (start or Path.cwd()).resolve()
    for candidate in (cursor, *cursor.parents):
        if (candidate / "pyproject.toml").exists():
            return candidate
    return None


@lru_cache(maxsize=1)
def default_engine_config() -> FtpZonesConfig:
    """Load config with OmegaConf merge + Pydantic validation."""
    merged = _load_merged_config(find_project_root())
    try:
        return FtpZonesConfig.model_validate(merged)
    except ValidationError as exc:
        raise ValueError(f"Invalid ftp_zones config: {exc}") from exc


def resolve_config(config: FtpZonesConfig | None = None) -> FtpZonesConfig:
    """Return an explicit config or the cached project default."""
    if config is None:
        return default_engine_config()
    return config


def clear_config_cache() -> None:
    """Clear cached config; useful for tests or env-var changes."""
    default_engine_config.cache_clear()


def _load_merged_config(project_root: Path | None) -> dict[str, Any]:
    base_cfg = FtpZonesConfig().model_dump()
    pyproject_cfg: dict[str, Any] = {}
    file_cfg: dict[str, Any] = {}
    if project_root is not None:
        pyproject_cfg = _load_pyproject_config(project_root)
        file_cfg = _load_file_config(project_root)
    elif env_path := os.getenv("FTP_ZONES_CONFIG_FILE"):
        file_cfg = _load_file_config(Path.cwd(), env_path)

    merged = OmegaConf.merge(
        base_cfg,
        pyproject_cfg,
        file_cfg,
        _load_env_overrides(),
    )
    raw = OmegaConf.to_container(merged, resolve=True)
    return raw if isinstance(raw, dict) else {}


def _load_file_config(project_root: Path, env_path: str | None = None) -> dict[str, Any]:
    env_path = env_path or os.getenv("FTP_ZONES_CONFIG_FILE")
    if env_path:
        cfg_path = _resolve_path(Path(env_path), project_root)
        if not cfg_path.exists():
            raise FileNotFoundError(f"FTP_ZONES_CONFIG_FILE points to missing file: {cfg_path}")
    else:
        cfg_path = project_root / DEFAULT_CONFIG_FILE
        if not cfg_path.exists():
            return {}

    loaded = OmegaConf.load(cfg_path)
    raw = OmegaConf.to_container(loaded, resolve=True)
    return raw if isinstance(raw, dict) else {}


def _load_env_overrides() -> dict[str, Any]:
    bounds: dict[str, Any] = {}
    if env_min := os.getenv("FTP_ZONES_MIN_FTP"):
        bounds["min_ftp"] = _parse_env_float("FTP_ZONES_MIN_FTP", env_min)
    if env_max := os.getenv("FTP_ZONES_MAX_FTP"):
        bounds["max_ftp"] = _parse_env_float("FTP_ZONES_MAX_FTP", env_max)
    if env_ceiling := os.getenv("FTP_ZONES_SUPER_MAX_FTP"):
        bounds["super_max_ftp"] = _parse_env_float("FTP_ZONES_SUPER_MAX_FTP", env_ceiling)

    nutrition: dict[str, Any] = {}
    if env_weight := os.getenv("FTP_ZONES_DEFAULT_WEIGHT_KG"):
        nutrition["default_weight_kg"] = _parse_env_float("FTP_ZONES_DEFAULT_WEIGHT_KG", env_weight)
    if env_efficiency := os.getenv("FTP_ZONES_EFFICIENCY_PCT"):
        nutrition["efficiency_pct"] = _parse_env_float("FTP_ZONES_EFFICIENCY_PCT", env_efficiency)

    diagnostics: dict[str, Any] = {}
    if env_log := os.getenv("FTP_ZONES_LOG_EVENTS"):
        diagnostics["log_events"] = _parse_env_bool(env_log)

    overrides: dict[str, Any] = {}
    if bounds:
        overrides["bounds"] = bounds
    if nutrition:
        overrides["nutrition"] = nutrition
    if diagnostics:
        overrides["diagnostics"] = diagnostics
    return overrides


def _resolve_path(path: Path, project_root: Path) -> Path:
    if path.is_absolute():
        return path.expanduser().resolve()
    return (project_root / path).resolve()


def _parse_env_float(name: str, value: str) -> float:
    try:
        return float(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _parse_env_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ValueError("FTP_ZONES_LOG_EVENTS must be one of: 1,true,yes,on,0,false,no,off")


def _load_pyproject_config(project_root: Path) -> dict[str, Any]:
    pyproject_path = project_root / "pyproject.toml"
    if not pyproject_path.exists():
        return {}

    with pyproject_path.open("rb") as handle:
        pyproject = tomllib.load(handle)

    tool_cfg = pyproject.get("tool", {})
    engine_cfg = tool_cfg.get("ftp_zones", {})
    return engine_cfg if isinstance(engine_cfg, dict) else {}
