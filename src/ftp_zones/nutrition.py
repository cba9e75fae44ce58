"""Hourly fueling and hydration targets per Coggan training zone.

Targets are always keyed to Coggan zones, whatever model a caller displays.
Energy cost comes from mechanical power and gross efficiency:

    kcal/h = avg_watts * 3.6 / (efficiency / 100)

Hydration uses an additive heuristic (base + zone step + weight term). It is a
planning approximation, not a sweat-rate model.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from .bounds import is_number, is_positive_finite, round_half_up, validate_ftp
from .config import FtpZonesConfig, resolve_config
from .constants import (
    DEFAULT_CARBS_PERCENTAGE,
    FALLBACK_CARBS_PERCENTAGE,
    HYDRATION_PER_ZONE_ML,
    HYDRATION_WEIGHT_FACTOR,
    KCAL_PER_GRAM_CARB,
    KCAL_PER_GRAM_PROTEIN,
    KJ_PER_WATT_HOUR,
    MAX_EFFICIENCY_PCT,
    MIN_EFFICIENCY_PCT,
    UNBOUNDED_ZONE_UPPER_FACTOR,
)
from .diagnostics import DiagnosticCode, Diagnostics, Severity, report
from .foods import FoodItem, get_recommended_foods
from .zones import COGGAN_MODEL, Zone


@dataclass(frozen=True)
class NutritionOptions:
    """Overrides for gross efficiency (%) and the per-zone carbohydrate share (%)."""

    efficiency: float | None = None
    carbs_percentage: Mapping[int, float] | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "NutritionOptions":
        if not payload:
            return cls()
        raw_carbs = payload.get("carbsPercentage", payload.get("carbs_percentage"))
        return cls(
            efficiency=payload.get("efficiency"),
            carbs_percentage=_parse_carbs_table(raw_carbs),
        )


@dataclass(frozen=True)
class NutritionRequirement:
    zone_index: int
    name: str
    calories_per_hour: int
    carbs_per_hour: int
    protein_per_hour: int
    hydration_per_hour: int
    recommended_foods: tuple[FoodItem, ...]


def calculate_calorie_requirements(
    ftp: Any,
    weight: Any,
    options: NutritionOptions | Mapping[str, Any] | None = None,
    *,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> tuple[NutritionRequirement, ...]:
    """Per-zone hourly calories, carbs, protein and fluids for a rider."""
    cfg = resolve_config(config)
    settings = cfg.nutrition
    opts = options if isinstance(options, NutritionOptions) else NutritionOptions.from_mapping(options)

    valid_ftp = validate_ftp(ftp, diagnostics=diagnostics, config=cfg)
    if not is_positive_finite(weight):
        report(
            diagnostics,
            cfg,
            DiagnosticCode.WEIGHT_DEFAULTED,
            Severity.WARNING,
            f"Invalid weight for calorie calculation, using {settings.default_weight_kg:g}kg",
            weight=None if weight is None else repr(weight),
        )
        weight = settings.default_weight_kg

    efficiency = _resolve_efficiency(opts.efficiency, diagnostics, cfg)
    carbs_table = _parse_carbs_table(opts.carbs_percentage) or DEFAULT_CARBS_PERCENTAGE

    requirements: list[NutritionRequirement] = []
    for zone in COGGAN_MODEL.build(valid_ftp).zones:
        calories = zone_average_watts(zone) * KJ_PER_WATT_HOUR / (efficiency / 100)
        carb_pct = carbs_table.get(zone.index, FALLBACK_CARBS_PERCENTAGE)
        carbs = calories * (carb_pct / 100) / KCAL_PER_GRAM_CARB
        protein = calories * settings.protein_fraction / KCAL_PER_GRAM_PROTEIN
        hydration = (
            settings.hydration_base_ml
            + zone.index * HYDRATION_PER_ZONE_ML
            + weight * HYDRATION_WEIGHT_FACTOR
        )
        requirements.append(
            NutritionRequirement(
                zone_index=zone.index,
                name=zone.name,
                calories_per_hour=round_half_up(calories),
                carbs_per_hour=round_half_up(carbs),
                protein_per_hour=round_half_up(protein),
                hydration_per_hour=round_half_up(hydration),
                recommended_foods=get_recommended_foods(zone.index),
            )
        )
    return tuple(requirements)


def zone_average_watts(zone: Zone) -> float:
    """Midpoint of a zone; an open-ended zone is capped at 1.5x its minimum."""
    lower = zone.watts_range.min_watts
    upper = zone.watts_range.max_watts
    if upper is None:
        upper = lower * UNBOUNDED_ZONE_UPPER_FACTOR
    return (lower + upper) / 2


def _resolve_efficiency(
    value: Any, diagnostics: Diagnostics | None, config: FtpZonesConfig
) -> float:
    default = config.nutrition.efficiency_pct
    if value is None or value == 0:
        return default
    if not is_number(value) or not MIN_EFFICIENCY_PCT <= value <= MAX_EFFICIENCY_PCT:
        report(
            diagnostics,
            config,
            DiagnosticCode.EFFICIENCY_DEFAULTED,
            Severity.WARNING,
            f"Invalid efficiency {value!r}, using {default:g}%",
            efficiency=repr(value),
        )
        return default
    return float(value)


def _parse_carbs_table(raw: Any) -> Mapping[int, float] | None:
    if not isinstance(raw, Mapping):
        return None
    table: dict[int, float] = {}
    for key, value in raw.items():
        zone_index = _zone_key(key)
        if zone_index is not None and is_number(value) and 0 <= value <= 100:
            table[zone_index] = float(value)
    return MappingProxyType(table)


def _zone_key(key: Any) -> int | None:
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    if isinstance(key, str):
        digits = key.strip().lower().removeprefix("z")
        if digits.isdigit():
            return int(digits)
    return None
