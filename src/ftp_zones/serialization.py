"""JSON payloads for zone sets, nutrition tables and diagnostics."""

from __future__ import annotations

from enum import Enum
import json
import math
from typing import Any, Iterable, Mapping

from .diagnostics import Diagnostic
from .foods import FoodItem
from .heart_rate import HeartRateZone
from .nutrition import NutritionRequirement
from .zones import Zone, ZoneSet


def zone_set_to_dict(zone_set: ZoneSet) -> dict[str, Any]:
    """Serialize a zone set with camelCase field names; open bounds become null."""
    return {
        "modelName": zone_set.model_name,
        "model": zone_set.kind.value,
        "ftp": _number(zone_set.ftp),
        "zones": [zone_to_dict(zone) for zone in zone_set.zones],
    }


def zone_to_dict(zone: Zone) -> dict[str, Any]:
    hr = zone.heart_rate_range
    return {
        "index": zone.index,
        "name": zone.name,
        "description": zone.description,
        "percentFTP": {
            "min": _number(zone.percent_ftp.min_pct),
            "max": _number(zone.percent_ftp.max_pct),
        },
        "wattsRange": {"min": zone.watts_range.min_watts, "max": zone.watts_range.max_watts},
        "heartRateRange": None if hr is None else {"min": _number(hr.min_pct), "max": _number(hr.max_pct)},
        "trainingBenefit": zone.training_benefit,
        "ratedPerceivedExertion": zone.rated_perceived_exertion,
    }


def nutrition_to_list(requirements: Iterable[NutritionRequirement]) -> list[dict[str, Any]]:
    return [
        {
            "zoneIndex": item.zone_index,
            "name": item.name,
            "caloriesPerHour": item.calories_per_hour,
            "carbsPerHour": item.carbs_per_hour,
            "proteinPerHour": item.protein_per_hour,
            "hydrationPerHour": item.hydration_per_hour,
            "recommendedFoods": [food_to_dict(food) for food in item.recommended_foods],
        }
        for item in requirements
    ]


def food_to_dict(food: FoodItem) -> dict[str, str]:
    return {"name": food.name, "type": food.type, "portion": food.portion}


def heart_rate_zones_to_list(zones: Iterable[HeartRateZone]) -> list[dict[str, Any]]:
    return [
        {
            "index": zone.index,
            "name": zone.name,
            "min": zone.min_bpm,
            "max": zone.max_bpm,
            "percentHRR": zone.percent_reserve,
        }
        for zone in zones
    ]


def diagnostics_to_list(diagnostics: Iterable[Diagnostic]) -> list[dict[str, Any]]:
    return [
        {
            "code": item.code.value,
            "severity": item.severity.value,
            "message": item.message,
            "details": _jsonify_obj(item.details),
        }
        for item in diagnostics
    ]


def to_json(payload: Any, *, indent: int | None = 2) -> str:
    return json.dumps(_jsonify_obj(payload), indent=indent)


def _number(value: float | None) -> int | float | None:
    if value is None:
        return None
    if float(value).is_integer():
        return int(value)
    return float(value)


def _jsonify_obj(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _jsonify_obj(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonify_obj(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
