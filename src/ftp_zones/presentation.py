"""Rider-facing text/table formatting helpers."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .bounds import power_to_weight
from .nutrition import NutritionRequirement
from .zones import ZoneSet


def build_zone_summary_text(zone_set: ZoneSet, *, weight_kg: float | None = None) -> str:
    """Create a short text block summarizing a zone set."""
    wkg = power_to_weight(zone_set.ftp, weight_kg)
    wkg_line = f" ({wkg:.2f} W/kg)" if wkg is not None else ""
    lines = [
        zone_set.model_name,
        f"- FTP: {zone_set.ftp:.0f} W{wkg_line}",
    ]
    for zone in zone_set.zones:
        watts = _watts_label(zone.watts_range.min_watts, zone.watts_range.max_watts)
        lines.append(f"- Z{zone.index} {zone.name}: {watts}")
    return "\n".join(lines)


def zone_table(zone_set: ZoneSet) -> pd.DataFrame:
    """One row per zone with display-ready range labels."""
    rows = []
    for zone in zone_set.zones:
        hr = zone.heart_rate_range
        rows.append(
            {
                "Zone": zone.index,
                "Name": zone.name,
                "%FTP": _range_label(zone.percent_ftp.min_pct, zone.percent_ftp.max_pct, "%"),
                "Watts": _watts_label(zone.watts_range.min_watts, zone.watts_range.max_watts),
                "Min (W)": zone.watts_range.min_watts,
                "Max (W)": zone.watts_range.max_watts,
                "HR (%)": "n/a" if hr is None else _range_label(hr.min_pct, hr.max_pct, "%"),
                "RPE": zone.rated_perceived_exertion,
                "Benefit": zone.training_benefit,
            }
        )
    table = pd.DataFrame(rows)
    if not table.empty:
        table["Max (W)"] = table["Max (W)"].astype("Int64")
    return table


def nutrition_table(requirements: Sequence[NutritionRequirement]) -> pd.DataFrame:
    """Round and rename requirement fields for display."""
    table = pd.DataFrame(
        [
            {
                "zone_index": item.zone_index,
                "name": item.name,
                "calories_per_hour": item.calories_per_hour,
                "carbs_per_hour": item.carbs_per_hour,
                "protein_per_hour": item.protein_per_hour,
                "hydration_per_hour": item.hydration_per_hour,
                "foods": ", ".join(food.name for food in item.recommended_foods),
            }
            for item in requirements
        ]
    )
    table = table.rename(
        columns={
            "zone_index": "Zone",
            "name": "Name",
            "calories_per_hour": "Energy (kcal/h)",
            "carbs_per_hour": "Carbs (g/h)",
            "protein_per_hour": "Protein (g/h)",
            "hydration_per_hour": "Fluids (ml/h)",
            "foods": "Suggested",
        }
    )
    keep = [
        "Zone",
        "Name",
        "Energy (kcal/h)",
        "Carbs (g/h)",
        "Protein (g/h)",
        "Fluids (ml/h)",
        "Suggested",
    ]
    return table.reindex(columns=keep)


def _watts_label(lower: int, upper: int | None) -> str:
    return _range_label(lower, upper, " W")


def _range_label(lower: float, upper: float | None, unit: str) -> str:
    if upper is None:
        return f"{lower:g}+{unit}"
    return f"{lower:g}-{upper:g}{unit}"
