"""Heart-rate reserve (Karvonen) zones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .bounds import is_positive_finite, round_half_up
from .config import FtpZonesConfig, resolve_config
from .diagnostics import DiagnosticCode, Diagnostics, Severity, report

# (name, lower fraction of reserve, upper fraction of reserve)
RESERVE_BANDS = (
    ("Recovery", 0.5, 0.6),
    ("Base Endurance", 0.6, 0.7),
    ("Advanced Endurance", 0.7, 0.8),
    ("Threshold", 0.8, 0.9),
    ("VO2max", 0.9, 1.0),
)


@dataclass(frozen=True)
class HeartRateZone:
    index: int
    name: str
    min_bpm: int
    max_bpm: int
    percent_reserve: str


def calculate_heart_rate_zones(
    max_hr: Any,
    resting_hr: Any,
    *,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> tuple[HeartRateZone, ...]:
    """Five zones on the heart-rate reserve; empty when the inputs are unusable."""
    if not (is_positive_finite(max_hr) and is_positive_finite(resting_hr)) or max_hr <= resting_hr:
        report(
            diagnostics,
            resolve_config(config),
            DiagnosticCode.INVALID_HEART_RATE,
            Severity.WARNING,
            "Invalid heart rates, no heart-rate zones computed",
            max_hr=repr(max_hr),
            resting_hr=repr(resting_hr),
        )
        return ()

    reserve = max_hr - resting_hr
    zones: list[HeartRateZone] = []
    for index, (name, lower, upper) in enumerate(RESERVE_BANDS, start=1):
        min_bpm = round_half_up(resting_hr + reserve * lower)
        if index > 1:
            min_bpm += 1
        if index == len(RESERVE_BANDS):
            max_bpm = round_half_up(max_hr)
        else:
            max_bpm = round_half_up(resting_hr + reserve * upper)
        zones.append(
            HeartRateZone(
                index=index,
                name=name,
                min_bpm=min_bpm,
                max_bpm=max_bpm,
                percent_reserve=f"{round(lower * 100)}-{round(upper * 100)}%",
            )
        )
    return tuple(zones)
