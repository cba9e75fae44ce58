"""FTP validation and profile-based FTP estimation."""

from __future__ import annotations

from dataclasses import dataclass
import math
from numbers import Real
from typing import Any, Mapping

from .config import FtpZonesConfig, resolve_config
from .constants import (
    AGE_DECAY_PER_YEAR,
    AGE_DECAY_START,
    AGE_FACTOR_MAX,
    AGE_FACTOR_MIN,
    AGE_RAMP_BASE_AGE,
    AGE_RAMP_BASE_FACTOR,
    AGE_RAMP_END,
    AGE_RAMP_PER_YEAR,
    DEFAULT_FTP_BY_LEVEL,
    DEFAULT_FTP_FALLBACK,
    DEFAULT_LEVEL,
    FTP_MULTIPLIERS,
)
from .diagnostics import DiagnosticCode, Diagnostics, Severity, report

GENDERS = ("male", "female")
LEVELS = tuple(DEFAULT_FTP_BY_LEVEL)


@dataclass(frozen=True)
class RiderProfile:
    """Optional rider data used when no usable FTP is supplied."""

    weight: float | None = None
    gender: str | None = None
    level: str | None = None
    age: float | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "RiderProfile":
        """Build a profile from a JSON-like mapping, dropping unusable fields."""
        if not payload:
            return cls()
        weight = payload.get("weight")
        age = payload.get("age")
        return cls(
            weight=float(weight) if is_number(weight) else None,
            gender=_normalize_choice(payload.get("gender"), GENDERS),
            level=_normalize_choice(payload.get("level"), LEVELS),
            age=float(age) if is_number(age) else None,
        )


def is_number(value: Any) -> bool:
    """True for real, non-NaN numbers; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


def is_positive_finite(value: Any) -> bool:
    """True for finite numbers greater than zero."""
    return is_number(value) and math.isfinite(value) and value > 0


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (262.5 -> 263)."""
    return int(math.floor(value + 0.5))


def validate_ftp(
    ftp: Any,
    profile: RiderProfile | Mapping[str, Any] | None = None,
    *,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> float:
    """Return a usable FTP in watts; never raises.

    Missing, non-numeric, NaN or zero values are replaced by an estimate from
    `profile`. Supplied and estimated values alike are then bounded: values
    under the minimum are raised to it and values over the absolute ceiling are
    capped. Values between the usual maximum and the ceiling pass through with a
    warning.
    """
    cfg = resolve_config(config)
    bounds = cfg.bounds

    if not is_number(ftp) or ftp == 0:
        report(
            diagnostics,
            cfg,
            DiagnosticCode.FTP_MISSING,
            Severity.WARNING,
            "Invalid FTP, estimating from rider profile",
            ftp=None if ftp is None else repr(ftp),
        )
        ftp = estimate_from_profile(profile, diagnostics=diagnostics, config=cfg)

    if ftp < bounds.min_ftp:
        report(
            diagnostics,
            cfg,
            DiagnosticCode.FTP_BELOW_MINIMUM,
            Severity.WARNING,
            f"FTP too low ({ftp}W), raised to minimum {bounds.min_ftp:g}W",
            ftp=ftp,
            adjusted=bounds.min_ftp,
        )
        return float(bounds.min_ftp)

    if ftp > bounds.super_max_ftp:
        report(
            diagnostics,
            cfg,
            DiagnosticCode.FTP_ABOVE_CEILING,
            Severity.WARNING,
            f"FTP likely erroneous ({ftp}W), capped at {bounds.super_max_ftp:g}W",
            ftp=ftp,
            adjusted=bounds.super_max_ftp,
        )
        return float(bounds.super_max_ftp)

    if ftp > bounds.max_ftp:
        report(
            diagnostics,
            cfg,
            DiagnosticCode.FTP_UNUSUALLY_HIGH,
            Severity.WARNING,
            f"Unusually high FTP ({ftp}W); values above {bounds.max_ftp:g}W are typical "
            "only of elite or professional riders",
            ftp=ftp,
        )

    return float(ftp)


def estimate_from_profile(
    profile: RiderProfile | Mapping[str, Any] | None,
    *,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> float:
    """Estimate FTP from weight, level, gender and age.

    The estimate never exceeds the configured ceiling but may fall under the
    minimum for very light riders; `validate_ftp` raises it in that case.
    """
    cfg = resolve_config(config)
    rider = profile if isinstance(profile, RiderProfile) else RiderProfile.from_mapping(profile)

    if not is_positive_finite(rider.weight):
        default_ftp = DEFAULT_FTP_BY_LEVEL.get(rider.level or "", DEFAULT_FTP_FALLBACK)
        report(
            diagnostics,
            cfg,
            DiagnosticCode.PROFILE_INCOMPLETE,
            Severity.INFO,
            f"Incomplete profile, using default FTP {default_ftp:g}W",
            level=rider.level,
            ftp=default_ftp,
        )
        return default_ftp

    level = rider.level if rider.level in FTP_MULTIPLIERS else DEFAULT_LEVEL
    gender = "female" if rider.gender == "female" else "male"
    # Capped before rounding so huge weights cannot overflow to inf.
    raw = min(rider.weight * FTP_MULTIPLIERS[level][gender], cfg.bounds.super_max_ftp)
    estimated = round_half_up(raw)

    age_factor = _age_factor(rider.age)
    final_ftp = float(round_half_up(estimated * age_factor))
    report(
        diagnostics,
        cfg,
        DiagnosticCode.FTP_ESTIMATED,
        Severity.INFO,
        f"Estimated FTP {final_ftp:g}W ({power_to_weight(final_ftp, rider.weight)} W/kg)",
        ftp=final_ftp,
        level=level,
        gender=gender,
        age_factor=age_factor,
    )
    return final_ftp


def power_to_weight(ftp: float, weight: Any) -> float | None:
    """Watts per kilogram rounded to two decimals, or None without a usable weight."""
    if not is_positive_finite(weight):
        return None
    return round(ftp / weight, 2)


def _age_factor(age: float | None) -> float:
    if not is_number(age) or age <= 0:
        return 1.0
    factor = 1.0
    if age > AGE_DECAY_START:
        factor = 1.0 - (age - AGE_DECAY_START) * AGE_DECAY_PER_YEAR
    elif age < AGE_RAMP_END:
        factor = AGE_RAMP_BASE_FACTOR + (age - AGE_RAMP_BASE_AGE) * AGE_RAMP_PER_YEAR
    return max(AGE_FACTOR_MIN, min(AGE_FACTOR_MAX, factor))


def _normalize_choice(value: Any, choices: tuple[str, ...]) -> str | None:
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    return lowered if lowered in choices else None
