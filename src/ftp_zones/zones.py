"""Zone model tables and their expansion into absolute watt ranges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from .bounds import is_number, is_positive_finite, round_half_up


class ZoneModelKind(str, Enum):
    COGGAN = "coggan"
    SEILER = "seiler"
    BRITISH = "british"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PercentRange:
    """Percent-of-FTP band; `max_pct=None` means no upper limit."""

    min_pct: float
    max_pct: float | None


@dataclass(frozen=True)
class WattRange:
    """Absolute power band; `max_watts=None` means no upper limit."""

    min_watts: int
    max_watts: int | None

    @property
    def is_unbounded(self) -> bool:
        return self.max_watts is None


@dataclass(frozen=True)
class HeartRateRange:
    """Heart-rate band as a percentage; `max_pct=None` means no upper limit."""

    min_pct: float
    max_pct: float | None


@dataclass(frozen=True)
class ZoneDefinition:
    """One row of a zone model table, before watts are known."""

    index: int
    name: str
    percent_ftp: PercentRange
    description: str = ""
    heart_rate_range: HeartRateRange | None = None
    training_benefit: str = ""
    rated_perceived_exertion: str = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], position: int) -> "ZoneDefinition | None":
        """Parse a caller-supplied zone; None when its percent range is unusable.

        `percentFTP.min` must be a finite number >= 0 and a numeric `max` may
        not lie below it. A missing or non-numeric `max` means no upper limit.
        """
        if not isinstance(payload, Mapping):
            return None
        percent = payload.get("percentFTP", payload.get("percent_ftp"))
        if not isinstance(percent, Mapping) or not _is_finite(percent.get("min")):
            return None
        max_pct = percent.get("max")
        if percent["min"] < 0 or (_is_finite(max_pct) and max_pct < percent["min"]):
            return None

        index = payload.get("zone", payload.get("index"))
        return cls(
            index=int(index) if is_positive_finite(index) else position,
            name=str(payload.get("name") or f"Zone {position}"),
            percent_ftp=PercentRange(
                float(percent["min"]), float(max_pct) if _is_finite(max_pct) else None
            ),
            description=str(payload.get("description") or ""),
            heart_rate_range=_heart_rate_from_mapping(
                payload.get("heartRateRange", payload.get("hrRange"))
            ),
            training_benefit=str(payload.get("trainingBenefit") or ""),
            rated_perceived_exertion=str(
                payload.get("ratedPerceivedExertion", payload.get("rpe")) or ""
            ),
        )


@dataclass(frozen=True)
class Zone:
    """A zone definition expanded for one FTP value."""

    index: int
    name: str
    description: str
    percent_ftp: PercentRange
    watts_range: WattRange
    heart_rate_range: HeartRateRange | None
    training_benefit: str
    rated_perceived_exertion: str


@dataclass(frozen=True)
class ZoneSet:
    """Immutable result of one zone calculation."""

    model_name: str
    kind: ZoneModelKind
    ftp: float
    zones: tuple[Zone, ...]

    def zone(self, index: int) -> Zone:
        for zone in self.zones:
            if zone.index == index:
                return zone
        raise KeyError(f"No zone {index} in {self.model_name}")


@dataclass(frozen=True)
class ZoneModel:
    """Named, fixed table of zone definitions."""

    kind: ZoneModelKind
    name: str
    definitions: tuple[ZoneDefinition, ...]

    def build(self, ftp: float) -> ZoneSet:
        return ZoneSet(
            model_name=self.name,
            kind=self.kind,
            ftp=ftp,
            zones=expand_zones(self.definitions, ftp),
        )


def expand_zones(definitions: Sequence[ZoneDefinition], ftp: float) -> tuple[Zone, ...]:
    """Convert percent-of-FTP definitions into watt ranges, ordered by index."""
    zones: list[Zone] = []
    for definition in sorted(definitions, key=lambda item: item.index):
        pct = definition.percent_ftp
        max_watts = None if pct.max_pct is None else percent_to_watts(ftp, pct.max_pct)
        zones.append(
            Zone(
                index=definition.index,
                name=definition.name,
                description=definition.description,
                percent_ftp=pct,
                watts_range=WattRange(percent_to_watts(ftp, pct.min_pct), max_watts),
                heart_rate_range=definition.heart_rate_range,
                training_benefit=definition.training_benefit,
                rated_perceived_exertion=definition.rated_perceived_exertion,
            )
        )
    return tuple(zones)


def percent_to_watts(ftp: float, percent: float) -> int:
    return round_half_up(ftp * (percent / 100))


def find_zone(zone_set: ZoneSet, watts: float) -> Zone | None:
    """Zone whose watt range holds `watts`; rounding gaps resolve downward."""
    if not is_number(watts) or watts < 0:
        return None
    match: Zone | None = None
    for zone in zone_set.zones:
        if watts < zone.watts_range.min_watts and match is not None:
            break
        match = zone
        upper = zone.watts_range.max_watts
        if upper is not None and watts <= upper:
            break
    if match is not None and watts < match.watts_range.min_watts:
        return None
    return match


def _is_finite(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def _heart_rate_from_mapping(payload: Any) -> HeartRateRange | None:
    if not isinstance(payload, Mapping) or not is_number(payload.get("min")):
        return None
    max_pct = payload.get("max")
    return HeartRateRange(float(payload["min"]), float(max_pct) if is_number(max_pct) else None)


def _zone(
    index: int,
    name: str,
    description: str,
    pct: tuple[float, float | None],
    hr: tuple[float, float | None] | None,
    benefit: str,
    rpe: str,
) -> ZoneDefinition:
    return ZoneDefinition(
        index=index,
        name=name,
        description=description,
        percent_ftp=PercentRange(*pct),
        heart_rate_range=None if hr is None else HeartRateRange(*hr),
        training_benefit=benefit,
        rated_perceived_exertion=rpe,
    )


COGGAN_MODEL = ZoneModel(
    kind=ZoneModelKind.COGGAN,
    name="Coggan (7 zones)",
    definitions=(
        _zone(1, "Active Recovery", "Very easy, recovery riding", (0, 55), (0, 68),
              "Recovery, increased blood flow", "1-2/10"),
        _zone(2, "Endurance", "Comfortable sustained effort", (56, 75), (69, 83),
              "Aerobic endurance, economy, capillarisation", "2-3/10"),
        _zone(3, "Tempo", "Sustained effort, conversation is hard", (76, 90), (84, 94),
              "Raises anaerobic threshold, muscular endurance", "3-4/10"),
        _zone(4, "Threshold", "Hard but sustainable for 40-60min", (91, 105), (95, 105),
              "Raises FTP, lactate tolerance", "4-6/10"),
        _zone(5, "VO2max", "Very hard, sustainable for 3-8min", (106, 120), (106, 120),
              "Maximal aerobic power, cardiac output", "7-8/10"),
        _zone(6, "Anaerobic Capacity", "Short efforts of 30s-2min", (121, 150), (121, None),
              "Anaerobic capacity, high lactate tolerance", "8-9/10"),
        _zone(7, "Neuromuscular Power", "Maximal sprints under 30s", (151, None), None,
              "Muscle recruitment, neuromuscular coordination", "10/10"),
    ),
)

SEILER_MODEL = ZoneModel(
    kind=ZoneModelKind.SEILER,
    name="Seiler (3 zones)",
    definitions=(
        _zone(1, "Low Intensity", "Easy to moderate effort", (0, 85), (0, 87),
              "Base endurance, recovery", "1-3/10"),
        _zone(2, "Threshold", "Between the two ventilatory thresholds", (86, 100), (88, 100),
              "Raises lactate threshold", "4-6/10"),
        _zone(3, "High Intensity", "Above the respiratory compensation point", (101, None),
              (101, None), "Maximal aerobic and anaerobic power", "7-10/10"),
    ),
)

BRITISH_CYCLING_MODEL = ZoneModel(
    kind=ZoneModelKind.BRITISH,
    name="British Cycling (6 zones)",
    definitions=(
        _zone(1, "Active Recovery", "Very easy, normal conversation", (0, 60), (0, 72),
              "Recovery, skill work", "1-2/10"),
        _zone(2, "Endurance", "Controlled sustained effort", (61, 80), (73, 86),
              "Aerobic endurance, metabolic adaptation", "3-4/10"),
        _zone(3, "Tempo", "Sustained effort, limited conversation", (81, 93), (87, 94),
              "Muscular endurance, approaching threshold", "5-6/10"),
        _zone(4, "Lactate Threshold", "Just below threshold, uncomfortable but sustainable",
              (94, 105), (95, 102), "Raises lactate threshold", "7/10"),
        _zone(5, "Aerobic Capacity", "Sustained 3-10min intervals", (106, 125), (103, None),
              "VO2max development, aerobic capacity", "8-9/10"),
        _zone(6, "Anaerobic Capacity", "Short maximal efforts", (126, None), None,
              "Maximal power, muscle recruitment", "10/10"),
    ),
)

BUILT_IN_MODELS: Mapping[ZoneModelKind, ZoneModel] = MappingProxyType(
    {model.kind: model for model in (COGGAN_MODEL, SEILER_MODEL, BRITISH_CYCLING_MODEL)}
)
