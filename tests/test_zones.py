from __future__ import annotations

import pytest

from ftp_zones.calculator import CustomZoneParams, calculate_zones, get_zone_model, parse_model_kind
from ftp_zones.diagnostics import DiagnosticCode, Diagnostics
from ftp_zones.zones import (
    BUILT_IN_MODELS,
    COGGAN_MODEL,
    PercentRange,
    ZoneDefinition,
    ZoneModelKind,
    find_zone,
)


@pytest.mark.parametrize(
    "model, count",
    [("coggan", 7), ("seiler", 3), ("british", 6), (ZoneModelKind.BRITISH, 6)],
)
def test_model_zone_counts(model: str, count: int) -> None:
    assert len(calculate_zones(250, model).zones) == count


def test_default_model_is_coggan() -> None:
    zone_set = calculate_zones(250)
    assert zone_set.kind is ZoneModelKind.COGGAN
    assert zone_set.model_name == "Coggan (7 zones)"


def test_coggan_percent_ranges_are_contiguous() -> None:
    zones = calculate_zones(250, "coggan").zones
    for current, following in zip(zones, zones[1:]):
        assert current.percent_ftp.max_pct == following.percent_ftp.min_pct - 1
    assert zones[-1].percent_ftp.max_pct is None
    assert zones[-1].watts_range.max_watts is None


@pytest.mark.parametrize("kind", list(BUILT_IN_MODELS))
def test_built_in_models_have_one_open_zone_and_ascending_indices(kind: ZoneModelKind) -> None:
    zones = calculate_zones(300, kind).zones
    assert [zone.index for zone in zones] == list(range(1, len(zones) + 1))
    assert sum(zone.watts_range.is_unbounded for zone in zones) == 1


def test_watt_derivation_uses_half_up_rounding() -> None:
    zone4 = calculate_zones(250, "coggan").zone(4)
    assert zone4.percent_ftp == PercentRange(91, 105)
    assert (zone4.watts_range.min_watts, zone4.watts_range.max_watts) == (228, 263)


def test_zone_sets_carry_validated_ftp() -> None:
    assert calculate_zones(20, "seiler").ftp == 50
    assert calculate_zones(None, "coggan", profile={"weight": 70, "level": "intermediate"}).ftp == 196


def test_seiler_and_british_boundaries() -> None:
    seiler = calculate_zones(200, "seiler").zones
    assert [(z.watts_range.min_watts, z.watts_range.max_watts) for z in seiler] == [
        (0, 170),
        (172, 200),
        (202, None),
    ]
    british = calculate_zones(200, "british").zones
    assert british[-1].watts_range.min_watts == 252
    assert british[-1].heart_rate_range is None


@pytest.mark.parametrize(
    "params",
    [
        {},
        None,
        {"zones": []},
        {"zones": [{"name": "no percent"}]},
        {"zones": [{"name": "negative", "percentFTP": {"min": -10, "max": 50}}]},
        {"zones": [{"name": "inverted", "percentFTP": {"min": 90, "max": 60}}]},
    ],
)
def test_custom_model_falls_back_to_coggan(params: object) -> None:
    diagnostics = Diagnostics()
    result = calculate_zones(200, "custom", params, diagnostics=diagnostics)

    assert result == calculate_zones(200, "coggan")
    assert diagnostics.has(DiagnosticCode.CUSTOM_MODEL_FALLBACK)


def test_custom_model_from_mapping() -> None:
    params = {
        "modelName": "Polarized",
        "zones": [
            {"zone": 2, "name": "Hard", "percentFTP": {"min": 81, "max": "Max"}},
            {"zone": 1, "name": "Easy", "percentFTP": {"min": 0, "max": 80}, "rpe": "1-3/10"},
        ],
    }
    zone_set = calculate_zones(300, "custom", params)

    assert zone_set.model_name == "Polarized"
    assert zone_set.kind is ZoneModelKind.CUSTOM
    assert [zone.name for zone in zone_set.zones] == ["Easy", "Hard"]
    assert zone_set.zone(1).watts_range.max_watts == 240
    assert zone_set.zone(1).rated_perceived_exertion == "1-3/10"
    assert zone_set.zone(2).watts_range.min_watts == 243
    assert zone_set.zone(2).watts_range.max_watts is None


def test_custom_model_from_dataclass_defaults_name() -> None:
    params = CustomZoneParams(
        zones=(ZoneDefinition(index=1, name="All", percent_ftp=PercentRange(0, None)),)
    )
    zone_set = calculate_zones(250, ZoneModelKind.CUSTOM, params)
    assert zone_set.model_name == "Custom"
    assert zone_set.zones[0].watts_range.max_watts is None


def test_unknown_model_defaults_to_coggan() -> None:
    diagnostics = Diagnostics()
    assert calculate_zones(250, "zwift", diagnostics=diagnostics).kind is ZoneModelKind.COGGAN
    assert diagnostics.codes() == [DiagnosticCode.UNKNOWN_ZONE_MODEL]
    assert parse_model_kind(" Seiler ") is ZoneModelKind.SEILER
    assert parse_model_kind(42) is ZoneModelKind.COGGAN


def test_get_zone_model() -> None:
    assert get_zone_model("british").name == "British Cycling (6 zones)"
    assert get_zone_model("custom") is COGGAN_MODEL
    assert get_zone_model(" Seiler ") is BUILT_IN_MODELS[ZoneModelKind.SEILER]


def test_get_zone_model_reports_unknown_tags() -> None:
    diagnostics = Diagnostics()
    assert get_zone_model("zwift", diagnostics=diagnostics) is COGGAN_MODEL
    assert diagnostics.codes() == [DiagnosticCode.UNKNOWN_ZONE_MODEL]


def test_find_zone() -> None:
    zone_set = calculate_zones(250, "coggan")

    assert find_zone(zone_set, 250).index == 4
    assert find_zone(zone_set, 263).index == 4
    assert find_zone(zone_set, 139).index == 1  # rounding gap between 138 and 140
    assert find_zone(zone_set, 2000).index == 7
    assert find_zone(zone_set, 0).index == 1
    assert find_zone(zone_set, -5) is None
