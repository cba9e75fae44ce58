from __future__ import annotations

import json

import pytest

from ftp_zones.calculator import calculate_zones
from ftp_zones.config import BoundsSettings, DiagnosticsSettings, FtpZonesConfig
from ftp_zones.bounds import validate_ftp
from ftp_zones.diagnostics import Diagnostic, DiagnosticCode, Diagnostics, Severity
from ftp_zones.heart_rate import calculate_heart_rate_zones
from ftp_zones.nutrition import calculate_calorie_requirements
from ftp_zones.presentation import build_zone_summary_text, nutrition_table, zone_table
from ftp_zones.serialization import (
    diagnostics_to_list,
    heart_rate_zones_to_list,
    nutrition_to_list,
    to_json,
    zone_set_to_dict,
)


def test_zone_set_payload_uses_camel_case_and_nulls() -> None:
    payload = zone_set_to_dict(calculate_zones(250, "coggan"))

    assert payload["modelName"] == "Coggan (7 zones)"
    assert payload["ftp"] == 250
    zone4, zone6, zone7 = payload["zones"][3], payload["zones"][5], payload["zones"][6]
    assert zone4["percentFTP"] == {"min": 91, "max": 105}
    assert zone4["wattsRange"] == {"min": 228, "max": 263}
    assert zone6["heartRateRange"] == {"min": 121, "max": None}
    assert zone7["wattsRange"]["max"] is None
    assert zone7["heartRateRange"] is None
    assert set(zone4) == {
        "index",
        "name",
        "description",
        "percentFTP",
        "wattsRange",
        "heartRateRange",
        "trainingBenefit",
        "ratedPerceivedExertion",
    }


def test_nutrition_payload_round_trips_through_json() -> None:
    payload = nutrition_to_list(calculate_calorie_requirements(280, 75))
    decoded = json.loads(to_json(payload))

    assert decoded[3]["zoneIndex"] == 4
    assert decoded[3]["caloriesPerHour"] == 4297
    assert decoded[3]["hydrationPerHour"] == 920
    assert decoded[0]["recommendedFoods"][0] == {
        "name": "Water",
        "type": "hydration",
        "portion": "500-700ml/h",
    }


def test_diagnostics_payload() -> None:
    diagnostics = Diagnostics()
    validate_ftp(float("inf"), diagnostics=diagnostics)

    payload = diagnostics_to_list(diagnostics)
    assert payload[0]["code"] == "ftp_above_ceiling"
    assert payload[0]["severity"] == "warning"
    assert json.loads(to_json(payload))[0]["details"]["ftp"] is None


def test_zone_table_columns_and_labels() -> None:
    table = zone_table(calculate_zones(200, "seiler"))

    assert list(table.columns) == [
        "Zone",
        "Name",
        "%FTP",
        "Watts",
        "Min (W)",
        "Max (W)",
        "HR (%)",
        "RPE",
        "Benefit",
    ]
    assert table["Watts"].tolist() == ["0-170 W", "172-200 W", "202+ W"]
    assert table["%FTP"].iloc[2] == "101+%"
    assert table["Max (W)"].isna().tolist() == [False, False, True]


def test_nutrition_table_columns() -> None:
    table = nutrition_table(calculate_calorie_requirements(280, 75))

    assert list(table.columns) == [
        "Zone",
        "Name",
        "Energy (kcal/h)",
        "Carbs (g/h)",
        "Protein (g/h)",
        "Fluids (ml/h)",
        "Suggested",
    ]
    assert len(table) == 7
    assert table.loc[3, "Energy (kcal/h)"] == 4297


def test_zone_summary_text() -> None:
    text = build_zone_summary_text(calculate_zones(280, "british"), weight_kg=70)

    assert text.splitlines()[0] == "British Cycling (6 zones)"
    assert "- FTP: 280 W (4.00 W/kg)" in text
    assert "- Z6 Anaerobic Capacity: 353+ W" in text


def test_diagnostic_logging(log_messages) -> None:
    validate_ftp(10)
    assert any("WARNING [FTP_ZONES] ftp_below_minimum" in message for message in log_messages)


def test_diagnostic_logging_can_be_disabled(log_messages) -> None:
    quiet = FtpZonesConfig(bounds=BoundsSettings(), diagnostics=DiagnosticsSettings(log_events=False))
    diagnostics = Diagnostics()

    assert validate_ftp(10, diagnostics=diagnostics, config=quiet) == 50
    assert len(diagnostics) == 1
    assert log_messages == []


def test_heart_rate_payload() -> None:
    payload = heart_rate_zones_to_list(calculate_heart_rate_zones(190, 50))

    assert len(payload) == 5
    assert payload[0] == {"index": 1, "name": "Recovery", "min": 120, "max": 134, "percentHRR": "50-60%"}
    assert json.loads(to_json(payload))[-1]["max"] == 190


def test_diagnostic_details_are_read_only() -> None:
    diagnostics = Diagnostics()
    validate_ftp(10, diagnostics=diagnostics)
    diagnostic = diagnostics.items[0]

    with pytest.raises(TypeError):
        diagnostic.details["ftp"] = 99  # type: ignore[index]
    assert diagnostic.details["adjusted"] == 50
    assert hash(diagnostic) == hash(diagnostic)


def test_diagnostic_copies_caller_details() -> None:
    details = {"ftp": 10}
    diagnostic = Diagnostic(DiagnosticCode.FTP_BELOW_MINIMUM, Severity.WARNING, "low", details)
    details["ftp"] = 20

    assert diagnostic.details["ftp"] == 10
    assert diagnostic == Diagnostic(DiagnosticCode.FTP_BELOW_MINIMUM, Severity.WARNING, "low", {"ftp": 10})
