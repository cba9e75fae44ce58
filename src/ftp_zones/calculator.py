"""Model selection and zone calculation for a rider's FTP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .bounds import RiderProfile, validate_ftp
from .config import FtpZonesConfig, resolve_config
from .diagnostics import DiagnosticCode, Diagnostics, Severity, report
from .zones import (
    BUILT_IN_MODELS,
    COGGAN_MODEL,
    ZoneDefinition,
    ZoneModel,
    ZoneModelKind,
    ZoneSet,
    expand_zones,
)

DEFAULT_CUSTOM_MODEL_NAME = "Custom"


@dataclass(frozen=True)
class CustomZoneParams:
    """Caller-supplied zone table for the custom model."""

    zones: tuple[ZoneDefinition, ...]
    model_name: str = DEFAULT_CUSTOM_MODEL_NAME

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "CustomZoneParams | None":
        """Parse `{modelName, zones: [...]}`; None if the zone list is unusable."""
        if not isinstance(payload, Mapping):
            return None
        raw_zones = payload.get("zones")
        if not isinstance(raw_zones, (list, tuple)) or not raw_zones:
            return None

        definitions: list[ZoneDefinition] = []
        for position, raw_zone in enumerate(raw_zones, start=1):
            definition = ZoneDefinition.from_mapping(raw_zone, position)
            if definition is None:
                return None
            definitions.append(definition)

        name = payload.get("modelName", payload.get("model_name"))
        return cls(
            zones=tuple(definitions),
            model_name=str(name) if name else DEFAULT_CUSTOM_MODEL_NAME,
        )


def parse_model_kind(
    model: ZoneModelKind | str | None,
    *,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> ZoneModelKind:
    """Resolve a model tag; anything unrecognised selects Coggan."""
    if isinstance(model, ZoneModelKind):
        return model
    if model is None:
        return ZoneModelKind.COGGAN
    if isinstance(model, str):
        try:
            return ZoneModelKind(model.strip().lower())
        except ValueError:
            pass
    report(
        diagnostics,
        resolve_config(config),
        DiagnosticCode.UNKNOWN_ZONE_MODEL,
        Severity.INFO,
        f"Unknown zone model {model!r}, using Coggan",
        model=repr(model),
    )
    return ZoneModelKind.COGGAN


def get_zone_model(
    kind: ZoneModelKind | str | None,
    *,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> ZoneModel:
    """Built-in zone model for `kind`; custom and unknown tags map to Coggan."""
    resolved = parse_model_kind(kind, diagnostics=diagnostics, config=config)
    return BUILT_IN_MODELS.get(resolved, COGGAN_MODEL)


def calculate_zones(
    ftp: Any,
    model: ZoneModelKind | str | None = ZoneModelKind.COGGAN,
    custom_params: CustomZoneParams | Mapping[str, Any] | None = None,
    *,
    profile: RiderProfile | Mapping[str, Any] | None = None,
    diagnostics: Diagnostics | None = None,
    config: FtpZonesConfig | None = None,
) -> ZoneSet:
    """Validate `ftp` and expand the selected zone model into watt ranges."""
    cfg = resolve_config(config)
    valid_ftp = validate_ftp(ftp, profile, diagnostics=diagnostics, config=cfg)
    kind = parse_model_kind(model, diagnostics=diagnostics, config=cfg)

    match kind:
        case ZoneModelKind.COGGAN | ZoneModelKind.SEILER | ZoneModelKind.BRITISH:
            return BUILT_IN_MODELS[kind].build(valid_ftp)
        case ZoneModelKind.CUSTOM:
            return _custom_zones(valid_ftp, custom_params, diagnostics, cfg)


def _custom_zones(
    ftp: float,
    params: CustomZoneParams | Mapping[str, Any] | None,
    diagnostics: Diagnostics | None,
    config: FtpZonesConfig,
) -> ZoneSet:
    custom = params if isinstance(params, CustomZoneParams) else CustomZoneParams.from_mapping(params)
    if custom is None or not custom.zones:
        report(
            diagnostics,
            config,
            DiagnosticCode.CUSTOM_MODEL_FALLBACK,
            Severity.WARNING,
            "Invalid custom zone parameters, using the Coggan model",
        )
        return COGGAN_MODEL.build(ftp)

    return ZoneSet(
        model_name=custom.model_name,
        kind=ZoneModelKind.CUSTOM,
        ftp=ftp,
        zones=expand_zones(custom.zones, ftp),
    )
