"""FTP validation, training-zone models and per-zone fueling targets."""

from .bounds import (
    RiderProfile,
    estimate_from_profile,
    power_to_weight,
    round_half_up,
    validate_ftp,
)
from .calculator import (
    CustomZoneParams,
    calculate_zones,
    get_zone_model,
    parse_model_kind,
)
from .config import (
    BoundsSettings,
    DiagnosticsSettings,
    FtpZonesConfig,
    NutritionSettings,
    clear_config_cache,
    default_engine_config,
    find_project_root,
)
from .constants import MAX_FTP, MIN_FTP, SUPER_MAX_FTP
from .diagnostics import Diagnostic, DiagnosticCode, Diagnostics, Severity
from .foods import FoodItem, get_recommended_foods
from .heart_rate import HeartRateZone, calculate_heart_rate_zones
from .nutrition import (
    NutritionOptions,
    NutritionRequirement,
    calculate_calorie_requirements,
    zone_average_watts,
)
from .presentation import build_zone_summary_text, nutrition_table, zone_table
from .serialization import (
    diagnostics_to_list,
    heart_rate_zones_to_list,
    nutrition_to_list,
    to_json,
    zone_set_to_dict,
)
from .zones import (
    BRITISH_CYCLING_MODEL,
    COGGAN_MODEL,
    SEILER_MODEL,
    HeartRateRange,
    PercentRange,
    WattRange,
    Zone,
    ZoneDefinition,
    ZoneModel,
    ZoneModelKind,
    ZoneSet,
    expand_zones,
    find_zone,
)

__all__ = [
    "BRITISH_CYCLING_MODEL",
    "BoundsSettings",
    "COGGAN_MODEL",
    "CustomZoneParams",
    "Diagnostic",
    "DiagnosticCode",
    "Diagnostics",
    "DiagnosticsSettings",
    "FoodItem",
    "FtpZonesConfig",
    "HeartRateRange",
    "HeartRateZone",
    "MAX_FTP",
    "MIN_FTP",
    "NutritionOptions",
    "NutritionRequirement",
    "NutritionSettings",
    "PercentRange",
    "RiderProfile",
    "SEILER_MODEL",
    "SUPER_MAX_FTP",
    "Severity",
    "WattRange",
    "Zone",
    "ZoneDefinition",
    "ZoneModel",
    "ZoneModelKind",
    "ZoneSet",
    "build_zone_summary_text",
    "calculate_calorie_requirements",
    "calculate_heart_rate_zones",
    "calculate_zones",
    "clear_config_cache",
    "default_engine_config",
    "diagnostics_to_list",
    "estimate_from_profile",
    "expand_zones",
    "find_project_root",
    "find_zone",
    "get_recommended_foods",
    "get_zone_model",
    "heart_rate_zones_to_list",
    "nutrition_table",
    "nutrition_to_list",
    "parse_model_kind",
    "power_to_weight",
    "round_half_up",
    "to_json",
    "validate_ftp",
    "zone_average_watts",
    "zone_set_to_dict",
    "zone_table",
]
