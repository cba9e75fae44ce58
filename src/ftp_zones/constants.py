"""Physiological bounds and fixed lookup tables shared by the engine."""

from __future__ import annotations

from types import MappingProxyType

MIN_FTP = 50.0
MAX_FTP = 500.0
SUPER_MAX_FTP = 700.0

DEFAULT_LEVEL = "intermediate"
DEFAULT_FTP_FALLBACK = 200.0

DEFAULT_FTP_BY_LEVEL = MappingProxyType(
    {
        "beginner": 150.0,
        "intermediate": 200.0,
        "advanced": 250.0,
        "elite": 300.0,
    }
)

# Watts per kilogram, keyed by level then gender.
FTP_MULTIPLIERS = MappingProxyType(
    {
        "beginner": MappingProxyType({"male": 2.0, "female": 1.8}),
        "intermediate": MappingProxyType({"male": 2.8, "female": 2.5}),
        "advanced": MappingProxyType({"male": 3.5, "female": 3.2}),
        "elite": MappingProxyType({"male": 4.5, "female": 4.0}),
    }
)

AGE_DECAY_START = 35
AGE_DECAY_PER_YEAR = 0.005
AGE_RAMP_END = 20
AGE_RAMP_BASE_AGE = 15
AGE_RAMP_BASE_FACTOR = 0.9
AGE_RAMP_PER_YEAR = 0.02
AGE_FACTOR_MIN = 0.8
AGE_FACTOR_MAX = 1.0

DEFAULT_WEIGHT_KG = 70.0
DEFAULT_EFFICIENCY_PCT = 23.0
MIN_EFFICIENCY_PCT = 1.0
MAX_EFFICIENCY_PCT = 100.0
KCAL_PER_GRAM_CARB = 4.0
KCAL_PER_GRAM_PROTEIN = 4.0
PROTEIN_FRACTION = 0.10
UNBOUNDED_ZONE_UPPER_FACTOR = 1.5
KJ_PER_WATT_HOUR = 3.6

DEFAULT_CARBS_PERCENTAGE = MappingProxyType(
    {1: 50.0, 2: 60.0, 3: 70.0, 4: 80.0, 5: 90.0, 6: 95.0, 7: 95.0}
)
FALLBACK_CARBS_PERCENTAGE = 70.0

HYDRATION_BASE_ML = 500.0
HYDRATION_PER_ZONE_ML = 100.0
HYDRATION_WEIGHT_FACTOR = 4.0 / 15.0
