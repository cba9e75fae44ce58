"""Static per-zone hydration and food guidance."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal

FoodType = Literal["hydration", "food"]

FALLBACK_ZONE = 3


@dataclass(frozen=True)
class FoodItem:
    name: str
    type: FoodType
    portion: str


def _hydration(name: str, portion: str) -> FoodItem:
    return FoodItem(name, "hydration", portion)


def _food(name: str, portion: str) -> FoodItem:
    return FoodItem(name, "food", portion)


RECOMMENDED_FOODS = MappingProxyType(
    {
        1: (
            _hydration("Water", "500-700ml/h"),
            _food("Fresh fruit", "Small portion if needed"),
        ),
        2: (
            _hydration("Water + electrolytes", "500-750ml/h"),
            _food("Energy bars", "1 every 90min"),
            _food("Dried fruit", "Small handful/h"),
        ),
        3: (
            _hydration("Isotonic drink", "600-800ml/h"),
            _food("Energy bars", "1-2/h"),
            _food("Bananas", "1/h"),
        ),
        4: (
            _hydration("Isotonic drink", "700-900ml/h"),
            _food("Energy gels", "1-2/h"),
            _food("Energy bars", "1/h"),
        ),
        5: (
            _hydration("Isotonic drink + caffeine", "800-1000ml/h"),
            _food("Energy gels", "2-3/h"),
        ),
        6: (
            _hydration("Isotonic drink + caffeine", "Small regular sips"),
            _food("Concentrated energy gels", "Depending on interval length"),
        ),
        7: (
            _hydration("Fluids between efforts", "As needed"),
            _food("Fuel between efforts", "Depending on recovery length"),
        ),
    }
)


def get_recommended_foods(zone_index: Any) -> tuple[FoodItem, ...]:
    """Foods for a zone; unknown indices get the zone 3 guidance."""
    # True and 1.0 hash like 1, so only real ints may index the table.
    if not isinstance(zone_index, int) or isinstance(zone_index, bool):
        return RECOMMENDED_FOODS[FALLBACK_ZONE]
    return RECOMMENDED_FOODS.get(zone_index, RECOMMENDED_FOODS[FALLBACK_ZONE])
