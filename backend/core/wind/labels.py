"""
Display labels for relative wind angles.

Angles follow the wind model convention: 0 = headwind, 180 = tailwind,
positive = wind from the right of the target line. "Hurting" is the headwind side,
"Helping" the tailwind side.
"""

from core.calculations import normalize_to_unsigned_range
from core.constants import (
    WIND_LABEL_SECTOR_DEGREES, STRONG_HURTING_MAX_DEGREES, HURTING_MAX_DEGREES,
    SLIGHT_HURTING_MAX_DEGREES, CROSSWIND_MAX_DEGREES, SLIGHT_HELPING_MAX_DEGREES,
    HELPING_MAX_DEGREES
)
from core.models.wind import WindDirectionCategory

WIND_LABELS_16 = (
    "Headwind",
    "Hurting, slight R",
    "Hurting R",
    "Cross R, hurting",
    "Crosswind R",
    "Cross R, helping",
    "Helping R",
    "Tailwind, slight R",
    "Tailwind",
    "Tailwind, slight L",
    "Helping L",
    "Cross L, helping",
    "Crosswind L",
    "Cross L, hurting",
    "Hurting L",
    "Hurting, slight L",
)


def wind_label_16(relative_angle_degrees: float) -> str:
    """16-point label for a relative wind angle, one per 22.5° sector."""
    norm = normalize_to_unsigned_range(relative_angle_degrees)
    sector = int((norm + WIND_LABEL_SECTOR_DEGREES / 2) / WIND_LABEL_SECTOR_DEGREES) % len(WIND_LABELS_16)
    return WIND_LABELS_16[sector]


def wind_direction_category(relative_angle_degrees: float) -> WindDirectionCategory:
    """Seven-way bucket by absolute relative angle."""
    a = abs(relative_angle_degrees)
    if a <= STRONG_HURTING_MAX_DEGREES:
        return WindDirectionCategory.STRONG_HURTING
    if a <= HURTING_MAX_DEGREES:
        return WindDirectionCategory.HURTING
    if a <= SLIGHT_HURTING_MAX_DEGREES:
        return WindDirectionCategory.SLIGHT_HURTING
    if a <= CROSSWIND_MAX_DEGREES:
        return WindDirectionCategory.CROSSWIND
    if a <= SLIGHT_HELPING_MAX_DEGREES:
        return WindDirectionCategory.SLIGHT_HELPING
    if a <= HELPING_MAX_DEGREES:
        return WindDirectionCategory.HELPING
    return WindDirectionCategory.STRONG_HELPING
