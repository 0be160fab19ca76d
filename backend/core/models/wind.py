"""
Wind effect data models.

Inputs and outputs of the wind/weather effect model. Results are display-only
values; they never alter a recorded distance.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from core.constants import (
    TRAJECTORY_LOW_MULTIPLIER, TRAJECTORY_MID_MULTIPLIER, TRAJECTORY_HIGH_MULTIPLIER
)


class Trajectory(Enum):
    """Ball-flight shape. Higher flights spend longer aloft and feel more wind."""
    LOW = ("Low", TRAJECTORY_LOW_MULTIPLIER)
    MID = ("Mid", TRAJECTORY_MID_MULTIPLIER)
    HIGH = ("High", TRAJECTORY_HIGH_MULTIPLIER)

    def __init__(self, label: str, multiplier: float):
        self.label = label
        self.multiplier = multiplier


class WindColorCategory(str, Enum):
    """Display hint derived from the signed carry effect."""
    FAVORABLE = "Favorable"
    NEUTRAL = "Neutral"
    UNFAVORABLE = "Unfavorable"


class WindDirectionCategory(str, Enum):
    """Seven-way bucket of the relative wind angle (0 = headwind)."""
    STRONG_HURTING = "strong_hurting"
    HURTING = "hurting"
    SLIGHT_HURTING = "slight_hurting"
    CROSSWIND = "crosswind"
    SLIGHT_HELPING = "slight_helping"
    HELPING = "helping"
    STRONG_HELPING = "strong_helping"


@dataclass(frozen=True)
class WindInputs:
    """Already-resolved wind and weather values for one shot."""
    wind_speed_kmh: float
    wind_from_degrees: int  # Meteorological: where the wind comes FROM
    shot_bearing_degrees: float  # Direction the ball was hit TOWARD
    distance_yards: int
    trajectory_multiplier: float = TRAJECTORY_MID_MULTIPLIER
    temperature_f: Optional[int] = None


@dataclass(frozen=True)
class WindEffectResult:
    """Full weather analysis of a shot, for display."""
    relative_angle_degrees: float
    carry_effect_yards: int
    lateral_displacement_yards: float
    total_weather_effect_yards: int
    color_category: WindColorCategory
    temperature_effect_yards: int = 0
    headwind_component_mph: float = 0.0  # Positive = headwind
    crosswind_component_mph: float = 0.0  # Positive = wind from the right
    label: str = ""
    direction_category: Optional[WindDirectionCategory] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'relative_angle_degrees': self.relative_angle_degrees,
            'carry_effect_yards': self.carry_effect_yards,
            'lateral_displacement_yards': self.lateral_displacement_yards,
            'total_weather_effect_yards': self.total_weather_effect_yards,
            'color_category': self.color_category.value,
            'temperature_effect_yards': self.temperature_effect_yards,
            'headwind_component_mph': self.headwind_component_mph,
            'crosswind_component_mph': self.crosswind_component_mph,
            'label': self.label,
            'direction_category': self.direction_category.value if self.direction_category else None,
        }
