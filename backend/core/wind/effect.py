"""
Wind and temperature effect model.

Estimates how much of a measured carry is attributable to wind and air
temperature. Results are for display only and never change the recorded
distance.

Conventions:
- Wind direction is meteorological: where the wind comes FROM.
- The relative angle is wind_from - shot_bearing, wrapped into (-180, 180].
  0 = pure headwind, 180 = pure tailwind, +/-90 = crosswind.
- Carry effect is negative for headwinds and positive for tailwinds.
- Lateral displacement is sin(relative angle) x magnitude x sensitivity;
  positive means right of the shot line.

The sensitivity constants are calibration parameters, tuned against launch
monitor reference shots rather than derived from first principles. They are
grouped in WindModelParams so they can be adjusted per call.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Optional, Tuple

from core.calculations import normalize_to_signed_range, kmh_to_mph
from core.constants import (
    WIND_SPEED_EXPONENT, WIND_CARRY_COEFFICIENT, WIND_REFERENCE_CARRY_YARDS,
    HEADWIND_WEIGHT, TAILWIND_WEIGHT, LATERAL_SENSITIVITY, TEMPERATURE_BASELINE_F,
    TEMPERATURE_EFFECT_DIVISOR, COLOR_CATEGORY_THRESHOLD_YARDS, TRAJECTORY_MID_MULTIPLIER
)
from core.models.wind import WindColorCategory, WindEffectResult, WindInputs
from core.validation import ValidationError, validate_degrees
from core.wind.labels import wind_direction_category, wind_label_16

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindModelParams:
    """Tunable sensitivity constants for the wind/temperature model."""
    speed_exponent: float = WIND_SPEED_EXPONENT
    carry_coefficient: float = WIND_CARRY_COEFFICIENT
    reference_carry_yards: float = WIND_REFERENCE_CARRY_YARDS
    headwind_weight: float = HEADWIND_WEIGHT
    tailwind_weight: float = TAILWIND_WEIGHT
    lateral_sensitivity: float = LATERAL_SENSITIVITY
    temperature_baseline_f: int = TEMPERATURE_BASELINE_F
    temperature_effect_divisor: float = TEMPERATURE_EFFECT_DIVISOR
    color_threshold_yards: int = COLOR_CATEGORY_THRESHOLD_YARDS

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for API responses."""
        return asdict(self)


DEFAULT_PARAMS = WindModelParams()


def relative_wind_angle(wind_from_degrees: float, shot_bearing_degrees: float) -> float:
    """
    Angle of the wind source relative to the shot line.

    Args:
        wind_from_degrees: Meteorological wind direction (0-360)
        shot_bearing_degrees: Direction the ball was hit toward (0-360)

    Returns:
        Angle in (-180, 180]. 0 = headwind, 180 = tailwind.

    Raises:
        ValidationError: If either angle is outside [0, 360]
    """
    validate_degrees(wind_from_degrees, "Wind direction")
    validate_degrees(shot_bearing_degrees, "Shot bearing")
    return normalize_to_signed_range(wind_from_degrees - shot_bearing_degrees)


def decompose_wind(wind_speed_mph: float, relative_angle_degrees: float) -> Tuple[float, float]:
    """
    Split wind into along-line and cross-line components.

    Returns:
        (headwind, crosswind) in mph. Headwind is positive against the shot,
        negative for a tailwind; crosswind is positive when the wind comes from the right.
    """
    rad = math.radians(relative_angle_degrees)
    return wind_speed_mph * math.cos(rad), wind_speed_mph * math.sin(rad)


def wind_magnitude_factor(
    wind_speed_kmh: float,
    distance_yards: int,
    trajectory_multiplier: float = TRAJECTORY_MID_MULTIPLIER,
    params: WindModelParams = DEFAULT_PARAMS
) -> float:
    """
    Yards of carry a full-on wind would move this shot by.

    Scales non-linearly with wind speed, linearly with carry, and up with
    trajectory (higher flights spend longer aloft).
    """
    if wind_speed_kmh <= 0 or distance_yards <= 0:
        return 0.0

    wind_mph = kmh_to_mph(wind_speed_kmh)
    return (
        wind_mph ** params.speed_exponent
        * params.carry_coefficient
        * trajectory_multiplier
        * (distance_yards / params.reference_carry_yards)
    )


def estimate_carry_effect_yards(
    relative_angle_degrees: float,
    magnitude: float,
    params: WindModelParams = DEFAULT_PARAMS
) -> int:
    """
    Carry gained (+) or lost (-) to wind, rounded to whole yards.

    Headwinds are weighted more heavily than tailwinds: added drag at higher
    airspeed costs more than reduced drag gives back.
    """
    along = math.cos(math.radians(relative_angle_degrees))
    weight = params.headwind_weight if along > 0 else params.tailwind_weight
    return int(round(-along * magnitude * weight))


def estimate_lateral_displacement_yards(
    relative_angle_degrees: float,
    magnitude: float,
    params: WindModelParams = DEFAULT_PARAMS
) -> float:
    """Sideways drift in yards; positive is right of the shot line."""
    return math.sin(math.radians(relative_angle_degrees)) * magnitude * params.lateral_sensitivity


def estimate_temperature_effect_yards(
    distance_yards: int,
    temperature_f: Optional[int],
    params: WindModelParams = DEFAULT_PARAMS
) -> int:
    """
    Carry gained (+) or lost (-) to air temperature versus the 70°F baseline.

    Cold air is denser and shortens carry; hot air lengthens it. Truncated
    toward zero. Missing temperature means no effect.
    """
    if temperature_f is None or distance_yards <= 0:
        return 0
    delta = temperature_f - params.temperature_baseline_f
    return int(distance_yards * delta / params.temperature_effect_divisor)


def carry_color_category(carry_effect_yards: int, params: WindModelParams = DEFAULT_PARAMS) -> WindColorCategory:
    """Bucket a signed carry effect into a display hint."""
    if carry_effect_yards <= -params.color_threshold_yards:
        return WindColorCategory.UNFAVORABLE
    if carry_effect_yards >= params.color_threshold_yards:
        return WindColorCategory.FAVORABLE
    return WindColorCategory.NEUTRAL


def analyze(inputs: WindInputs, params: Optional[WindModelParams] = None) -> WindEffectResult:
    """
    Compute the complete weather analysis for a shot (wind + temperature).

    Args:
        inputs: Already-resolved wind, bearing, distance and temperature
        params: Sensitivity constants, or None to use defaults

    Returns:
        WindEffectResult

    Raises:
        ValidationError: If a degree input is outside [0, 360], or wind speed
            or distance is negative
    """
    if params is None:
        params = DEFAULT_PARAMS

    if not inputs.wind_speed_kmh >= 0:
        raise ValidationError(f"Wind speed must be non-negative, got {inputs.wind_speed_kmh}")
    if inputs.distance_yards < 0:
        raise ValidationError(f"Distance must be non-negative, got {inputs.distance_yards}")

    rel_angle = relative_wind_angle(inputs.wind_from_degrees, inputs.shot_bearing_degrees)
    headwind_mph, crosswind_mph = decompose_wind(kmh_to_mph(inputs.wind_speed_kmh), rel_angle)

    magnitude = wind_magnitude_factor(
        inputs.wind_speed_kmh, inputs.distance_yards, inputs.trajectory_multiplier, params
    )
    carry_effect = estimate_carry_effect_yards(rel_angle, magnitude, params)
    lateral_effect = estimate_lateral_displacement_yards(rel_angle, magnitude, params)
    temperature_effect = estimate_temperature_effect_yards(
        inputs.distance_yards, inputs.temperature_f, params
    )

    result = WindEffectResult(
        relative_angle_degrees=rel_angle,
        carry_effect_yards=carry_effect,
        lateral_displacement_yards=lateral_effect,
        total_weather_effect_yards=carry_effect + temperature_effect,
        color_category=carry_color_category(carry_effect, params),
        temperature_effect_yards=temperature_effect,
        headwind_component_mph=headwind_mph,
        crosswind_component_mph=crosswind_mph,
        label=wind_label_16(rel_angle),
        direction_category=wind_direction_category(rel_angle),
    )

    logger.debug(
        f"Wind effect: rel {rel_angle:.1f}°, carry {carry_effect:+d}yd, "
        f"temp {temperature_effect:+d}yd, lateral {lateral_effect:+.1f}yd"
    )
    return result
