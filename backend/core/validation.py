"""
Input validation utilities for core functions.

Two flavours live here:

- ``validate_*`` checks that return a ValidationResult describe whether a
  recorded value is plausible (coordinates, distances, weather, timestamps).
  They never raise; callers decide what to do with an implausible record.
- ``validate_degrees`` guards call-site contracts and raises ValidationError,
  because an out-of-range degree value is a programming error.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.constants import (
    MIN_LATITUDE_DEGREES, MAX_LATITUDE_DEGREES, MIN_LONGITUDE_DEGREES,
    MAX_LONGITUDE_DEGREES, MIN_DISTANCE_YARDS, MAX_DISTANCE_YARDS,
    MIN_TEMPERATURE_CELSIUS, MAX_TEMPERATURE_CELSIUS, MAX_WIND_SPEED_MPH,
    MAX_WIND_DIRECTION_DEGREES, MIN_TIMESTAMP_MS, MIN_MILLISECOND_TIMESTAMP,
    MAX_FUTURE_SKEW_MS, FULL_CIRCLE_DEGREES
)
from core.models.position import Coordinate

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when a caller passes an argument outside its contract."""
    pass


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def _result(errors: List[str], context: str) -> ValidationResult:
    if errors:
        logger.debug(f"{context}: {len(errors)} validation error(s): {errors}")
    return ValidationResult(not errors, errors)


def _is_finite(value: float) -> bool:
    return value is not None and math.isfinite(value)


# Plausible carry ranges per club name, in yards
CLUB_DISTANCE_RANGES: Dict[str, Tuple[float, float]] = {
    'DRIVER': (100.0, 400.0),
    'THREE_WOOD': (80.0, 280.0),
    'FIVE_WOOD': (70.0, 250.0),
    'SEVEN_WOOD': (60.0, 230.0),
    'NINE_WOOD': (55.0, 220.0),
    'HYBRID_3': (60.0, 240.0),
    'HYBRID_4': (55.0, 230.0),
    'THREE_IRON': (60.0, 230.0),
    'FOUR_IRON': (55.0, 220.0),
    'FIVE_IRON': (50.0, 210.0),
    'SIX_IRON': (45.0, 200.0),
    'SEVEN_IRON': (40.0, 190.0),
    'EIGHT_IRON': (35.0, 180.0),
    'NINE_IRON': (30.0, 170.0),
    'PITCHING_WEDGE': (20.0, 160.0),
    'GAP_WEDGE': (15.0, 150.0),
    'SAND_WEDGE': (10.0, 130.0),
    'LOB_WEDGE': (5.0, 120.0),
    'PUTTER': (1.0, 100.0),
}


def validate_degrees(degrees: Any, context: str = "Degrees") -> float:
    """
    Check that a degree value lies in [0, 360].

    Args:
        degrees: Value to check
        context: Context description for error messages

    Returns:
        The value as a float

    Raises:
        ValidationError: If the value is missing, not numeric, NaN or out of range
    """
    if degrees is None:
        raise ValidationError(f"{context}: Value is None")

    try:
        value = float(degrees)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{context}: Cannot convert to float: {degrees}") from e

    if not 0 <= value <= FULL_CIRCLE_DEGREES:
        raise ValidationError(f"{context} must be 0-360, got {degrees}")

    return value


def validate_coordinate(coordinate: Coordinate) -> ValidationResult:
    """Check a coordinate is finite and within latitude/longitude bounds."""
    errors = []

    if not _is_finite(coordinate.latitude):
        errors.append("Latitude must be a finite number")
    elif not MIN_LATITUDE_DEGREES <= coordinate.latitude <= MAX_LATITUDE_DEGREES:
        errors.append(f"Latitude must be between -90 and 90, got {coordinate.latitude}")

    if not _is_finite(coordinate.longitude):
        errors.append("Longitude must be a finite number")
    elif not MIN_LONGITUDE_DEGREES <= coordinate.longitude <= MAX_LONGITUDE_DEGREES:
        errors.append(f"Longitude must be between -180 and 180, got {coordinate.longitude}")

    return _result(errors, "Coordinate")


def validate_distance(distance_yards: float) -> ValidationResult:
    """Check a shot distance is finite and within the global plausible range."""
    errors = []

    if not _is_finite(distance_yards):
        errors.append("Distance must be a finite number")
    elif not MIN_DISTANCE_YARDS <= distance_yards <= MAX_DISTANCE_YARDS:
        errors.append(
            f"Distance must be between {MIN_DISTANCE_YARDS} and {MAX_DISTANCE_YARDS} yards, "
            f"got {distance_yards}"
        )

    return _result(errors, "Distance")


def validate_distance_for_club(distance_yards: float, club) -> ValidationResult:
    """
    Soft per-club plausibility check.

    Args:
        distance_yards: Measured carry in yards
        club: Club enum member

    Returns:
        ValidationResult; non-finite distances pass here and are reported
        by validate_distance instead
    """
    if not _is_finite(distance_yards):
        return ValidationResult(True)

    low, high = CLUB_DISTANCE_RANGES[club.name]
    if low <= distance_yards <= high:
        return ValidationResult(True)

    return _result(
        [f"Distance {distance_yards} yards is outside plausible range for "
         f"{club.display_name}: {low}-{high} yards"],
        "Club distance"
    )


def validate_weather(
    temperature_celsius: Optional[float],
    wind_speed_mph: Optional[float],
    wind_direction_degrees: Optional[int],
    weather_code: Optional[int]
) -> ValidationResult:
    """
    Check stored weather fields.

    Weather is all-or-nothing: either every field is present or none is.
    """
    fields = [temperature_celsius, wind_speed_mph, wind_direction_degrees, weather_code]
    present_count = sum(1 for value in fields if value is not None)
    if present_count == 0:
        return ValidationResult(True)

    errors = []
    if present_count != len(fields):
        errors.append(
            f"Weather fields must be all present or all absent, got {present_count} of {len(fields)}"
        )

    if temperature_celsius is not None and \
            not MIN_TEMPERATURE_CELSIUS <= temperature_celsius <= MAX_TEMPERATURE_CELSIUS:
        errors.append(
            f"Temperature {temperature_celsius}°C is outside Earth extremes "
            f"({MIN_TEMPERATURE_CELSIUS} to {MAX_TEMPERATURE_CELSIUS})"
        )

    if wind_speed_mph is not None and not 0.0 <= wind_speed_mph <= MAX_WIND_SPEED_MPH:
        errors.append(f"Wind speed {wind_speed_mph} mph is outside valid range (0 to {MAX_WIND_SPEED_MPH})")

    if wind_direction_degrees is not None and \
            not 0 <= wind_direction_degrees <= MAX_WIND_DIRECTION_DEGREES:
        errors.append(
            f"Wind direction {wind_direction_degrees}° is outside valid range "
            f"(0 to {MAX_WIND_DIRECTION_DEGREES})"
        )

    return _result(errors, "Weather")


def validate_timestamp(timestamp_ms: int, now_ms: Optional[int] = None) -> ValidationResult:
    """
    Check a shot timestamp is a plausible epoch-milliseconds value.

    Args:
        timestamp_ms: Timestamp to check
        now_ms: Current time in milliseconds, defaults to the wall clock
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    errors = []
    if timestamp_ms <= 0:
        errors.append(f"Timestamp must be positive, got {timestamp_ms}")
    elif timestamp_ms < MIN_MILLISECOND_TIMESTAMP:
        errors.append(f"Timestamp {timestamp_ms} appears to be in seconds, not milliseconds")
    elif timestamp_ms < MIN_TIMESTAMP_MS:
        errors.append(f"Timestamp {timestamp_ms} is before minimum (Jan 1 2023)")
    elif timestamp_ms > now_ms + MAX_FUTURE_SKEW_MS:
        errors.append(f"Timestamp {timestamp_ms} is in the future")

    return _result(errors, "Timestamp")
