"""
Shared calculations module.

Great-circle geometry, angle normalisation and unit conversions. This is the
single source of truth for these operations: calibration, the wind model and
the measurement service all call into it.
"""

import logging
from typing import Union

import numpy as np

from core.constants import (
    EARTH_RADIUS_METERS, FULL_CIRCLE_DEGREES, ANGLE_WRAP_BOUNDARY_DEGREES,
    METERS_PER_YARD, YARDS_PER_METER, KMH_TO_MPH, FAHRENHEIT_PER_CELSIUS,
    FAHRENHEIT_OFFSET, COMPASS_THRESHOLDS, COMPASS_WRAP_LABEL
)
from core.models.position import Coordinate
from core.validation import validate_degrees

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray]


# =============================================================================
# BASIC GEOMETRIC CALCULATIONS
# =============================================================================

def distance_meters_array(lat1: ArrayLike, lon1: ArrayLike,
                          lat2: ArrayLike, lon2: ArrayLike) -> np.ndarray:
    """
    Vectorised Haversine distance in meters.

    Accepts scalars or numpy arrays (broadcast together). NaN and infinite
    inputs yield NaN rather than raising.
    """
    with np.errstate(invalid='ignore'):
        lat1 = np.radians(lat1)
        lat2 = np.radians(lat2)
        d_lat = lat2 - lat1
        d_lon = np.radians(lon2) - np.radians(lon1)

        a = np.sin(d_lat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(d_lon / 2) ** 2
        # Rounding can push a a hair past 1 for antipodal points
        a = np.clip(a, 0.0, 1.0)
        c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def distance_meters(start: Coordinate, end: Coordinate) -> float:
    """Great-circle distance between two coordinates in meters (Haversine)."""
    return float(distance_meters_array(
        start.latitude, start.longitude, end.latitude, end.longitude
    ))


def bearing_degrees(start: Coordinate, end: Coordinate) -> float:
    """
    Initial compass bearing (forward azimuth) from ``start`` toward ``end``.

    Returns:
        Bearing in [0, 360). North = 0, East = 90, South = 180, West = 270.
        Identical points give 0.
    """
    with np.errstate(invalid='ignore'):
        lat1 = np.radians(start.latitude)
        lat2 = np.radians(end.latitude)
        d_lon = np.radians(end.longitude - start.longitude)

        x = np.sin(d_lon) * np.cos(lat2)
        y = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(d_lon)
        initial_bearing = float(np.degrees(np.arctan2(x, y)))

    return normalize_to_unsigned_range(initial_bearing)


# =============================================================================
# ANGLE NORMALISATION
# =============================================================================

def normalize_to_unsigned_range(degrees: float) -> float:
    """Wrap an angle into [0, 360). 360 maps to 0; NaN passes through."""
    wrapped = degrees % FULL_CIRCLE_DEGREES
    # Float modulo of a tiny negative value can round up to exactly 360
    if wrapped >= FULL_CIRCLE_DEGREES:
        wrapped = 0.0
    return wrapped


def normalize_to_signed_range(degrees: float) -> float:
    """Wrap an angle into (-180, 180]. -180 maps to 180; NaN passes through."""
    wrapped = normalize_to_unsigned_range(degrees)
    if wrapped > ANGLE_WRAP_BOUNDARY_DEGREES:
        wrapped -= FULL_CIRCLE_DEGREES
    return wrapped


def degrees_to_compass(degrees: int) -> str:
    """
    Convert a wind direction in degrees to an 8-point compass label.

    Uses the fixed threshold table from core.constants rather than even 45
    degree sectors, so labels match previously stored shots.

    Raises:
        ValidationError: If degrees is outside [0, 360]
    """
    validate_degrees(degrees, "Compass degrees")
    normalized = int(degrees) % FULL_CIRCLE_DEGREES
    for upper_bound, label in COMPASS_THRESHOLDS:
        if normalized < upper_bound:
            return label
    return COMPASS_WRAP_LABEL


# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

def meters_to_yards(distance_m: float) -> float:
    """Convert meters to yards."""
    return distance_m * YARDS_PER_METER


def yards_to_meters(distance_yd: float) -> float:
    """Convert yards to meters."""
    return distance_yd * METERS_PER_YARD


def kmh_to_mph(speed_kmh: float) -> float:
    """Convert kilometers per hour to miles per hour."""
    return speed_kmh * KMH_TO_MPH


def celsius_to_fahrenheit(temperature_c: float) -> float:
    """Convert Celsius to Fahrenheit."""
    return temperature_c * FAHRENHEIT_PER_CELSIUS + FAHRENHEIT_OFFSET
