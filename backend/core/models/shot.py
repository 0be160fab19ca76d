"""
Shot data models.

This module defines the clubs a shot can be hit with, the raw measurement of a
shot and the plain record handed to persistence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd

from core.models.position import Coordinate, CalibratedPosition

SHOT_SCHEMA_VERSION = 1

# Compass label stored when the wind direction is missing or out of range
UNKNOWN_COMPASS_LABEL = "Unknown"


class ClubCategory(str, Enum):
    WOOD = "wood"
    HYBRID = "hybrid"
    IRON = "iron"
    WEDGE = "wedge"
    PUTTER = "putter"


class Club(Enum):
    """
    Clubs available for shot tracking.

    ``sort_order`` runs from 1 (Driver) to 19 (Putter) and drives display order.
    """
    DRIVER = ("Driver", ClubCategory.WOOD, 1)
    THREE_WOOD = ("3 Wood", ClubCategory.WOOD, 2)
    FIVE_WOOD = ("5 Wood", ClubCategory.WOOD, 3)
    SEVEN_WOOD = ("7 Wood", ClubCategory.WOOD, 4)
    NINE_WOOD = ("9 Wood", ClubCategory.WOOD, 5)
    HYBRID_3 = ("3 Hybrid", ClubCategory.HYBRID, 6)
    HYBRID_4 = ("4 Hybrid", ClubCategory.HYBRID, 7)
    THREE_IRON = ("3 Iron", ClubCategory.IRON, 8)
    FOUR_IRON = ("4 Iron", ClubCategory.IRON, 9)
    FIVE_IRON = ("5 Iron", ClubCategory.IRON, 10)
    SIX_IRON = ("6 Iron", ClubCategory.IRON, 11)
    SEVEN_IRON = ("7 Iron", ClubCategory.IRON, 12)
    EIGHT_IRON = ("8 Iron", ClubCategory.IRON, 13)
    NINE_IRON = ("9 Iron", ClubCategory.IRON, 14)
    PITCHING_WEDGE = ("PW", ClubCategory.WEDGE, 15)
    GAP_WEDGE = ("GW", ClubCategory.WEDGE, 16)
    SAND_WEDGE = ("SW", ClubCategory.WEDGE, 17)
    LOB_WEDGE = ("LW", ClubCategory.WEDGE, 18)
    PUTTER = ("Putter", ClubCategory.PUTTER, 19)

    def __init__(self, display_name: str, category: ClubCategory, sort_order: int):
        self.display_name = display_name
        self.category = category
        self.sort_order = sort_order

    @classmethod
    def from_name(cls, name: str, default: Optional['Club'] = None) -> Optional['Club']:
        """Look up a club by enum name, returning ``default`` for unknown names."""
        try:
            return cls[name]
        except KeyError:
            return default


@dataclass(frozen=True)
class ShotMeasurement:
    """
    Raw carry measurement between two resolved positions.

    ``start``/``end`` are the coordinates actually used. The calibration fields
    are None when the measurement fell back to the latest raw fix.
    """
    start: Coordinate
    end: Coordinate
    start_calibration: Optional[CalibratedPosition]
    end_calibration: Optional[CalibratedPosition]
    distance_meters: float
    distance_yards: float
    bearing_degrees: float

    @property
    def used_start_fallback(self) -> bool:
        return self.start_calibration is None

    @property
    def used_end_fallback(self) -> bool:
        return self.end_calibration is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'start_calibration': self.start_calibration.to_dict() if self.start_calibration else None,
            'end_calibration': self.end_calibration.to_dict() if self.end_calibration else None,
            'distance_meters': self.distance_meters,
            'distance_yards': self.distance_yards,
            'bearing_degrees': self.bearing_degrees,
            'used_start_fallback': self.used_start_fallback,
            'used_end_fallback': self.used_end_fallback,
        }


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class ShotRecord:
    """
    Finished shot, as handed to persistence and achievement checks.

    Distances and temperatures are None when the underlying value was not
    finite (e.g. a NaN fix); plausibility checks report those shots.
    """
    club: Club
    distance_yards: Optional[int]
    distance_meters: Optional[int]
    weather_description: str
    temperature_f: Optional[int]
    temperature_c: Optional[int]
    wind_speed_kmh: float
    wind_direction_compass: str
    wind_direction_degrees: int = 0
    shot_bearing_degrees: float = 0.0
    timestamp_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'club': self.club.name,
            'distance_yards': self.distance_yards,
            'distance_meters': self.distance_meters,
            'weather_description': self.weather_description,
            'temperature_f': self.temperature_f,
            'temperature_c': self.temperature_c,
            'wind_speed_kmh': self.wind_speed_kmh,
            'wind_direction_compass': self.wind_direction_compass,
            'wind_direction_degrees': self.wind_direction_degrees,
            'shot_bearing_degrees': self.shot_bearing_degrees,
            'timestamp_ms': self.timestamp_ms,
            'schema_version': SHOT_SCHEMA_VERSION,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShotRecord':
        """
        Rebuild a record from its dictionary form.

        Unknown club names fall back to the Driver; optional fields missing
        from older records take their defaults.
        """
        return cls(
            club=Club.from_name(data['club'], default=Club.DRIVER),
            distance_yards=_optional_int(data['distance_yards']),
            distance_meters=_optional_int(data['distance_meters']),
            weather_description=data['weather_description'],
            temperature_f=_optional_int(data['temperature_f']),
            temperature_c=_optional_int(data['temperature_c']),
            wind_speed_kmh=float(data['wind_speed_kmh']),
            wind_direction_compass=data['wind_direction_compass'],
            wind_direction_degrees=int(data.get('wind_direction_degrees', 0)),
            shot_bearing_degrees=float(data.get('shot_bearing_degrees', 0.0)),
            timestamp_ms=int(data.get('timestamp_ms', 0)),
        )


def shots_to_dataframe(shots: List[ShotRecord]) -> pd.DataFrame:
    """
    Convert a list of shot records to a pandas DataFrame.

    Args:
        shots: List of ShotRecord objects

    Returns:
        pandas DataFrame with one row per shot
    """
    if not shots:
        return pd.DataFrame()

    return pd.DataFrame([shot.to_dict() for shot in shots])
