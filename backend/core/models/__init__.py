"""
Data models.

Immutable value types shared by the core, the services and the API.
"""

from core.models.position import Coordinate, Sample, CalibratedPosition
from core.models.shot import Club, ClubCategory, ShotMeasurement, ShotRecord
from core.models.weather import WeatherData, UNKNOWN_WEATHER
from core.models.wind import (
    Trajectory, WindColorCategory, WindDirectionCategory, WindInputs, WindEffectResult
)

__all__ = [
    'Coordinate',
    'Sample',
    'CalibratedPosition',
    'Club',
    'ClubCategory',
    'ShotMeasurement',
    'ShotRecord',
    'WeatherData',
    'UNKNOWN_WEATHER',
    'Trajectory',
    'WindColorCategory',
    'WindDirectionCategory',
    'WindInputs',
    'WindEffectResult',
]
