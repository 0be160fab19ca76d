"""
Services package.

Provides business logic layer between API and core algorithms.

Modules:
    shot_measurement_service: Calibrate start/end bursts and measure carry
    weather_service: Current-weather lookup with caching
"""

from services.shot_measurement_service import (
    ShotMeasurementService, get_shot_measurement_service, measure_shot, analyze_wind
)
from services.weather_service import WeatherService, get_weather_service

__all__ = [
    'ShotMeasurementService',
    'get_shot_measurement_service',
    'measure_shot',
    'analyze_wind',
    'WeatherService',
    'get_weather_service',
]
