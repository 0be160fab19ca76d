"""
Weather data model.

Current conditions as returned by the weather lookup service.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class WeatherData:
    """Current conditions at a coordinate."""
    temperature_celsius: float
    weather_code: int  # WMO code, -1 when unknown
    wind_speed_kmh: float
    wind_direction_degrees: int  # Where the wind comes FROM

    def to_dict(self) -> Dict[str, Any]:
        return {
            'temperature_celsius': self.temperature_celsius,
            'weather_code': self.weather_code,
            'wind_speed_kmh': self.wind_speed_kmh,
            'wind_direction_degrees': self.wind_direction_degrees,
        }


# Placeholder conditions recorded when the lookup fails or times out
UNKNOWN_WEATHER = WeatherData(
    temperature_celsius=0.0,
    weather_code=-1,
    wind_speed_kmh=0.0,
    wind_direction_degrees=0,
)
