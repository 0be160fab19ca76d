"""
Weather lookup service.

Fetches current conditions from the Open-Meteo API and caches them for an
hour. Weather is a nice-to-have: every failure is logged and returned as None
so that it can never block or delay a recorded shot.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from config.settings import WeatherConfig
from core.models.position import Coordinate
from core.models.weather import WeatherData

logger = logging.getLogger(__name__)

# WMO weather interpretation codes, see https://open-meteo.com/en/docs
WMO_CODE_LABELS: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snowfall",
    73: "Moderate snowfall",
    75: "Heavy snowfall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def wmo_code_to_label(code: int) -> str:
    """Human-readable label for a WMO weather code, "Unknown" otherwise."""
    return WMO_CODE_LABELS.get(code, "Unknown")


def parse_weather_payload(payload: Any) -> Optional[WeatherData]:
    """
    Parse an Open-Meteo forecast response.

    Args:
        payload: Decoded JSON body

    Returns:
        WeatherData, or None if the structure is unexpected
    """
    try:
        current = payload["current"]
        return WeatherData(
            temperature_celsius=float(current["temperature_2m"]),
            weather_code=int(current["weather_code"]),
            wind_speed_kmh=float(current["wind_speed_10m"]),
            wind_direction_degrees=int(current["wind_direction_10m"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Unexpected weather payload: {e!r}")
        return None


class WeatherCache:
    """
    Single-entry in-memory cache with a fixed time-to-live.

    Avoids repeated lookups when several shots are taken in quick succession.
    The clock is injectable for deterministic tests.
    """

    def __init__(self, ttl_seconds: float = WeatherConfig.CACHE_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._data: Optional[WeatherData] = None
        self._stored_at = 0.0

    def get(self) -> Optional[WeatherData]:
        if self._data is None:
            return None
        if self._clock() - self._stored_at >= self.ttl_seconds:
            return None
        return self._data

    def put(self, data: WeatherData) -> None:
        self._data = data
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._data = None
        self._stored_at = 0.0


class OpenMeteoClient:
    """HTTP client for the Open-Meteo current-conditions endpoint."""

    def __init__(self, base_url: str = WeatherConfig.BASE_URL,
                 session: Optional[requests.Session] = None,
                 connect_timeout: float = WeatherConfig.CONNECT_TIMEOUT,
                 read_timeout: float = WeatherConfig.READ_TIMEOUT):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = (connect_timeout, read_timeout)

    def fetch_current(self, latitude: float, longitude: float) -> Optional[WeatherData]:
        """
        Fetch current weather for a coordinate.

        Returns:
            WeatherData, or None if the request fails or the response is malformed
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": WeatherConfig.CURRENT_FIELDS,
        }
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.warning(f"Weather request failed for ({latitude:.4f}, {longitude:.4f}): {e}")
            return None
        except ValueError as e:
            logger.warning(f"Weather response was not valid JSON: {e}")
            return None

        return parse_weather_payload(payload)


class WeatherService:
    """
    Cached weather lookup.

    The shot pipeline never calls this directly; callers resolve weather
    alongside sample collection and pass the result (or None) in.
    """

    def __init__(self, client: Optional[OpenMeteoClient] = None,
                 cache: Optional[WeatherCache] = None):
        self.client = client or OpenMeteoClient()
        self.cache = cache or WeatherCache()

    def get_weather(self, coordinate: Coordinate) -> Optional[WeatherData]:
        """Current weather near ``coordinate``, from cache when fresh."""
        cached = self.cache.get()
        if cached is not None:
            logger.debug("Weather served from cache")
            return cached

        data = self.client.fetch_current(coordinate.latitude, coordinate.longitude)
        if data is not None:
            self.cache.put(data)
            logger.info(
                f"Weather: {wmo_code_to_label(data.weather_code)}, "
                f"{data.temperature_celsius:.1f}°C, wind {data.wind_speed_kmh:.1f}km/h "
                f"from {data.wind_direction_degrees}°"
            )
        return data


_weather_service: Optional[WeatherService] = None


def get_weather_service() -> WeatherService:
    """
    Get the shared WeatherService instance.

    Returns:
        WeatherService instance
    """
    global _weather_service
    if _weather_service is None:
        _weather_service = WeatherService()
    return _weather_service
