"""
Application settings and configuration.

This module contains application-specific configuration and defaults.
For algorithmic constants, see core.constants module.
"""

import os
import logging
from typing import Dict, Any

# Import algorithmic constants from core module
from core.constants import (
    MIN_CALIBRATION_SAMPLES,
    MAX_ACCEPTED_ACCURACY_METERS,
    OUTLIER_MAD_FACTOR,
    COLOR_CATEGORY_THRESHOLD_YARDS,
    TEMPERATURE_BASELINE_F
)

# App information
APP_NAME = "Carry Lab"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Measure golf shot carry from GPS fixes and explain the weather's share of it"

# Sample collection cadence expected from clients
DEFAULT_CALIBRATION_DURATION_MS = 2500  # Start-of-shot burst
DEFAULT_END_CALIBRATION_DURATION_MS = 2500  # End-of-shot burst
DEFAULT_CALIBRATION_INTERVAL_MS = 500  # Between samples
DEFAULT_GPS_WARMUP_TIMEOUT_MS = 10_000  # Wait for a first fix before collecting

# Wind display defaults
DEFAULT_TRAJECTORY = "MID"

# Weather lookup
WEATHER_BASE_URL = os.environ.get("WEATHER_BASE_URL", "https://api.open-meteo.com/v1/forecast")
WEATHER_CURRENT_FIELDS = "temperature_2m,weather_code,wind_speed_10m,wind_direction_10m"
WEATHER_CONNECT_TIMEOUT_SECONDS = 5.0
WEATHER_READ_TIMEOUT_SECONDS = 10.0
WEATHER_CACHE_TTL_SECONDS = 60 * 60  # 1 hour

# API
API_HOST = "0.0.0.0"
API_PORT = 8000
CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
]

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOGGING_CONFIG = {
    "level": getattr(logging, LOG_LEVEL, logging.INFO),
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "handlers": [
        logging.StreamHandler(),
    ]
}


def configure_logging() -> None:
    """Apply LOGGING_CONFIG to the root logger."""
    logging.basicConfig(
        level=LOGGING_CONFIG["level"],
        format=LOGGING_CONFIG["format"],
        handlers=LOGGING_CONFIG["handlers"],
    )


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class CalibrationConfig:
    """Sample collection and calibration parameters."""
    DURATION_MS = DEFAULT_CALIBRATION_DURATION_MS
    END_DURATION_MS = DEFAULT_END_CALIBRATION_DURATION_MS
    INTERVAL_MS = DEFAULT_CALIBRATION_INTERVAL_MS
    GPS_WARMUP_TIMEOUT_MS = DEFAULT_GPS_WARMUP_TIMEOUT_MS
    MIN_SAMPLES = MIN_CALIBRATION_SAMPLES  # From core.constants
    ACCURACY_GATE_METERS = MAX_ACCEPTED_ACCURACY_METERS  # From core.constants
    OUTLIER_MAD_FACTOR = OUTLIER_MAD_FACTOR  # From core.constants

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get calibration configuration as a dictionary."""
        return {
            'duration_ms': cls.DURATION_MS,
            'end_duration_ms': cls.END_DURATION_MS,
            'interval_ms': cls.INTERVAL_MS,
            'gps_warmup_timeout_ms': cls.GPS_WARMUP_TIMEOUT_MS,
            'min_samples': cls.MIN_SAMPLES,
            'accuracy_gate_meters': cls.ACCURACY_GATE_METERS,
            'outlier_mad_factor': cls.OUTLIER_MAD_FACTOR,
        }


class WindConfig:
    """Wind effect display parameters."""
    DEFAULT_TRAJECTORY = DEFAULT_TRAJECTORY
    COLOR_THRESHOLD_YARDS = COLOR_CATEGORY_THRESHOLD_YARDS  # From core.constants
    TEMPERATURE_BASELINE_F = TEMPERATURE_BASELINE_F  # From core.constants

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get wind configuration as a dictionary."""
        return {
            'default_trajectory': cls.DEFAULT_TRAJECTORY,
            'color_threshold_yards': cls.COLOR_THRESHOLD_YARDS,
            'temperature_baseline_f': cls.TEMPERATURE_BASELINE_F,
        }


class WeatherConfig:
    """Weather lookup parameters."""
    BASE_URL = WEATHER_BASE_URL
    CURRENT_FIELDS = WEATHER_CURRENT_FIELDS
    CONNECT_TIMEOUT = WEATHER_CONNECT_TIMEOUT_SECONDS
    READ_TIMEOUT = WEATHER_READ_TIMEOUT_SECONDS
    CACHE_TTL_SECONDS = WEATHER_CACHE_TTL_SECONDS

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get weather configuration as a dictionary."""
        return {
            'base_url': cls.BASE_URL,
            'current_fields': cls.CURRENT_FIELDS,
            'connect_timeout': cls.CONNECT_TIMEOUT,
            'read_timeout': cls.READ_TIMEOUT,
            'cache_ttl_seconds': cls.CACHE_TTL_SECONDS,
        }
