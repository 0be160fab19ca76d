"""
Shot measurement service.

Thin orchestration over the core: calibrate the start and end bursts, fall
back to the latest raw fix when calibration fails, and compute distance and
bearing. The raw distance is available as soon as both ends are resolved;
the wind model runs separately, on demand, purely for display.
"""

import logging
import math
import time
from typing import List, Optional, Sequence, Tuple

from config.settings import CalibrationConfig
from core.calculations import (
    distance_meters, bearing_degrees, meters_to_yards, celsius_to_fahrenheit,
    degrees_to_compass, kmh_to_mph
)
from core.calibration import calibrate
from core.models.position import Coordinate, CalibratedPosition, Sample
from core.models.shot import Club, ShotMeasurement, ShotRecord, UNKNOWN_COMPASS_LABEL
from core.models.weather import WeatherData, UNKNOWN_WEATHER
from core.models.wind import Trajectory, WindEffectResult, WindInputs
from core.validation import (
    ValidationError, validate_coordinate, validate_distance, validate_distance_for_club,
    validate_timestamp, validate_weather
)
from core.wind.effect import WindModelParams, analyze
from services.weather_service import wmo_code_to_label

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _round_if_finite(value: float) -> Optional[int]:
    """Round half up, or None for NaN/infinite values so validators can flag them."""
    if not math.isfinite(value):
        return None
    return _round_half_up(value)


def _compass_label(degrees: int) -> str:
    try:
        return degrees_to_compass(degrees)
    except ValidationError as e:
        logger.warning(f"No compass label for wind direction: {e}")
        return UNKNOWN_COMPASS_LABEL


def resolve_position(samples: Sequence[Sample]) -> Tuple[Coordinate, Optional[CalibratedPosition]]:
    """
    Best available coordinate for a burst of samples.

    Args:
        samples: Raw readings in arrival order

    Returns:
        (coordinate, calibration). Calibration is None when the burst could
        not be calibrated and the most recent raw fix was used instead.

    Raises:
        ValidationError: If there are no samples at all
    """
    if not samples:
        raise ValidationError("No GPS samples to resolve a position from")

    calibrated = calibrate(samples)
    if calibrated is not None:
        return calibrated.coordinate, calibrated

    # Equal timestamps (e.g. clients that omit them) resolve to the last arrival
    _, latest = max(enumerate(samples), key=lambda pair: (pair[1].captured_at_ms, pair[0]))
    logger.info(
        f"Calibration failed for {len(samples)} samples, using latest raw fix "
        f"({latest.latitude:.6f}, {latest.longitude:.6f})"
    )
    return latest.coordinate, None


def measure_shot(start_samples: Sequence[Sample], end_samples: Sequence[Sample]) -> ShotMeasurement:
    """
    Measure carry between a start burst and an end burst.

    Never consults weather, so the raw distance is never delayed by it.
    """
    start, start_calibration = resolve_position(start_samples)
    end, end_calibration = resolve_position(end_samples)

    meters = distance_meters(start, end)
    measurement = ShotMeasurement(
        start=start,
        end=end,
        start_calibration=start_calibration,
        end_calibration=end_calibration,
        distance_meters=meters,
        distance_yards=meters_to_yards(meters),
        bearing_degrees=bearing_degrees(start, end),
    )

    logger.info(
        f"Measured shot: {measurement.distance_meters:.1f}m / {measurement.distance_yards:.1f}yd "
        f"bearing {measurement.bearing_degrees:.1f}°"
    )
    return measurement


def build_wind_inputs(
    measurement: ShotMeasurement,
    weather: WeatherData,
    trajectory: Trajectory = Trajectory.MID
) -> WindInputs:
    """
    Convert a measurement and resolved weather into wind model inputs.

    Raises:
        ValidationError: If the measured distance is not finite
    """
    distance_yards = _round_if_finite(measurement.distance_yards)
    if distance_yards is None:
        raise ValidationError(f"Measured distance must be finite, got {measurement.distance_yards}")

    return WindInputs(
        wind_speed_kmh=weather.wind_speed_kmh,
        wind_from_degrees=weather.wind_direction_degrees,
        shot_bearing_degrees=measurement.bearing_degrees,
        distance_yards=distance_yards,
        trajectory_multiplier=trajectory.multiplier,
        temperature_f=_round_if_finite(celsius_to_fahrenheit(weather.temperature_celsius)),
    )


def analyze_wind(
    measurement: ShotMeasurement,
    weather: Optional[WeatherData],
    trajectory: Trajectory = Trajectory.MID,
    params: Optional[WindModelParams] = None
) -> Optional[WindEffectResult]:
    """
    Weather effect on a measured shot, for display.

    Returns:
        WindEffectResult, or None when no weather is available

    Raises:
        ValidationError: If the measurement or weather is outside the wind
            model's contract (non-finite distance or bearing, bad direction)
    """
    if weather is None:
        return None
    return analyze(build_wind_inputs(measurement, weather, trajectory), params)


def build_shot_record(
    club: Club,
    measurement: ShotMeasurement,
    weather: Optional[WeatherData] = None,
    timestamp_ms: Optional[int] = None
) -> ShotRecord:
    """
    Plain, serializable record of a finished shot.

    Missing weather is recorded with the "Unknown" placeholder conditions.
    Non-finite distances and temperatures are stored as None and an
    out-of-range wind direction gets the "Unknown" compass label, so that
    check_plausibility can report them instead of the record failing.
    """
    if weather is None:
        weather = UNKNOWN_WEATHER
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)

    return ShotRecord(
        club=club,
        distance_yards=_round_if_finite(measurement.distance_yards),
        distance_meters=_round_if_finite(measurement.distance_meters),
        weather_description=wmo_code_to_label(weather.weather_code),
        temperature_f=_round_if_finite(celsius_to_fahrenheit(weather.temperature_celsius)),
        temperature_c=_round_if_finite(weather.temperature_celsius),
        wind_speed_kmh=weather.wind_speed_kmh,
        wind_direction_compass=_compass_label(weather.wind_direction_degrees),
        wind_direction_degrees=weather.wind_direction_degrees,
        shot_bearing_degrees=measurement.bearing_degrees,
        timestamp_ms=timestamp_ms,
    )


def check_plausibility(
    measurement: ShotMeasurement,
    record: ShotRecord,
    weather: Optional[WeatherData] = None,
    now_ms: Optional[int] = None
) -> List[str]:
    """
    Soft checks on a finished shot.

    Implausible values are reported, never rejected: the measured distance is
    always kept as measured.

    Returns:
        Human-readable warnings, empty when everything looks plausible
    """
    results = [
        validate_coordinate(measurement.start),
        validate_coordinate(measurement.end),
        validate_distance(measurement.distance_yards),
        validate_distance_for_club(measurement.distance_yards, record.club),
        validate_timestamp(record.timestamp_ms, now_ms),
    ]
    if weather is not None:
        results.append(validate_weather(
            weather.temperature_celsius,
            kmh_to_mph(weather.wind_speed_kmh),
            weather.wind_direction_degrees,
            weather.weather_code,
        ))
    warnings = [error for result in results for error in result.errors]

    for warning in warnings:
        logger.warning(f"Implausible shot: {warning}")
    return warnings


class ShotMeasurementService:
    """
    Service for measuring shots and explaining their weather effect.

    Groups the measurement functions with the collection cadence clients are
    expected to follow.
    """

    def __init__(self, config: type = CalibrationConfig):
        self.config = config

    def collection_plan(self) -> dict:
        """Sample collection cadence for clients."""
        return {
            'duration_ms': self.config.DURATION_MS,
            'end_duration_ms': self.config.END_DURATION_MS,
            'interval_ms': self.config.INTERVAL_MS,
        }

    def measure(self, start_samples: Sequence[Sample], end_samples: Sequence[Sample]) -> ShotMeasurement:
        return measure_shot(start_samples, end_samples)

    def analyze_wind(
        self,
        measurement: ShotMeasurement,
        weather: Optional[WeatherData],
        trajectory: Trajectory = Trajectory.MID,
        params: Optional[WindModelParams] = None
    ) -> Optional[WindEffectResult]:
        return analyze_wind(measurement, weather, trajectory, params)

    def record(
        self,
        club: Club,
        measurement: ShotMeasurement,
        weather: Optional[WeatherData] = None,
        timestamp_ms: Optional[int] = None
    ) -> ShotRecord:
        return build_shot_record(club, measurement, weather, timestamp_ms)

    def check(
        self,
        measurement: ShotMeasurement,
        record: ShotRecord,
        weather: Optional[WeatherData] = None
    ) -> List[str]:
        return check_plausibility(measurement, record, weather)


def get_shot_measurement_service() -> ShotMeasurementService:
    """
    Get a ShotMeasurementService instance.

    Returns:
        ShotMeasurementService instance
    """
    return ShotMeasurementService()
