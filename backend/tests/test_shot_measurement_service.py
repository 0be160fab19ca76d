"""
Tests for the shot measurement pipeline.
"""

import pytest

from core.models.position import Coordinate, Sample
from core.models.shot import Club, ShotRecord, shots_to_dataframe
from core.models.weather import WeatherData
from core.models.wind import Trajectory, WindColorCategory
from core.validation import ValidationError
from services.shot_measurement_service import (
    ShotMeasurementService,
    analyze_wind,
    build_shot_record,
    build_wind_inputs,
    check_plausibility,
    measure_shot,
    resolve_position,
)

TEE = Coordinate(33.7490, -84.3880)
GREEN = Coordinate(33.7499, -84.3880)


def burst(point, count=5, accuracy=4.0, start_ms=0):
    """Identical fixes at ``point``, 500ms apart."""
    return [
        Sample(point, accuracy, captured_at_ms=start_ms + i * 500)
        for i in range(count)
    ]


@pytest.fixture
def measurement():
    return measure_shot(burst(TEE), burst(GREEN, start_ms=10_000))


@pytest.fixture
def weather():
    return WeatherData(
        temperature_celsius=30.0,
        weather_code=1,
        wind_speed_kmh=20.0,
        wind_direction_degrees=180,
    )


class TestResolvePosition:
    """Tests for calibration with raw-fix fallback."""

    def test_calibrates_good_burst(self):
        coordinate, calibration = resolve_position(burst(TEE))
        assert calibration is not None
        assert coordinate.latitude == pytest.approx(TEE.latitude, abs=1e-9)

    def test_falls_back_to_latest_fix(self):
        """Two samples can never calibrate; the most recent one is used."""
        samples = [
            Sample(Coordinate(1.0, 1.0), 5.0, captured_at_ms=2000),
            Sample(Coordinate(2.0, 2.0), 5.0, captured_at_ms=1000),
        ]
        coordinate, calibration = resolve_position(samples)
        assert calibration is None
        assert coordinate == Coordinate(1.0, 1.0)

    def test_falls_back_when_gate_rejects_everything(self):
        samples = burst(TEE, accuracy=50.0)
        coordinate, calibration = resolve_position(samples)
        assert calibration is None
        assert coordinate == TEE

    def test_equal_timestamps_use_last_arrival(self):
        """Clients that omit timestamps send all zeros; arrival order decides."""
        samples = [Sample(Coordinate(float(i), 1.0), 50.0) for i in range(1, 6)]
        coordinate, calibration = resolve_position(samples)
        assert calibration is None
        assert coordinate == Coordinate(5.0, 1.0)

    def test_no_samples_raises(self):
        with pytest.raises(ValidationError):
            resolve_position([])


class TestMeasureShot:
    """End-to-end measurement tests."""

    def test_hundred_meter_shot(self, measurement):
        assert measurement.distance_meters == pytest.approx(100.0, abs=5.0)
        assert measurement.distance_yards == pytest.approx(109.4, abs=5.5)
        bearing = measurement.bearing_degrees
        assert min(bearing, 360.0 - bearing) == pytest.approx(0.0, abs=1e-6)
        assert not measurement.used_start_fallback
        assert not measurement.used_end_fallback

    def test_yards_and_meters_agree(self, measurement):
        assert measurement.distance_yards * 0.9144 == pytest.approx(measurement.distance_meters)

    def test_fallback_is_flagged(self):
        start = [Sample(TEE, 5.0, captured_at_ms=0)]
        result = measure_shot(start, burst(GREEN))
        assert result.used_start_fallback
        assert not result.used_end_fallback
        assert result.distance_meters == pytest.approx(100.0, abs=5.0)

    def test_same_spot_is_zero(self):
        result = measure_shot(burst(TEE), burst(TEE))
        assert result.distance_meters == pytest.approx(0.0, abs=1e-6)

    def test_to_dict(self, measurement):
        data = measurement.to_dict()
        assert data['start'] == pytest.approx(TEE.to_dict())
        assert data['start_calibration']['inlier_count'] == 4
        assert data['used_end_fallback'] is False


class TestAnalyzeWind:
    """Tests for weather analysis on a measured shot."""

    def test_no_weather(self, measurement):
        assert analyze_wind(measurement, None) is None

    def test_calm_weather(self, measurement):
        calm = WeatherData(temperature_celsius=21.1, weather_code=0, wind_speed_kmh=0.0, wind_direction_degrees=0)
        result = analyze_wind(measurement, calm)
        assert result.carry_effect_yards == 0
        assert result.color_category == WindColorCategory.NEUTRAL

    def test_tailwind_on_northbound_shot(self, measurement, weather):
        """Wind from the south helps a shot hit due north."""
        result = analyze_wind(measurement, weather)
        assert abs(result.relative_angle_degrees) == pytest.approx(180.0, abs=1e-4)
        assert result.carry_effect_yards > 0
        assert result.color_category == WindColorCategory.FAVORABLE

    def test_wind_inputs(self, measurement, weather):
        inputs = build_wind_inputs(measurement, weather, Trajectory.HIGH)
        assert inputs.distance_yards == 109
        assert inputs.temperature_f == 86
        assert inputs.trajectory_multiplier == Trajectory.HIGH.multiplier
        assert inputs.wind_from_degrees == 180

    def test_non_finite_distance_raises(self, weather):
        broken = measure_shot([Sample(Coordinate(float('nan'), -84.388), 4.0)], burst(GREEN))
        with pytest.raises(ValidationError, match="finite"):
            build_wind_inputs(broken, weather)

    def test_analysis_does_not_change_distance(self, measurement, weather):
        before = measurement.distance_yards
        analyze_wind(measurement, weather)
        assert measurement.distance_yards == before


class TestBuildShotRecord:
    """Tests for the persisted shot record."""

    def test_with_weather(self, measurement, weather):
        record = build_shot_record(Club.PITCHING_WEDGE, measurement, weather, timestamp_ms=1_700_000_000_000)

        assert record.club is Club.PITCHING_WEDGE
        assert record.distance_yards == 109
        assert record.distance_meters == 100
        assert record.weather_description == "Mainly clear"
        assert record.temperature_f == 86
        assert record.temperature_c == 30
        assert record.wind_direction_compass == "S"
        assert record.timestamp_ms == 1_700_000_000_000

    def test_without_weather_uses_placeholder(self, measurement):
        record = build_shot_record(Club.DRIVER, measurement, None, timestamp_ms=1)

        assert record.weather_description == "Unknown"
        assert record.temperature_f == 32
        assert record.temperature_c == 0
        assert record.wind_speed_kmh == 0.0
        assert record.wind_direction_compass == "N"

    def test_default_timestamp_is_now(self, measurement):
        record = build_shot_record(Club.DRIVER, measurement)
        assert record.timestamp_ms > 1_672_531_200_000

    def test_dict_form(self, measurement, weather):
        record = build_shot_record(Club.SEVEN_IRON, measurement, weather, timestamp_ms=5)
        data = record.to_dict()

        assert data['club'] == "SEVEN_IRON"
        assert data['schema_version'] == 1
        assert ShotRecord.from_dict(data) == record

    def test_unknown_club_loads_as_driver(self, measurement, weather):
        data = build_shot_record(Club.SEVEN_IRON, measurement, weather, timestamp_ms=5).to_dict()
        data['club'] = "SPOON"
        assert ShotRecord.from_dict(data).club is Club.DRIVER

    def test_non_finite_distance_recorded_as_none(self):
        broken = measure_shot([Sample(Coordinate(float('nan'), -84.388), 4.0)], burst(GREEN))
        record = build_shot_record(Club.DRIVER, broken, None, timestamp_ms=5)

        assert record.distance_yards is None
        assert record.distance_meters is None
        restored = ShotRecord.from_dict(record.to_dict())
        assert restored.distance_yards is None
        assert restored.temperature_f == 32

    def test_out_of_range_wind_direction_gets_unknown_label(self, measurement):
        bad = WeatherData(temperature_celsius=20.0, weather_code=0, wind_speed_kmh=10.0, wind_direction_degrees=400)
        record = build_shot_record(Club.DRIVER, measurement, bad, timestamp_ms=5)

        assert record.wind_direction_compass == "Unknown"
        assert record.wind_direction_degrees == 400
        assert record.distance_yards == 109

    def test_records_to_dataframe(self, measurement, weather):
        records = [
            build_shot_record(Club.SEVEN_IRON, measurement, weather, timestamp_ms=5),
            build_shot_record(Club.DRIVER, measurement, None, timestamp_ms=6),
        ]
        df = shots_to_dataframe(records)
        assert list(df['club']) == ["SEVEN_IRON", "DRIVER"]
        assert shots_to_dataframe([]).empty


class TestCheckPlausibility:
    """Tests for the soft plausibility warnings."""

    NOW_MS = 1_750_000_000_000

    def test_plausible_shot(self, measurement, weather):
        record = build_shot_record(Club.PITCHING_WEDGE, measurement, weather, timestamp_ms=self.NOW_MS - 1000)
        assert check_plausibility(measurement, record, weather, now_ms=self.NOW_MS) == []

    def test_distance_outside_club_range(self, measurement):
        """A 109 yard putt is flagged but the record is left untouched."""
        record = build_shot_record(Club.PUTTER, measurement, timestamp_ms=self.NOW_MS)
        warnings = check_plausibility(measurement, record, now_ms=self.NOW_MS)

        assert len(warnings) == 1
        assert "Putter" in warnings[0]
        assert record.distance_yards == 109

    def test_timestamp_in_seconds(self, measurement):
        record = build_shot_record(Club.PITCHING_WEDGE, measurement, timestamp_ms=1_700_000_000)
        warnings = check_plausibility(measurement, record, now_ms=self.NOW_MS)
        assert any("seconds" in w for w in warnings)

    def test_implausible_weather(self, measurement):
        storm = WeatherData(temperature_celsius=70.0, weather_code=95, wind_speed_kmh=30.0, wind_direction_degrees=90)
        record = build_shot_record(Club.PITCHING_WEDGE, measurement, storm, timestamp_ms=self.NOW_MS)
        warnings = check_plausibility(measurement, record, storm, now_ms=self.NOW_MS)
        assert any("Temperature" in w for w in warnings)

    def test_non_finite_coordinate_reported(self):
        broken = measure_shot([Sample(Coordinate(float('nan'), -84.388), 4.0)], burst(GREEN))
        record = build_shot_record(Club.DRIVER, broken, timestamp_ms=self.NOW_MS)
        warnings = check_plausibility(broken, record, now_ms=self.NOW_MS)

        assert "Latitude must be a finite number" in warnings
        assert "Distance must be a finite number" in warnings

    def test_out_of_range_wind_direction_reported(self, measurement):
        bad = WeatherData(temperature_celsius=20.0, weather_code=0, wind_speed_kmh=10.0, wind_direction_degrees=400)
        record = build_shot_record(Club.PITCHING_WEDGE, measurement, bad, timestamp_ms=self.NOW_MS)
        warnings = check_plausibility(measurement, record, bad, now_ms=self.NOW_MS)

        assert len(warnings) == 1
        assert "Wind direction 400" in warnings[0]


class TestShotMeasurementService:
    """Tests for the service wrapper."""

    def test_collection_plan(self):
        plan = ShotMeasurementService().collection_plan()
        assert plan == {'duration_ms': 2500, 'end_duration_ms': 2500, 'interval_ms': 500}

    def test_measure_and_record(self, weather):
        service = ShotMeasurementService()
        measurement = service.measure(burst(TEE), burst(GREEN))
        record = service.record(Club.GAP_WEDGE, measurement, weather, timestamp_ms=10)
        effect = service.analyze_wind(measurement, weather, Trajectory.LOW)

        assert record.distance_yards == 109
        assert effect.carry_effect_yards > 0
