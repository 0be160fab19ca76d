"""
Tests for GPS position calibration.
"""

import pytest

from core.calculations import distance_meters
from core.calibration import (
    calibrate,
    calibrate_unweighted,
    apply_accuracy_gate,
    reject_outliers,
    weighted_centroid,
)
from core.models.position import Coordinate, Sample, samples_to_dataframe


BASE_LAT = 33.7490
BASE_LON = -84.3880


def make_sample(lat_offset=0.0, lon_offset=0.0, accuracy=5.0, captured_at_ms=0):
    return Sample(
        coordinate=Coordinate(BASE_LAT + lat_offset, BASE_LON + lon_offset),
        accuracy_meters=accuracy,
        captured_at_ms=captured_at_ms,
    )


def make_burst(offsets, accuracy=5.0):
    """Samples at the given latitude offsets, 500ms apart."""
    return [
        make_sample(lat_offset=offset, accuracy=accuracy, captured_at_ms=i * 500)
        for i, offset in enumerate(offsets)
    ]


class TestCalibrateBasics:
    """Sample count thresholds and the identical-sample case."""

    def test_empty_returns_none(self):
        assert calibrate([]) is None

    def test_single_sample_returns_none(self):
        assert calibrate([make_sample()]) is None

    def test_three_samples_returns_none(self):
        """After the cold-start drop only two remain, below the minimum of three."""
        assert calibrate(make_burst([0.0, 0.0, 0.0])) is None

    def test_four_samples_calibrate(self):
        result = calibrate(make_burst([0.0, 0.0, 0.0, 0.0]))
        assert result is not None
        assert result.inlier_count == 3

    def test_identical_samples(self):
        """Five identical samples give that coordinate with ~zero spread."""
        result = calibrate(make_burst([0.0] * 5))

        assert result is not None
        assert result.coordinate.latitude == pytest.approx(BASE_LAT, abs=1e-9)
        assert result.coordinate.longitude == pytest.approx(BASE_LON, abs=1e-9)
        assert result.estimated_accuracy_meters < 1e-3
        assert result.inlier_count == 4

    def test_first_sample_is_dropped(self):
        """A wild first fix never influences the result."""
        samples = make_burst([0.01, 0.0, 0.0, 0.0, 0.0])
        result = calibrate(samples)

        assert result is not None
        assert result.coordinate.latitude == pytest.approx(BASE_LAT, abs=1e-9)
        assert result.inlier_count == 4


class TestAccuracyGate:
    """Tests for the reported-accuracy gate."""

    def test_rejects_out_of_range_accuracy(self):
        samples = [
            make_sample(accuracy=5.0),
            make_sample(accuracy=0.05),
            make_sample(accuracy=25.0),
            make_sample(accuracy=float('nan')),
            make_sample(accuracy=0.1),
            make_sample(accuracy=20.0),
        ]
        gated = apply_accuracy_gate(samples_to_dataframe(samples))
        assert list(gated['accuracy_meters']) == [5.0, 0.1, 20.0]

    def test_rejects_non_finite_coordinates(self):
        samples = [
            make_sample(),
            Sample(Coordinate(float('nan'), BASE_LON), 5.0),
            Sample(Coordinate(BASE_LAT, float('inf')), 5.0),
        ]
        gated = apply_accuracy_gate(samples_to_dataframe(samples))
        assert len(gated) == 1

    def test_too_few_after_gate_returns_none(self):
        """Only two samples inside the gate after the cold-start drop."""
        samples = [
            make_sample(),
            make_sample(accuracy=5.0),
            make_sample(accuracy=50.0),
            make_sample(accuracy=5.0),
            make_sample(accuracy=0.01),
        ]
        assert calibrate(samples) is None

    def test_poor_accuracy_outlier_is_gated(self):
        """A far fix reporting 25m accuracy never reaches the centroid."""
        samples = make_burst([0.0, 0.0, 0.0, 0.0])
        samples.append(make_sample(lat_offset=0.001, accuracy=25.0))

        result = calibrate(samples)
        assert result is not None
        assert result.inlier_count == 3
        assert result.coordinate.latitude == pytest.approx(BASE_LAT, abs=1e-9)


class TestOutlierRejection:
    """Tests for MAD-based outlier rejection."""

    def test_far_outlier_is_rejected(self):
        """Four clustered fixes plus one ~100m outlier reporting the same accuracy."""
        samples = make_burst([0.0, 0.0, 0.000001, -0.000001, 0.001])
        result = calibrate(samples)

        assert result is not None
        assert result.inlier_count == 3
        expected = Coordinate(BASE_LAT, BASE_LON)
        assert distance_meters(result.coordinate, expected) < 0.5

    def test_coincident_samples_keep_everything(self):
        """A median below 1cm means the samples are one point; nothing is dropped."""
        df = samples_to_dataframe(make_burst([0.0] * 4))
        inliers = reject_outliers(df, weighted_centroid(df))
        assert len(inliers) == 4

    def test_too_few_inliers_returns_none(self):
        """Rejecting the one distant fix leaves only two inliers."""
        samples = [
            make_sample(),
            make_sample(accuracy=1.0),
            make_sample(accuracy=1.0),
            make_sample(lat_offset=0.001, accuracy=20.0),
        ]
        assert calibrate(samples) is None


class TestWeighting:
    """Inverse-variance weighting and the accuracy estimate."""

    def test_centroid_favours_accurate_samples(self):
        """Two 2m fixes outweigh two 10m fixes ~1.1m away."""
        samples = [
            make_sample(accuracy=5.0),
            make_sample(lat_offset=0.0, accuracy=2.0),
            make_sample(lat_offset=0.0, accuracy=2.0),
            make_sample(lat_offset=0.00001, accuracy=10.0),
            make_sample(lat_offset=0.00001, accuracy=10.0),
        ]
        result = calibrate(samples)

        assert result is not None
        assert result.inlier_count == 4
        offset = result.coordinate.latitude - BASE_LAT
        assert 0.0 < offset < 0.0000025

    def test_spread_gives_positive_accuracy_estimate(self):
        samples = make_burst([0.0, 0.0, 0.00001, -0.00001, 0.000005])
        result = calibrate(samples)

        assert result is not None
        assert result.estimated_accuracy_meters > 0.0
        assert result.estimated_accuracy_meters < 2.0

    def test_deterministic(self):
        samples = make_burst([0.0, 0.00001, -0.00002, 0.000005, 0.0])
        assert calibrate(samples) == calibrate(samples)


class TestCalibrateUnweighted:
    """Tests for the legacy median-based calibration."""

    def test_fewer_than_three_returns_none(self):
        assert calibrate_unweighted([Coordinate(0.0, 0.0), Coordinate(0.0, 0.0)]) is None

    def test_identical_points(self):
        result = calibrate_unweighted([Coordinate(10.0, 20.0)] * 3)
        assert result == Coordinate(10.0, 20.0)

    def test_rejects_outlier(self):
        coordinates = [
            Coordinate(0.0, 0.0),
            Coordinate(0.0, 0.00001),
            Coordinate(0.0, 0.00002),
            Coordinate(0.0, 0.01),
        ]
        result = calibrate_unweighted(coordinates)

        assert result is not None
        assert result.latitude == pytest.approx(0.0)
        assert result.longitude == pytest.approx(0.00001)
