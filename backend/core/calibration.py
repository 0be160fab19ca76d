"""
GPS position calibration.

Reduces a short burst of noisy GPS fixes to a single coordinate using an
inverse-variance weighted centroid with accuracy gating and MAD-based outlier
rejection:

1. Drop the first sample (GPS cold-start jitter)
2. Keep samples whose reported accuracy lies within the accuracy gate
3. Weighted centroid with weights 1/accuracy^2
4. Reject samples farther from that centroid than median distance x 2.5
5. Weighted centroid of the inliers is the calibrated coordinate
6. Weighted RMS distance of the inliers is the accuracy estimate

Reported accuracies are informative but not infallible (a spiked fix can still
claim good accuracy), which is why the distribution-based filter in step 4 runs
on top of the gate.

Every failure returns None. Callers fall back to the latest raw fix.
"""

import logging
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from core.calculations import distance_meters_array
from core.constants import (
    MIN_RAW_SAMPLES, COLD_START_SAMPLES_DROPPED, MIN_CALIBRATION_SAMPLES,
    MIN_ACCEPTED_ACCURACY_METERS, MAX_ACCEPTED_ACCURACY_METERS,
    OUTLIER_MAD_FACTOR, COINCIDENT_MEDIAN_METERS, LEGACY_OUTLIER_MAD_FACTOR
)
from core.models.position import Coordinate, CalibratedPosition, Sample, samples_to_dataframe

logger = logging.getLogger(__name__)


def calibrate(samples: Sequence[Sample]) -> Optional[CalibratedPosition]:
    """
    Calibrate a position from a burst of GPS samples.

    Args:
        samples: Raw readings in arrival order, typically ~5 collected over
            2.5s at 500ms intervals

    Returns:
        CalibratedPosition, or None if too few samples survive any stage
    """
    if len(samples) < MIN_RAW_SAMPLES:
        logger.debug(f"Calibration skipped: {len(samples)} samples < {MIN_RAW_SAMPLES}")
        return None

    df = samples_to_dataframe(samples).iloc[COLD_START_SAMPLES_DROPPED:]
    gated = apply_accuracy_gate(df)

    if len(gated) < MIN_CALIBRATION_SAMPLES:
        logger.debug(f"Calibration failed: {len(gated)} samples passed the accuracy gate")
        return None

    centroid = weighted_centroid(gated)
    inliers = reject_outliers(gated, centroid)

    if len(inliers) < MIN_CALIBRATION_SAMPLES:
        logger.debug(f"Calibration failed: only {len(inliers)} inliers after outlier rejection")
        return None

    final_position = weighted_centroid(inliers)
    estimated_accuracy = weighted_rms_distance(inliers, final_position)

    logger.debug(
        f"Calibrated ({final_position.latitude:.6f}, {final_position.longitude:.6f}) "
        f"±{estimated_accuracy:.2f}m from {len(inliers)}/{len(samples)} samples"
    )

    return CalibratedPosition(
        coordinate=final_position,
        estimated_accuracy_meters=estimated_accuracy,
        inlier_count=len(inliers),
    )


def apply_accuracy_gate(df: pd.DataFrame) -> pd.DataFrame:
    """
    Keep samples with a usable reported accuracy and finite coordinates.

    Args:
        df: Sample DataFrame with 'latitude', 'longitude', 'accuracy_meters'

    Returns:
        Filtered DataFrame
    """
    accurate = df['accuracy_meters'].between(MIN_ACCEPTED_ACCURACY_METERS, MAX_ACCEPTED_ACCURACY_METERS)
    finite = np.isfinite(df['latitude']) & np.isfinite(df['longitude'])
    gated = df[accurate & finite]

    rejected = len(df) - len(gated)
    if rejected:
        logger.debug(f"Accuracy gate rejected {rejected} of {len(df)} samples")

    return gated


def sample_weights(df: pd.DataFrame) -> np.ndarray:
    """Inverse-variance weights, 1/accuracy^2."""
    accuracy = df['accuracy_meters'].to_numpy(dtype=float)
    return 1.0 / (accuracy * accuracy)


def weighted_centroid(df: pd.DataFrame) -> Coordinate:
    """Inverse-variance weighted mean latitude and longitude."""
    weights = sample_weights(df)
    return Coordinate(
        latitude=float(np.average(df['latitude'], weights=weights)),
        longitude=float(np.average(df['longitude'], weights=weights)),
    )


def distances_to(df: pd.DataFrame, point: Coordinate) -> np.ndarray:
    """Great-circle distance in meters from every sample to ``point``."""
    return distance_meters_array(
        df['latitude'].to_numpy(dtype=float),
        df['longitude'].to_numpy(dtype=float),
        point.latitude,
        point.longitude,
    )


def reject_outliers(df: pd.DataFrame, centroid: Coordinate,
                    mad_factor: float = OUTLIER_MAD_FACTOR) -> pd.DataFrame:
    """
    Drop samples whose distance to the centroid exceeds median distance x factor.

    When the median distance is below COINCIDENT_MEDIAN_METERS the samples are
    effectively one point and nothing is rejected.
    """
    distances = distances_to(df, centroid)
    median_distance = float(np.median(distances))

    if median_distance < COINCIDENT_MEDIAN_METERS:
        return df

    threshold = median_distance * mad_factor
    inliers = df[distances <= threshold]

    logger.debug(
        f"Outlier rejection: median {median_distance:.2f}m, threshold {threshold:.2f}m, "
        f"kept {len(inliers)}/{len(df)}"
    )
    return inliers


def weighted_rms_distance(df: pd.DataFrame, point: Coordinate) -> float:
    """Weighted root-mean-square distance of samples from ``point`` in meters."""
    weights = sample_weights(df)
    distances = distances_to(df, point)
    return float(np.sqrt(np.sum(weights * distances ** 2) / np.sum(weights)))


def calibrate_unweighted(coordinates: Sequence[Coordinate]) -> Optional[Coordinate]:
    """
    Legacy calibration: median + MAD outlier rejection without accuracy weights.

    Used for fixes that carry no accuracy field. No cold-start drop is applied.

    Args:
        coordinates: Raw coordinates

    Returns:
        Plain mean of the inliers, or None with fewer than 3 usable points
    """
    if len(coordinates) < MIN_CALIBRATION_SAMPLES:
        return None

    df = pd.DataFrame(
        [c.to_dict() for c in coordinates], columns=['latitude', 'longitude']
    )
    median_point = Coordinate(float(df['latitude'].median()), float(df['longitude'].median()))

    distances = distances_to(df, median_point)
    median_distance = float(np.median(distances))

    if median_distance == 0.0:
        inliers = df
    else:
        inliers = df[distances <= median_distance * LEGACY_OUTLIER_MAD_FACTOR]

    if len(inliers) < MIN_CALIBRATION_SAMPLES:
        return None

    return Coordinate(float(inliers['latitude'].mean()), float(inliers['longitude'].mean()))
