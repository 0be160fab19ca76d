"""
Position data models.

This module defines the value types for raw GPS samples and the calibrated
positions derived from them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Sequence

import pandas as pd


@dataclass(frozen=True)
class Coordinate:
    """A WGS-84 latitude/longitude pair in degrees."""
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {'latitude': self.latitude, 'longitude': self.longitude}


@dataclass(frozen=True)
class Sample:
    """
    A single GPS fix as delivered by the location stream.

    ``accuracy_meters`` is the reported 1-sigma radius. It is informative but
    not trusted: the calibrator gates and cross-checks it.
    """
    coordinate: Coordinate
    accuracy_meters: float
    captured_at_ms: int = 0

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self) -> Dict[str, Any]:
        """Convert sample to dictionary for DataFrame creation."""
        return {
            'latitude': self.coordinate.latitude,
            'longitude': self.coordinate.longitude,
            'accuracy_meters': self.accuracy_meters,
            'captured_at_ms': self.captured_at_ms,
        }


@dataclass(frozen=True)
class CalibratedPosition:
    """
    Result of calibrating a burst of samples.

    Created once per calibration call and consumed immediately to produce a
    distance, or discarded.
    """
    coordinate: Coordinate
    estimated_accuracy_meters: float
    inlier_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'latitude': self.coordinate.latitude,
            'longitude': self.coordinate.longitude,
            'estimated_accuracy_meters': self.estimated_accuracy_meters,
            'inlier_count': self.inlier_count,
        }


SAMPLE_COLUMNS = ['latitude', 'longitude', 'accuracy_meters', 'captured_at_ms']


def samples_to_dataframe(samples: Sequence[Sample]) -> pd.DataFrame:
    """
    Convert a list of samples to a pandas DataFrame.

    Args:
        samples: Sample objects in arrival order

    Returns:
        DataFrame with one row per sample, preserving arrival order
    """
    if not samples:
        return pd.DataFrame(columns=SAMPLE_COLUMNS)

    return pd.DataFrame([sample.to_dict() for sample in samples], columns=SAMPLE_COLUMNS)

