"""
Wind effect module.

This module estimates how wind and temperature changed a measured carry.
"""

from core.wind.effect import WindModelParams, analyze
from core.wind.labels import wind_direction_category, wind_label_16

__all__ = [
    'WindModelParams',
    'analyze',
    'wind_direction_category',
    'wind_label_16',
]
