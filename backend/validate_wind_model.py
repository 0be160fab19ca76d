#!/usr/bin/env python3
"""
Wind Effect Model Validation Script

Compares the wind model's carry estimates against launch monitor reference
shots and prints the error for each case, so the sensitivity constants in
core.constants can be re-tuned when the model changes.

Usage:
    python validate_wind_model.py
"""

import sys
import logging
from pathlib import Path

import pandas as pd

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

from core.models.wind import WindInputs
from core.wind.effect import analyze

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)

MPH_TO_KMH = 1 / 0.621371

# Reference shots: carry, wind mph, measured effect (headwind / tailwind)
REFERENCE_SHOTS = [
    {'club': '7-iron', 'carry': 166, 'wind_mph': 10, 'headwind': -17, 'tailwind': 13},
    {'club': '6-iron', 'carry': 175, 'wind_mph': 20, 'headwind': -39, 'tailwind': 23},
    {'club': 'Driver', 'carry': 300, 'wind_mph': 20, 'headwind': -41, 'tailwind': 33},
    {'club': 'Driver', 'carry': 300, 'wind_mph': 30, 'headwind': -75, 'tailwind': 44},
]


def print_section_header(title: str, char: str = "="):
    """Print a formatted section header."""
    print("\n" + char * 80)
    print(f"  {title}")
    print(char * 80 + "\n")


def model_effect(carry: int, wind_mph: float, wind_from: int) -> int:
    """Carry effect for a shot hit due north with wind from ``wind_from``."""
    result = analyze(WindInputs(
        wind_speed_kmh=wind_mph * MPH_TO_KMH,
        wind_from_degrees=wind_from,
        shot_bearing_degrees=0.0,
        distance_yards=carry,
    ))
    return result.carry_effect_yards


def validate() -> pd.DataFrame:
    """Run every reference shot through the model and collect the errors."""
    rows = []
    for shot in REFERENCE_SHOTS:
        for condition, wind_from in (('headwind', 0), ('tailwind', 180)):
            predicted = model_effect(shot['carry'], shot['wind_mph'], wind_from)
            rows.append({
                'club': shot['club'],
                'carry': shot['carry'],
                'wind_mph': shot['wind_mph'],
                'condition': condition,
                'reference': shot[condition],
                'predicted': predicted,
                'error': predicted - shot[condition],
            })
    return pd.DataFrame(rows)


def main() -> int:
    print_section_header("WIND MODEL VALIDATION")
    results = validate()
    print(results.to_string(index=False))

    mean_abs_error = results['error'].abs().mean()
    logger.info(f"Mean absolute error: {mean_abs_error:.1f} yards")

    worst = results.loc[results['error'].abs().idxmax()]
    logger.info(
        f"Worst case: {worst['club']} {worst['carry']}yd {worst['wind_mph']}mph "
        f"{worst['condition']} ({worst['predicted']:+d} vs {worst['reference']:+d})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
