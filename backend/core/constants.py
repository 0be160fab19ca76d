"""
Constants for the Carry Lab application.

This module contains all the mathematical, algorithmic, and domain-specific
constants used throughout the codebase. Constants are grouped by their purpose
and documented with their units where applicable.
"""

# =============================================================================
# CONVERSION FACTORS
# =============================================================================

# Distance conversions
METERS_PER_YARD = 0.9144  # International yard
YARDS_PER_METER = 1 / METERS_PER_YARD  # ~1.09361

# Speed conversions
KMH_TO_MPH = 0.621371  # 1 km/h = 0.621371 mph

# Temperature conversions
FAHRENHEIT_PER_CELSIUS = 9.0 / 5.0
FAHRENHEIT_OFFSET = 32.0

# =============================================================================
# GEODESY
# =============================================================================

EARTH_RADIUS_METERS = 6_371_000.0  # Mean Earth radius used by the Haversine formula

MIN_LATITUDE_DEGREES = -90.0
MAX_LATITUDE_DEGREES = 90.0
MIN_LONGITUDE_DEGREES = -180.0
MAX_LONGITUDE_DEGREES = 180.0

# =============================================================================
# ANGLE CONSTANTS (all in degrees)
# =============================================================================

FULL_CIRCLE_DEGREES = 360
ANGLE_WRAP_BOUNDARY_DEGREES = 180  # Upper bound of the signed range (-180, 180]

# 8-point compass thresholds (exclusive upper bounds). The sectors are not
# evenly spaced; stored shot records were labelled with these exact values.
COMPASS_THRESHOLDS = (
    (23, "N"),
    (68, "NE"),
    (113, "E"),
    (158, "SE"),
    (203, "S"),
    (248, "SW"),
    (293, "W"),
    (338, "NW"),
)
COMPASS_WRAP_LABEL = "N"

# 16-point relative wind labels use 22.5 degree sectors
WIND_LABEL_SECTOR_DEGREES = 22.5

# =============================================================================
# POSITION CALIBRATION
# =============================================================================

MIN_RAW_SAMPLES = 2  # Below this nothing is attempted
COLD_START_SAMPLES_DROPPED = 1  # First fix after activation is the noisiest
MIN_CALIBRATION_SAMPLES = 3  # Minimum gated samples and minimum inliers

# Accuracy gate (meters, reported 1-sigma radius)
MIN_ACCEPTED_ACCURACY_METERS = 0.1
MAX_ACCEPTED_ACCURACY_METERS = 20.0

# MAD outlier rejection
OUTLIER_MAD_FACTOR = 2.5  # Reject samples farther than median distance x factor
COINCIDENT_MEDIAN_METERS = 0.01  # Below this the burst is treated as one point

# Legacy unweighted calibration
LEGACY_OUTLIER_MAD_FACTOR = 2.0

# =============================================================================
# WIND EFFECT MODEL
# =============================================================================

# Trajectory multipliers (ball flight shape)
TRAJECTORY_LOW_MULTIPLIER = 0.75
TRAJECTORY_MID_MULTIPLIER = 1.0
TRAJECTORY_HIGH_MULTIPLIER = 1.30

# Wind sensitivity, tuned against launch monitor reference shots:
#   166yd 7-iron, 10mph HW -17yd / TW +13yd
#   175yd 6-iron, 20mph HW -39yd / TW +23yd
WIND_SPEED_EXPONENT = 1.2  # Drag grows faster than linearly with wind speed
WIND_CARRY_COEFFICIENT = 0.8  # Yards per mph^exponent at the reference carry
WIND_REFERENCE_CARRY_YARDS = 150.0
HEADWIND_WEIGHT = 1.2  # Headwinds cost more carry than tailwinds add
TAILWIND_WEIGHT = 0.8
LATERAL_SENSITIVITY = 0.4  # ~1ft per mph of crosswind per 100yd of carry

# Temperature sensitivity
TEMPERATURE_BASELINE_F = 70
TEMPERATURE_EFFECT_DIVISOR = 1000.0  # Effect = carry x (temp - baseline) / divisor (~2yd per 10F per 200yd)

# Display bucketing of the carry effect
COLOR_CATEGORY_THRESHOLD_YARDS = 2

# Relative wind direction buckets (absolute relative angle, inclusive upper bounds)
STRONG_HURTING_MAX_DEGREES = 22.5
HURTING_MAX_DEGREES = 56.25
SLIGHT_HURTING_MAX_DEGREES = 78.75
CROSSWIND_MAX_DEGREES = 101.25
SLIGHT_HELPING_MAX_DEGREES = 123.75
HELPING_MAX_DEGREES = 157.5

# =============================================================================
# VALIDATION LIMITS
# =============================================================================

MIN_DISTANCE_YARDS = 0.0
MAX_DISTANCE_YARDS = 500.0

MIN_TEMPERATURE_CELSIUS = -89.2  # Earth record low
MAX_TEMPERATURE_CELSIUS = 56.7  # Earth record high
MAX_WIND_SPEED_MPH = 253.0  # Highest recorded gust
MAX_WIND_DIRECTION_DEGREES = 359

MIN_TIMESTAMP_MS = 1_672_531_200_000  # 2023-01-01T00:00:00Z
MIN_MILLISECOND_TIMESTAMP = 1_000_000_000_000  # Smaller values look like seconds
MAX_FUTURE_SKEW_MS = 60_000

# =============================================================================
# VALIDATION
# =============================================================================

assert HEADWIND_WEIGHT >= TAILWIND_WEIGHT, \
    "Headwind weight must not be smaller than tailwind weight"
assert MIN_ACCEPTED_ACCURACY_METERS < MAX_ACCEPTED_ACCURACY_METERS, \
    "Accuracy gate bounds are inverted"
