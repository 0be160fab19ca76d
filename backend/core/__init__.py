"""
Core measurement package.

Pure computation only: geometry, calibration, the wind model and validation.
Nothing in here performs I/O.
"""
