"""Device abstraction layer for the magic calculator."""

from .base import OrientationSensor, HapticMotor
from .orientation import GravityOrientationSensor, classify_facing_down, FACING_DOWN_THRESHOLD

__all__ = [
    # Base classes
    "OrientationSensor",
    "HapticMotor",
    # Orientation
    "GravityOrientationSensor",
    "classify_facing_down",
    "FACING_DOWN_THRESHOLD",
]
