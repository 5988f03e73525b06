"""Mock hardware implementations for the simulator."""

from .input import SimulatedOrientation, SimulatedHaptics, SimulatedKeypad

__all__ = [
    "SimulatedOrientation",
    "SimulatedHaptics",
    "SimulatedKeypad",
]
