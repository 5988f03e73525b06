"""Gravity-based face-down detection.

Accelerometer convention: z is ~+9.8 m/s^2 with the screen up and
~-9.8 m/s^2 with the screen down. Anything below -6.8 m/s^2 counts as
facing down, which leaves room for a tilted hand.
"""

import logging
from typing import Callable

from .base import OrientationSensor

logger = logging.getLogger(__name__)

FACING_DOWN_THRESHOLD = -6.8  # m/s^2


def classify_facing_down(gravity_z: float, threshold: float = FACING_DOWN_THRESHOLD) -> bool:
    """Classify a gravity z reading as screen-down."""
    return gravity_z < threshold


class GravityOrientationSensor(OrientationSensor):
    """
    Orientation sensor fed with raw gravity readings.

    The host's sensor loop calls ``update(z)`` at its own cadence;
    listeners only hear about changes in classification.
    """

    def __init__(self, threshold: float = FACING_DOWN_THRESHOLD) -> None:
        self.threshold = threshold
        self._facing_down = False
        self._callbacks: list[Callable[[bool], None]] = []

    def is_facing_down(self) -> bool:
        return self._facing_down

    def on_change(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def update(self, gravity_z: float) -> bool:
        """Feed one reading. Returns the resulting classification."""
        facing_down = classify_facing_down(gravity_z, self.threshold)
        if facing_down != self._facing_down:
            self._facing_down = facing_down
            logger.debug(f"Orientation changed: facing_down={facing_down} (z={gravity_z:.2f})")
            for callback in self._callbacks:
                try:
                    callback(facing_down)
                except Exception as e:
                    logger.error(f"Error in orientation callback: {e}")
        return facing_down
