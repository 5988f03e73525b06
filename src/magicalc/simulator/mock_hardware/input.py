"""
Simulated devices for the simulator.

These classes stand in for the phone's gravity sensor, vibration motor
and on-screen keypad.
"""

import logging
from typing import Callable

from ...core.haptics import HapticIntent
from ...hardware.base import HapticMotor, OrientationSensor

logger = logging.getLogger(__name__)


class SimulatedOrientation(OrientationSensor):
    """
    Simulates the face-down classification.

    Toggled by the simulator window (F key) or the console shell.
    """

    def __init__(self, facing_down: bool = False) -> None:
        self._facing_down = facing_down
        self._callbacks: list[Callable[[bool], None]] = []

    def is_facing_down(self) -> bool:
        return self._facing_down

    def on_change(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def set(self, facing_down: bool) -> None:
        if facing_down == self._facing_down:
            return
        self._facing_down = facing_down
        logger.info(f"Screen {'down' if facing_down else 'up'}")
        for callback in self._callbacks:
            try:
                callback(facing_down)
            except Exception as e:
                logger.error(f"Error in orientation callback: {e}")

    def toggle(self) -> bool:
        self.set(not self._facing_down)
        return self._facing_down


class SimulatedHaptics(HapticMotor):
    """Records haptic intents instead of vibrating."""

    def __init__(self, history_limit: int = 50) -> None:
        self.history: list[HapticIntent] = []
        self._history_limit = history_limit

    @property
    def last(self) -> HapticIntent | None:
        return self.history[-1] if self.history else None

    def emit(self, intent: HapticIntent) -> None:
        logger.debug(f"Haptic: {intent.name}")
        self.history.append(intent)
        if len(self.history) > self._history_limit:
            self.history.pop(0)


class SimulatedKeypad:
    """
    Calculator keypad layout and keyboard mapping.

    Keys are mapped from number keys 0-9, + = and the usual editing keys.
    """

    # Calculator layout, top to bottom
    LAYOUT = [
        ["AC", "+/−", "%", "÷"],
        ["7", "8", "9", "×"],
        ["4", "5", "6", "−"],
        ["1", "2", "3", "+"],
        ["0", ".", "⌫", "="],
    ]

    # Typed characters that are not themselves key labels
    KEYBOARD_ALIASES = {
        "\r": "=",
        "\n": "=",
        "\b": "⌫",
        "\x7f": "⌫",
        "c": "AC",
        "*": "×",
        "/": "÷",
        "-": "−",
    }

    VALID_KEYS = frozenset(key for row in LAYOUT for key in row)

    def resolve(self, typed: str) -> str | None:
        """Resolve a typed character or label to a keypad key."""
        if typed in self.VALID_KEYS:
            return typed
        key = self.KEYBOARD_ALIASES.get(typed.lower() if len(typed) == 1 else typed)
        return key

    def get_key_position(self, key: str) -> tuple[int, int] | None:
        """Get row, col position for a key."""
        for row_idx, row in enumerate(self.LAYOUT):
            for col_idx, k in enumerate(row):
                if k == key:
                    return (row_idx, col_idx)
        return None
