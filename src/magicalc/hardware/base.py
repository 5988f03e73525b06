"""
Abstract base classes for device interfaces.

These interfaces define the contract that both real device bindings
and simulator mock implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Callable

from magicalc.core.haptics import HapticIntent


class OrientationSensor(ABC):
    """Abstract base class for a screen orientation source."""

    @abstractmethod
    def is_facing_down(self) -> bool:
        """Latest classification: True when the screen faces the floor."""
        ...

    @abstractmethod
    def on_change(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        """
        Register orientation change callback.

        Returns:
            Function to unregister callback
        """
        ...


class HapticMotor(ABC):
    """Abstract base class for tactile feedback output."""

    @abstractmethod
    def emit(self, intent: HapticIntent) -> None:
        """Fire-and-forget request for feedback matching the intent."""
        ...
