"""Haptic intents emitted by the state machine."""

from enum import Enum, auto


class HapticIntent(Enum):
    """Abstract tactile feedback requests."""
    LIGHT = auto()                  # Ordinary key press
    HEAVY = auto()                  # Magician cue: magic digits are ready
    NOTIFICATION_SUCCESS = auto()   # Magic digits complete / final reveal
    NOTIFICATION_WARNING = auto()   # Rejected action


def base_intent(magic_input_ready: bool) -> HapticIntent:
    """Intent for an event before any context-specific override."""
    return HapticIntent.HEAVY if magic_input_ready else HapticIntent.LIGHT
