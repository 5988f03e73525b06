"""Core framework components for the magic calculator."""

from .state import TrickState, Session, TrickStateMachine, HandleResult
from .events import EventBus, Event, EventType
from .haptics import HapticIntent

__all__ = [
    "TrickState",
    "Session",
    "TrickStateMachine",
    "HandleResult",
    "EventBus",
    "Event",
    "EventType",
    "HapticIntent",
]
