"""
Event bus system for the magic calculator.

Input events are what the host shell feeds the calculator; output events
are published back so displays and haptic devices can react.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    DIGIT = auto()
    PLUS = auto()
    EQUALS = auto()
    CLEAR = auto()
    BACKSPACE = auto()
    BLIND_TAP = auto()  # Full-surface tap while the screen faces down
    INERT_KEY = auto()  # Operator keys the trick never uses

    # Output events
    DISPLAY_UPDATE = auto()
    HAPTIC = auto()
    STATE_CHANGED = auto()

    # System events
    TICK = auto()
    SHUTDOWN = auto()


INPUT_EVENT_TYPES = frozenset({
    EventType.DIGIT,
    EventType.PLUS,
    EventType.EQUALS,
    EventType.CLEAR,
    EventType.BACKSPACE,
    EventType.BLIND_TAP,
    EventType.INERT_KEY,
})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)

    @property
    def is_input(self) -> bool:
        return self.type in INPUT_EVENT_TYPES

    @property
    def digit(self) -> str:
        """Tapped digit for DIGIT events, empty string otherwise."""
        return self.data.get("digit", "")


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run synchronously in subscription order. A failing handler is
    logged and never stops delivery to the others.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to all events. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event to all matching handlers immediately."""
        self._add_to_history(event)

        handlers = self._handlers.get(event.type, []) + self._global_handlers
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Convenience functions for creating input events
def digit_event(digit: str, source: str = "keypad") -> Event:
    """Create a digit press event for '0'..'9'."""
    if len(digit) != 1 or digit not in "0123456789":
        raise ValueError(f"Not a decimal digit: {digit!r}")
    return Event(EventType.DIGIT, data={"digit": digit}, source=source)


def plus_event(source: str = "keypad") -> Event:
    return Event(EventType.PLUS, source=source)


def equals_event(source: str = "keypad") -> Event:
    return Event(EventType.EQUALS, source=source)


def clear_event(source: str = "keypad") -> Event:
    return Event(EventType.CLEAR, source=source)


def backspace_event(source: str = "keypad") -> Event:
    return Event(EventType.BACKSPACE, source=source)


def blind_tap_event(source: str = "screen") -> Event:
    """Create a full-surface tap event (carries no digit)."""
    return Event(EventType.BLIND_TAP, source=source)


def inert_key_event(label: str, source: str = "keypad") -> Event:
    """Create an event for a key with no arithmetic meaning (e.g. '×')."""
    return Event(EventType.INERT_KEY, data={"key": label}, source=source)


def tick_event(now_seconds: int) -> Event:
    """Create a cosmetic seconds tick event."""
    return Event(EventType.TICK, data={"seconds": now_seconds})
