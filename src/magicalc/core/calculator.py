"""
Host-facing calculator facade.

Owns a Session and wires the state machine to its collaborators: a clock,
an orientation sensor, a haptic motor and the event bus.
"""

from datetime import datetime
from typing import Callable
import logging

from magicalc.core.events import (
    Event,
    EventBus,
    EventType,
    backspace_event,
    blind_tap_event,
    clear_event,
    digit_event,
    equals_event,
    inert_key_event,
    plus_event,
)
from magicalc.core.state import HandleResult, Session, TrickState, TrickStateMachine
from magicalc.hardware.base import HapticMotor, OrientationSensor
from magicalc.utils.formatting import seconds_text

logger = logging.getLogger(__name__)

BACKSPACE_KEY = "⌫"

# Keys on the calculator face that do nothing in this calculator
INERT_KEYS = frozenset({"−", "×", "÷", "%", "+/−", "."})

KEY_EVENTS: dict[str, Callable[[], Event]] = {
    "+": plus_event,
    "=": equals_event,
    "AC": clear_event,
    BACKSPACE_KEY: backspace_event,
}


def key_to_event(key: str) -> Event:
    """Map a calculator button label to its input event."""
    if len(key) == 1 and key.isdigit():
        return digit_event(key)
    if key in KEY_EVENTS:
        return KEY_EVENTS[key]()
    if key in INERT_KEYS:
        return inert_key_event(key)
    raise ValueError(f"Unknown calculator key: {key!r}")


class MagicCalculator:
    """
    The calculator as seen by a host shell.

    Usage:
        calculator = MagicCalculator(orientation=sensor, haptics=motor)
        result = calculator.press("7")
        if calculator.is_blind_input_mode():
            calculator.tap_screen()
    """

    def __init__(
        self,
        session: Session | None = None,
        machine: TrickStateMachine | None = None,
        clock: Callable[[], datetime] | None = None,
        orientation: OrientationSensor | None = None,
        haptics: HapticMotor | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.session = session or Session()
        self.machine = machine or TrickStateMachine()
        self.clock = clock or datetime.now
        self.orientation = orientation
        self.haptics = haptics
        self.event_bus = event_bus or EventBus()

        self.machine.add_listener(self._on_state_change)

    @property
    def state(self) -> TrickState:
        return self.session.state

    def handle(self, event: Event) -> HandleResult:
        """Handle one input event and dispatch its outputs."""
        if self.orientation is not None:
            self.session.facing_down = self.orientation.is_facing_down()

        result = self.machine.handle(self.session, event, self.clock())

        self._emit_haptic(result)
        self.event_bus.emit(Event(
            EventType.DISPLAY_UPDATE,
            data={"text": result.display_text},
            source="calculator",
        ))
        return result

    def press(self, key: str) -> HandleResult:
        """Handle a calculator button by its label."""
        return self.handle(key_to_event(key))

    def tap_screen(self) -> HandleResult:
        """Handle a tap anywhere on the screen surface."""
        return self.handle(blind_tap_event())

    def set_facing_down(self, facing_down: bool) -> None:
        """Set orientation manually (hosts without a sensor)."""
        self.session.facing_down = facing_down

    def is_blind_input_mode(self) -> bool:
        if self.orientation is not None:
            self.session.facing_down = self.orientation.is_facing_down()
        return self.machine.is_blind_input_mode(self.session)

    def current_display_text(self) -> str:
        return self.session.display_text

    def seconds_text(self) -> str:
        return seconds_text(self.clock())

    def reset(self) -> None:
        self.machine.reset(self.session)

    def _emit_haptic(self, result: HandleResult) -> None:
        if self.haptics is not None:
            try:
                self.haptics.emit(result.haptic_intent)
            except Exception as e:
                logger.error(f"Haptic output failed: {e}")

        self.event_bus.emit(Event(
            EventType.HAPTIC,
            data={"intent": result.haptic_intent},
            source="calculator",
        ))

    def _on_state_change(self, old_state: TrickState, new_state: TrickState, session: Session) -> None:
        if session is not self.session:
            return
        self.event_bus.emit(Event(
            EventType.STATE_CHANGED,
            data={"from": old_state, "to": new_state},
            source="calculator",
        ))
