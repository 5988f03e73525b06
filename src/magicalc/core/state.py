"""
State machine for the magic calculator trick.

States:
    INPUT_FIRST_NUMBER: Typing the first audience number
    WAITING_SECOND_NUMBER: "+" pressed, nothing typed yet for the second number
    INPUT_SECOND_NUMBER: Typing the second audience number
    SHOW_FIRST_RESULT: "=" pressed, showing the sum of the two numbers
    WAITING_MAGIC_INPUT: "+" pressed after the sum, magic digits derived
    MAGIC_INPUT: Revealing magic digits, one per tap, whatever is tapped
    SHOW_FINAL_RESULT: Showing the encoded date-time
"""

from enum import Enum, auto
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Callable, Any
import logging

from magicalc.config.settings import TrickSettings
from magicalc.core.events import Event, EventType
from magicalc.core.haptics import HapticIntent, base_intent
from magicalc.core.magic import derive
from magicalc.core.timecode import encode
from magicalc.utils.formatting import format_with_thousands_separator, parse_number

logger = logging.getLogger(__name__)


class TrickState(Enum):
    """Calculator states."""
    INPUT_FIRST_NUMBER = auto()
    WAITING_SECOND_NUMBER = auto()
    INPUT_SECOND_NUMBER = auto()
    SHOW_FIRST_RESULT = auto()
    WAITING_MAGIC_INPUT = auto()
    MAGIC_INPUT = auto()
    SHOW_FINAL_RESULT = auto()


MAGIC_STATES = frozenset({TrickState.WAITING_MAGIC_INPUT, TrickState.MAGIC_INPUT})


@dataclass
class Session:
    """
    Mutable state of one trick cycle.

    The host owns the session and passes it to TrickStateMachine.handle,
    which is the only thing that mutates it. ``facing_down`` is written by
    the host before each event; it survives resets since it describes the
    device rather than the cycle.
    """
    state: TrickState = TrickState.INPUT_FIRST_NUMBER
    current_input_value: str = "0"
    first_number: int = 0
    second_number: int = 0
    sum_result: int = 0
    magic_number: int = 0
    magic_digits: tuple[int, ...] = ()
    magic_reveal_index: int = 0
    magic_input_ready: bool = False
    final_result: int = 0
    facing_down: bool = False

    @property
    def display_text(self) -> str:
        return render_display(self)

    @property
    def is_blind_input_mode(self) -> bool:
        """Magic state with the screen facing down: every touch reveals."""
        return self.state in MAGIC_STATES and self.facing_down

    def reset(self) -> None:
        """Reinitialize every cycle field to its creation default."""
        self.__init__(facing_down=self.facing_down)

    def snapshot(self) -> dict[str, Any]:
        """Plain copy of all fields, for logging and comparisons."""
        return asdict(self)


def render_display(session: Session) -> str:
    """Display text for a session, derived only from its fields."""
    fmt = format_with_thousands_separator
    state = session.state

    if state == TrickState.INPUT_FIRST_NUMBER:
        return session.current_input_value
    if state == TrickState.WAITING_SECOND_NUMBER:
        return f"{fmt(session.first_number)}+"
    if state == TrickState.INPUT_SECOND_NUMBER:
        return f"{fmt(session.first_number)}+{session.current_input_value}"
    if state == TrickState.SHOW_FIRST_RESULT:
        return fmt(session.sum_result)
    if state == TrickState.WAITING_MAGIC_INPUT:
        return f"{fmt(session.sum_result)}+"
    if state == TrickState.MAGIC_INPUT:
        return f"{fmt(session.sum_result)}+{session.current_input_value}"
    return fmt(session.final_result)


@dataclass(frozen=True)
class HandleResult:
    """Outcome of one handled event."""
    display_text: str
    haptic_intent: HapticIntent
    state: TrickState


StateListener = Callable[[TrickState, TrickState, Session], None]


class TrickStateMachine:
    """
    Deterministic state machine driving the trick.

    Every event is handled synchronously and every (state, event) pair has
    a defined outcome, a no-op included. Each call yields exactly one
    haptic intent: HEAVY once the magic digits are ready, LIGHT otherwise,
    unless the transition overrides it with a notification.
    """

    def __init__(self, settings: TrickSettings | None = None) -> None:
        self.settings = settings or TrickSettings()
        self._listeners: list[StateListener] = []
        self._handlers: dict[EventType, Callable[[Session, Event, datetime], HapticIntent | None]] = {
            EventType.DIGIT: self._on_digit,
            EventType.PLUS: self._on_plus,
            EventType.EQUALS: self._on_equals,
            EventType.CLEAR: self._on_clear,
            EventType.BACKSPACE: self._on_backspace,
        }
        logger.info(
            f"TrickStateMachine initialized "
            f"(round_to_next_minute={self.settings.round_to_next_minute}, "
            f"negative_magic_policy={self.settings.negative_magic_policy})"
        )

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def is_blind_input_mode(self, session: Session) -> bool:
        return session.is_blind_input_mode

    def handle(
        self,
        session: Session,
        event: Event,
        now: datetime | None = None
    ) -> HandleResult:
        """
        Apply one input event to the session.

        Args:
            session: Session to mutate
            event: Input event (DIGIT, PLUS, EQUALS, CLEAR, BACKSPACE,
                BLIND_TAP or INERT_KEY)
            now: Current date-time, resolved by the caller

        Returns:
            Display text, haptic intent and resulting state
        """
        if now is None:
            now = datetime.now()

        old_state = session.state
        ready_before = session.magic_input_ready

        if self._routes_to_reveal(session, event):
            override = self._reveal_next_digit(session)
        else:
            handler = self._handlers.get(event.type)
            override = handler(session, event, now) if handler else None

        intent = override or base_intent(ready_before)
        logger.debug(
            f"{event.type} in {old_state.name}: "
            f"display={session.display_text!r} haptic={intent.name}"
        )

        if session.state != old_state:
            self._notify(old_state, session)

        return HandleResult(session.display_text, intent, session.state)

    def reset(self, session: Session) -> None:
        """Full reset of a session outside the event flow."""
        old_state = session.state
        session.reset()
        if old_state != session.state:
            self._notify(old_state, session)

    def _routes_to_reveal(self, session: Session, event: Event) -> bool:
        """
        Whether an event bypasses its own handler and reveals a digit.

        In blind input mode every control reveals, except "=" during the
        reveal itself, which is guarded until the screen is turned up.
        """
        if not session.is_blind_input_mode:
            return False
        if event.type == EventType.EQUALS and session.state == TrickState.MAGIC_INPUT:
            return False
        return True

    def _notify(self, old_state: TrickState, session: Session) -> None:
        logger.info(f"State transition: {old_state.name} -> {session.state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, session.state, session)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

    # Event handlers. Each returns an overriding haptic intent or None.

    def _on_digit(self, session: Session, event: Event, now: datetime) -> HapticIntent | None:
        digit = event.digit
        state = session.state

        if state == TrickState.INPUT_FIRST_NUMBER:
            if session.current_input_value == "0":
                session.current_input_value = digit or "0"
            else:
                session.current_input_value += digit

        elif state == TrickState.WAITING_SECOND_NUMBER:
            session.current_input_value = digit or "0"
            session.state = TrickState.INPUT_SECOND_NUMBER

        elif state == TrickState.INPUT_SECOND_NUMBER:
            session.current_input_value += digit

        elif state in MAGIC_STATES:
            return self._reveal_next_digit(session)

        elif state == TrickState.SHOW_FINAL_RESULT:
            session.reset()
            session.current_input_value = digit or "0"

        return None

    def _on_plus(self, session: Session, event: Event, now: datetime) -> HapticIntent | None:
        state = session.state

        if state == TrickState.INPUT_FIRST_NUMBER:
            session.first_number = parse_number(session.current_input_value)
            session.current_input_value = "0"
            session.state = TrickState.WAITING_SECOND_NUMBER

        elif state == TrickState.INPUT_SECOND_NUMBER:
            self._store_sum(session)
            return self._begin_magic(session, now)

        elif state == TrickState.SHOW_FIRST_RESULT:
            return self._begin_magic(session, now)

        elif state == TrickState.SHOW_FINAL_RESULT:
            session.reset()

        return None

    def _on_equals(self, session: Session, event: Event, now: datetime) -> HapticIntent | None:
        state = session.state

        if state == TrickState.INPUT_SECOND_NUMBER:
            self._store_sum(session)
            session.current_input_value = str(session.sum_result)
            session.state = TrickState.SHOW_FIRST_RESULT

        elif state == TrickState.MAGIC_INPUT:
            if session.facing_down:
                logger.debug("Equals rejected while the screen faces down")
                return HapticIntent.NOTIFICATION_WARNING

            session.final_result = encode(now, self.settings.round_to_next_minute)
            session.magic_input_ready = False
            session.state = TrickState.SHOW_FINAL_RESULT
            logger.info(f"Final reveal: {session.final_result}")
            return HapticIntent.NOTIFICATION_SUCCESS

        elif state == TrickState.SHOW_FINAL_RESULT:
            session.reset()

        return None

    def _on_clear(self, session: Session, event: Event, now: datetime) -> HapticIntent | None:
        session.reset()
        return None

    def _on_backspace(self, session: Session, event: Event, now: datetime) -> HapticIntent | None:
        state = session.state

        if state == TrickState.INPUT_FIRST_NUMBER:
            session.current_input_value = session.current_input_value[:-1] or "0"

        elif state == TrickState.WAITING_SECOND_NUMBER:
            session.current_input_value = str(session.first_number)
            session.state = TrickState.INPUT_FIRST_NUMBER

        elif state == TrickState.INPUT_SECOND_NUMBER:
            if len(session.current_input_value) > 1:
                session.current_input_value = session.current_input_value[:-1]
            else:
                session.current_input_value = "0"
                session.state = TrickState.WAITING_SECOND_NUMBER

        elif state == TrickState.WAITING_MAGIC_INPUT:
            session.state = TrickState.SHOW_FIRST_RESULT

        return None

    # Trick mechanics

    def _store_sum(self, session: Session) -> None:
        session.second_number = parse_number(session.current_input_value)
        session.sum_result = session.first_number + session.second_number

    def _begin_magic(self, session: Session, now: datetime) -> HapticIntent | None:
        """Derive the magic digits for the current sum and wait for taps."""
        target = encode(now, self.settings.round_to_next_minute)
        magic = derive(target, session.sum_result)

        if magic.is_negative and self.settings.negative_magic_policy == "refuse":
            logger.warning(f"Trick refused: sum {session.sum_result} exceeds target {target}")
            session.current_input_value = str(session.sum_result)
            session.state = TrickState.SHOW_FIRST_RESULT
            return HapticIntent.NOTIFICATION_WARNING

        session.magic_number = magic.value
        session.magic_digits = magic.digits
        session.magic_reveal_index = 0
        session.magic_input_ready = False
        session.current_input_value = "0"
        session.state = TrickState.WAITING_MAGIC_INPUT
        return None

    def _reveal_next_digit(self, session: Session) -> HapticIntent | None:
        """Show the next magic digit regardless of what was tapped."""
        if session.state == TrickState.WAITING_MAGIC_INPUT:
            session.state = TrickState.MAGIC_INPUT
            session.magic_reveal_index = 0

        index = session.magic_reveal_index
        total = len(session.magic_digits)
        if index >= total:
            # Everything revealed: extra taps are absorbed
            return None

        digit = str(session.magic_digits[index])
        if index == 0:
            session.current_input_value = digit
        else:
            session.current_input_value += digit
        session.magic_reveal_index = index + 1

        if session.magic_reveal_index == total:
            session.magic_input_ready = True
            logger.info(f"Magic digits complete ({total} digits)")
            return HapticIntent.NOTIFICATION_SUCCESS

        if session.magic_reveal_index == self.settings.ready_cue_digits:
            return HapticIntent.HEAVY

        return None
