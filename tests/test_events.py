"""Tests for events and the event bus."""

import pytest

from magicalc.core.events import (
    Event,
    EventBus,
    EventType,
    blind_tap_event,
    digit_event,
    inert_key_event,
    tick_event,
)


def test_digit_event_carries_digit():
    event = digit_event("7")
    assert event.type == EventType.DIGIT
    assert event.digit == "7"
    assert event.is_input


@pytest.mark.parametrize("bad", ["", "x", "12", "+"])
def test_digit_event_rejects_non_digits(bad):
    with pytest.raises(ValueError):
        digit_event(bad)


def test_blind_tap_carries_no_digit():
    event = blind_tap_event()
    assert event.type == EventType.BLIND_TAP
    assert event.digit == ""
    assert event.source == "screen"


def test_output_events_are_not_input():
    assert not tick_event(5).is_input
    assert not Event(EventType.DISPLAY_UPDATE).is_input
    assert inert_key_event("%").is_input


def test_subscribe_and_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(EventType.TICK, seen.append)

    bus.emit(tick_event(1))
    unsubscribe()
    bus.emit(tick_event(2))

    assert [e.data["seconds"] for e in seen] == [1]


def test_subscribe_all_receives_every_event():
    bus = EventBus()
    seen = []
    bus.subscribe_all(lambda e: seen.append(e.type))

    bus.emit(tick_event(1))
    bus.emit(Event(EventType.HAPTIC))

    assert seen == [EventType.TICK, EventType.HAPTIC]


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.TICK, broken)
    bus.subscribe(EventType.TICK, seen.append)
    bus.emit(tick_event(3))

    assert len(seen) == 1


def test_history_is_limited():
    bus = EventBus(history_limit=3)
    for second in range(5):
        bus.emit(tick_event(second))

    history = bus.get_history(limit=10)
    assert [e.data["seconds"] for e in history] == [2, 3, 4]

    bus.clear_history()
    assert bus.get_history() == []
