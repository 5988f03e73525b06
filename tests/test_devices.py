"""Tests for orientation classification and simulated devices."""

import pytest

from magicalc.core.haptics import HapticIntent
from magicalc.hardware.orientation import GravityOrientationSensor, classify_facing_down
from magicalc.simulator.mock_hardware.input import (
    SimulatedHaptics,
    SimulatedKeypad,
    SimulatedOrientation,
)


@pytest.mark.parametrize("z,expected", [
    (9.8, False),
    (0.0, False),
    (-6.8, False),
    (-7.0, True),
    (-9.8, True),
])
def test_classify_facing_down(z, expected):
    assert classify_facing_down(z) is expected


def test_gravity_sensor_notifies_only_on_change():
    sensor = GravityOrientationSensor()
    changes = []
    unsubscribe = sensor.on_change(changes.append)

    for z in (9.8, 9.5, -9.8, -9.6, 9.8):
        sensor.update(z)

    assert changes == [True, False]
    assert not sensor.is_facing_down()

    unsubscribe()
    sensor.update(-9.8)
    assert changes == [True, False]


def test_simulated_orientation_toggle():
    orientation = SimulatedOrientation()
    changes = []
    orientation.on_change(changes.append)

    assert orientation.toggle() is True
    assert orientation.toggle() is False
    orientation.set(False)

    assert changes == [True, False]


def test_simulated_haptics_records_history():
    haptics = SimulatedHaptics(history_limit=2)
    assert haptics.last is None

    haptics.emit(HapticIntent.LIGHT)
    haptics.emit(HapticIntent.HEAVY)
    haptics.emit(HapticIntent.NOTIFICATION_SUCCESS)

    assert haptics.history == [HapticIntent.HEAVY, HapticIntent.NOTIFICATION_SUCCESS]
    assert haptics.last == HapticIntent.NOTIFICATION_SUCCESS


@pytest.mark.parametrize("typed,key", [
    ("7", "7"),
    ("+", "+"),
    ("=", "="),
    ("\r", "="),
    ("\b", "⌫"),
    ("c", "AC"),
    ("C", "AC"),
    ("*", "×"),
    ("AC", "AC"),
    ("x", None),
])
def test_keypad_resolves_typed_characters(typed, key):
    assert SimulatedKeypad().resolve(typed) == key


def test_keypad_positions():
    keypad = SimulatedKeypad()
    assert keypad.get_key_position("AC") == (0, 0)
    assert keypad.get_key_position("=") == (4, 3)
    assert keypad.get_key_position("?") is None
