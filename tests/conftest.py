"""Shared fixtures for magic calculator tests."""

from datetime import datetime

import pytest

from magicalc.config.settings import TrickSettings
from magicalc.core.calculator import key_to_event
from magicalc.core.state import Session, TrickStateMachine


@pytest.fixture
def now():
    """2026-02-16 14:18, which encodes to 2161418."""
    return datetime(2026, 2, 16, 14, 18)


@pytest.fixture
def machine():
    return TrickStateMachine(TrickSettings())


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def press(machine, session, now):
    """
    Feed keys to a machine and return the last result.

    Keys are a string of one-character labels or a list of labels
    ("AC" needs the list form).
    """
    def _press(keys, target_session=None, target_machine=None, at=None):
        target_session = target_session or session
        target_machine = target_machine or machine
        result = None
        for key in keys:
            result = target_machine.handle(target_session, key_to_event(key), at or now)
        return result

    return _press
