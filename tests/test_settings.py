"""Tests for pydantic settings."""

import pytest
from pydantic import ValidationError

from magicalc.config.settings import Settings, TrickSettings, get_settings


def test_trick_defaults():
    settings = TrickSettings()
    assert settings.round_to_next_minute is False
    assert settings.negative_magic_policy == "allow"
    assert settings.ready_cue_digits is None


def test_trick_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MAGICALC_TRICK_ROUND_TO_NEXT_MINUTE", "true")
    monkeypatch.setenv("MAGICALC_TRICK_NEGATIVE_MAGIC_POLICY", "refuse")
    monkeypatch.setenv("MAGICALC_TRICK_READY_CUE_DIGITS", "4")

    settings = TrickSettings()
    assert settings.round_to_next_minute is True
    assert settings.negative_magic_policy == "refuse"
    assert settings.ready_cue_digits == 4


def test_invalid_policy_rejected():
    with pytest.raises(ValidationError):
        TrickSettings(negative_magic_policy="ignore")


def test_ready_cue_must_be_positive():
    with pytest.raises(ValidationError):
        TrickSettings(ready_cue_digits=0)


def test_environment_selection(monkeypatch):
    monkeypatch.setenv("MAGICALC_ENV", "console")
    settings = Settings()
    assert settings.is_console
    assert not settings.is_simulator


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
