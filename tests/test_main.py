"""Tests for the entry point."""

import io

import pytest

from magicalc import main as entry
from magicalc.config.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_main_runs_console_shell(monkeypatch, capsys):
    monkeypatch.setenv("MAGICALC_ENV", "console")
    monkeypatch.setattr("sys.stdin", io.StringIO("4+5=\nq\n"))

    entry.main()

    assert "9  (LIGHT)" in capsys.readouterr().out


def test_console_uses_trick_settings(monkeypatch, capsys):
    monkeypatch.setenv("MAGICALC_ENV", "console")
    monkeypatch.setenv("MAGICALC_TRICK_NEGATIVE_MAGIC_POLICY", "refuse")
    monkeypatch.setattr("sys.stdin", io.StringIO("99999999+1=+\nq\n"))

    entry.main()

    assert "100,000,000  (NOTIFICATION_WARNING)" in capsys.readouterr().out
