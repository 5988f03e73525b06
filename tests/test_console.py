"""Tests for the console shell."""

import io
from datetime import datetime

from magicalc.core.calculator import MagicCalculator
from magicalc.core.state import TrickState
from magicalc.simulator.console import ConsoleShell

SHOW_TIME = datetime(2026, 2, 16, 14, 18)


def make_shell(script=""):
    stdout = io.StringIO()
    shell = ConsoleShell(
        calculator=MagicCalculator(clock=lambda: SHOW_TIME),
        stdin=io.StringIO(script),
        stdout=stdout,
    )
    return shell, stdout


def test_execute_processes_keys_left_to_right():
    shell, _ = make_shell()
    results = shell.execute("4821+17=")
    assert len(results) == 8
    assert results[-1].display_text == "4,838"


def test_execute_skips_unknown_characters():
    shell, _ = make_shell()
    results = shell.execute("4 ? 2")
    assert len(results) == 2
    assert shell.calculator.current_display_text() == "42"


def test_word_commands():
    shell, _ = make_shell()
    shell.execute("48")
    shell.execute("del")
    assert shell.calculator.current_display_text() == "4"
    shell.execute("ac")
    assert shell.calculator.current_display_text() == "0"


def test_face_down_and_tap():
    shell, _ = make_shell()
    shell.execute("4821+17=+")
    assert shell.execute("f") == []
    assert shell.calculator.is_blind_input_mode()

    results = shell.execute("tap")
    assert results[0].display_text == "4,838+2"

    shell.execute("u")
    assert not shell.calculator.is_blind_input_mode()


def test_quit_returns_none():
    shell, _ = make_shell()
    assert shell.execute("q") is None


def test_run_prints_display_after_each_line():
    script = "4821+17=+\nf\ntap\ntap\ntap\ntap\ntap\ntap\ntap\nu\n=\nq\n"
    shell, stdout = make_shell(script)
    shell.run()

    output = stdout.getvalue()
    assert "4,838+2156580  (NOTIFICATION_SUCCESS) [blind]" in output
    assert "2,161,418  (NOTIFICATION_SUCCESS)" in output
    assert shell.calculator.state == TrickState.SHOW_FINAL_RESULT


def test_run_stops_at_end_of_input():
    shell, stdout = make_shell("12\n")
    shell.run()
    assert stdout.getvalue().splitlines()[-1] == "> "
