"""
Line-oriented console shell.

Reads key presses from a text stream and prints the display after each
line. Useful for rehearsing the trick over SSH or in scripts.

Commands (one per line, or keys typed together on one line):
    4821+17=   Keys, processed left to right
    ac         Clear
    del        Backspace
    f / u      Screen face down / face up
    tap        Tap the screen surface
    q          Quit
"""

import logging
import sys
from typing import TextIO

from ..core.calculator import MagicCalculator
from ..core.state import HandleResult, TrickStateMachine
from .mock_hardware.input import SimulatedHaptics, SimulatedKeypad, SimulatedOrientation

logger = logging.getLogger(__name__)

WORD_COMMANDS = {
    "ac": "AC",
    "del": "⌫",
}


class ConsoleShell:
    """Console host shell around a MagicCalculator."""

    PROMPT = "> "

    def __init__(
        self,
        calculator: MagicCalculator | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        machine: TrickStateMachine | None = None,
    ) -> None:
        self.orientation = SimulatedOrientation()
        self.haptics = SimulatedHaptics()
        self.keypad = SimulatedKeypad()
        self.calculator = calculator or MagicCalculator(
            machine=machine,
            orientation=self.orientation,
            haptics=self.haptics,
        )
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def execute(self, line: str) -> list[HandleResult] | None:
        """
        Execute one line of input.

        Returns:
            Results of the handled events, or None when the line quits
        """
        command = line.strip()
        lowered = command.lower()

        if lowered in ("q", "quit", "exit"):
            return None
        if lowered == "f":
            self._set_facing_down(True)
            return []
        if lowered == "u":
            self._set_facing_down(False)
            return []
        if lowered == "tap":
            return [self.calculator.tap_screen()]
        if lowered in WORD_COMMANDS:
            return [self.calculator.press(WORD_COMMANDS[lowered])]

        results = []
        for char in command:
            if char.isspace():
                continue
            key = self.keypad.resolve(char)
            if key is None:
                logger.warning(f"Ignoring unknown key: {char!r}")
                continue
            results.append(self.calculator.press(key))
        return results

    def _set_facing_down(self, facing_down: bool) -> None:
        self.orientation.set(facing_down)
        self.calculator.set_facing_down(facing_down)

    def run(self) -> None:
        """Read lines until EOF or quit."""
        logger.info("Console shell started")
        self.stdout.write(f"{self.calculator.current_display_text()}\n")

        while True:
            self.stdout.write(self.PROMPT)
            self.stdout.flush()

            line = self.stdin.readline()
            if not line:
                break

            results = self.execute(line)
            if results is None:
                break

            haptic = results[-1].haptic_intent.name if results else "-"
            mode = " [blind]" if self.calculator.is_blind_input_mode() else ""
            self.stdout.write(
                f"{self.calculator.current_display_text()}"
                f"  ({haptic}){mode}\n"
            )

        logger.info("Console shell stopped")
