"""
Main simulator window using pygame.

Provides a desktop stand-in for the phone: a calculator face, a face-down
toggle in place of the gravity sensor and an on-screen haptic indicator
in place of the vibration motor.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..config.settings import SimulatorSettings
from ..core.calculator import MagicCalculator
from ..core.events import EventBus, EventType, Event, tick_event
from ..core.haptics import HapticIntent
from ..core.state import TrickStateMachine
from .mock_hardware.input import SimulatedHaptics, SimulatedKeypad, SimulatedOrientation

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 420
    height: int = 760
    title: str = "Magic Calculator"
    fullscreen: bool = False
    fps: int = 30

    # Keypad geometry
    key_gap: int = 12
    margin: int = 16

    # Colors
    bg_color: tuple[int, int, int] = (0, 0, 0)
    number_color: tuple[int, int, int] = (51, 51, 51)
    operator_color: tuple[int, int, int] = (255, 149, 0)
    function_color: tuple[int, int, int] = (166, 166, 166)
    text_color: tuple[int, int, int] = (255, 255, 255)
    seconds_color: tuple[int, int, int] = (51, 51, 51)
    accent_color: tuple[int, int, int] = (100, 150, 255)

    @classmethod
    def from_settings(cls, settings: SimulatorSettings) -> "WindowConfig":
        return cls(
            width=settings.window_width,
            height=settings.window_height,
            title=settings.title,
            fullscreen=settings.fullscreen,
            fps=settings.fps,
        )


HAPTIC_COLORS = {
    HapticIntent.LIGHT: (90, 90, 110),
    HapticIntent.HEAVY: (231, 76, 60),
    HapticIntent.NOTIFICATION_SUCCESS: (46, 204, 113),
    HapticIntent.NOTIFICATION_WARNING: (241, 196, 15),
}

# How long the haptic indicator stays lit, in frames
HAPTIC_FLASH_FRAMES = 8


class SimulatorWindow:
    """
    Calculator simulator window.

    Keyboard Mapping:
        0-9: Digit keys
        + / =, RETURN: Plus / equals
        BACKSPACE: Delete last digit
        C: AC (clear)
        F: Flip the phone (toggle face-down)
        SPACE: Tap the screen surface (blind tap)
        D: Toggle debug overlay
        S: Capture screenshot
        ESC / Q: Exit simulator

    Mouse clicks hit keypad buttons; in blind input mode a click anywhere
    counts as a screen tap.
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        calculator: MagicCalculator | None = None,
        event_bus: EventBus | None = None,
        machine: TrickStateMachine | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        # Virtual devices
        self.orientation = SimulatedOrientation()
        self.haptics = SimulatedHaptics()
        self.keypad = SimulatedKeypad()

        self.calculator = calculator or MagicCalculator(
            machine=machine,
            orientation=self.orientation,
            haptics=self.haptics,
            event_bus=self.event_bus,
        )

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False

        # Key rects, calculated on init
        self._key_rects: dict[str, pygame.Rect] = {}
        self._display_rect: pygame.Rect | None = None

        # Fonts
        self._display_font: pygame.font.Font | None = None
        self._key_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Haptic indicator
        self._last_haptic: HapticIntent | None = None
        self._haptic_frames = 0
        self._last_second = -1

        self.event_bus.subscribe(EventType.HAPTIC, self._on_haptic)

        logger.info("SimulatorWindow created")

    def _on_haptic(self, event: Event) -> None:
        self._last_haptic = event.data.get("intent")
        self._haptic_frames = HAPTIC_FLASH_FRAMES

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._display_font = pygame.font.SysFont("Helvetica", 72)
        self._key_font = pygame.font.SysFont("Helvetica", 32)
        self._small_font = pygame.font.SysFont("Menlo", 14)

        self._calculate_layout()

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Calculate positions for the display and keypad."""
        w, h = self.config.width, self.config.height
        gap, margin = self.config.key_gap, self.config.margin

        cols = len(self.keypad.LAYOUT[0])
        rows = len(self.keypad.LAYOUT)
        key_size = (w - 2 * margin - (cols - 1) * gap) // cols
        grid_h = rows * key_size + (rows - 1) * gap
        grid_top = h - margin - grid_h

        self._key_rects = {}
        for row_idx, row in enumerate(self.keypad.LAYOUT):
            for col_idx, key in enumerate(row):
                x = margin + col_idx * (key_size + gap)
                y = grid_top + row_idx * (key_size + gap)
                self._key_rects[key] = pygame.Rect(x, y, key_size, key_size)

        self._display_rect = pygame.Rect(margin, margin + 24, w - 2 * margin, grid_top - margin - 48)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key == pygame.K_f:
            self.orientation.toggle()
        elif key == pygame.K_SPACE:
            self.calculator.tap_screen()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.calculator.press("=")
        elif key == pygame.K_BACKSPACE:
            self.calculator.press("⌫")
        elif key in range(pygame.K_KP1, pygame.K_KP9 + 1):
            self.calculator.press(str(key - pygame.K_KP1 + 1))
        elif key == pygame.K_KP0:
            self.calculator.press("0")
        elif key == pygame.K_KP_PLUS:
            self.calculator.press("+")
        elif event.unicode:
            resolved = self.keypad.resolve(event.unicode)
            if resolved is not None:
                self.calculator.press(resolved)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        """Route a click to a key, or to the screen surface in blind mode."""
        if self.calculator.is_blind_input_mode():
            self.calculator.tap_screen()
            return

        for key, rect in self._key_rects.items():
            if rect.collidepoint(pos):
                self.calculator.press(key)
                return

    def _key_color(self, key: str) -> tuple[int, int, int]:
        if key in ("AC", "+/−", "%"):
            return self.config.function_color
        if key in ("÷", "×", "−", "+", "="):
            return self.config.operator_color
        return self.config.number_color

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        self._render_seconds()
        self._render_display()
        self._render_keypad()
        self._render_haptic_indicator()
        if self._show_debug:
            self._render_debug_panel()

        pygame.display.flip()

    def _render_seconds(self) -> None:
        """Render the barely visible seconds label."""
        if not self._small_font:
            return
        text = self.calculator.seconds_text()
        surface = self._small_font.render(text, True, self.config.seconds_color)
        self._screen.blit(surface, (self.config.margin + 4, self.config.margin))

    def _render_display(self) -> None:
        """Render the calculator display, shrinking long numbers to fit."""
        if not self._display_font or not self._display_rect:
            return

        rect = self._display_rect
        surface = self._display_font.render(
            self.calculator.current_display_text(), True, self.config.text_color
        )
        if surface.get_width() > rect.width:
            scale = rect.width / surface.get_width()
            surface = pygame.transform.smoothscale(
                surface,
                (rect.width, max(1, int(surface.get_height() * scale)))
            )

        text_rect = surface.get_rect(bottomright=rect.bottomright)
        self._screen.blit(surface, text_rect)

    def _render_keypad(self) -> None:
        if not self._key_font:
            return

        for key, rect in self._key_rects.items():
            pygame.draw.rect(self._screen, self._key_color(key), rect, border_radius=rect.height // 2)
            color = (0, 0, 0) if self._key_color(key) == self.config.function_color else self.config.text_color
            text_surface = self._key_font.render(key, True, color)
            self._screen.blit(text_surface, text_surface.get_rect(center=rect.center))

    def _render_haptic_indicator(self) -> None:
        """Flash a dot in the corner for the last haptic intent."""
        if self._haptic_frames <= 0 or self._last_haptic is None:
            return

        self._haptic_frames -= 1
        color = HAPTIC_COLORS.get(self._last_haptic, self.config.accent_color)
        pygame.draw.circle(self._screen, color, (self.config.width - 24, 24), 8)

    def _render_debug_panel(self) -> None:
        """Render session internals for rehearsing the trick."""
        if not self._small_font:
            return

        session = self.calculator.session
        digits = "".join(str(d) for d in session.magic_digits) or "-"
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"State: {session.state.name}",
            f"Facing down: {session.facing_down}",
            f"Blind input: {self.calculator.is_blind_input_mode()}",
            f"Magic: {digits} ({session.magic_reveal_index}/{len(session.magic_digits)})",
            f"Ready: {session.magic_input_ready}",
            f"Haptic: {self._last_haptic.name if self._last_haptic else '-'}",
            "",
            "F flip  SPACE tap  C clear",
        ]

        y = self.config.margin + 24
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.accent_color)
            self._screen.blit(text_surface, (self.config.margin + 4, y))
            y += 18

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    def _tick_seconds(self) -> None:
        """Emit a cosmetic tick once per wall-clock second."""
        second = self.calculator.clock().second
        if second != self._last_second:
            self._last_second = second
            self.event_bus.emit(tick_event(second))

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()
            self._tick_seconds()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
