"""
pygame Board - draws the four pads, controls and round information
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from audio_system.waveforms import Waveform
from pad_system.events import ControlAction
from pad_system.pads import PAD_BINDINGS, PAD_COUNT

from .interfaces import Board
from .pixel import BLACK, WHITE, Pixel


BACKGROUND = Pixel(24, 24, 28)
PANEL = Pixel(48, 48, 56)
TEXT = Pixel(230, 230, 230)
TEXT_DIM = Pixel(120, 120, 130)
FAILURE = Pixel(170, 30, 30)

IDLE_BRIGHTNESS = 0.35
LIT_BRIGHTNESS = 1.25

# (action, label) in on-screen order
CONTROL_BUTTONS: Tuple[Tuple[ControlAction, str], ...] = (
    (ControlAction.START, "Start [Enter]"),
    (ControlAction.REPLAY, "Replay [Space]"),
    (ControlAction.RESET, "Reset [R]"),
    (ControlAction.RETRY, "Retry [T]"),
)


class PygameBoard(Board):
    """
    Game window rendered with pygame.

    Layout: 2x2 pads on top (pad order follows the q w / a s keys), a row of
    control buttons, then level / high score / waveform and a status line.
    The failure indicator is drawn over everything while shown.
    """

    def __init__(self,
                 logger,
                 width: int = 640,
                 height: int = 760,
                 fullscreen: bool = False,
                 clock: Callable[[], float] = time.monotonic):
        """
        Open the game window.

        Args:
            logger: ClassLogger instance for logging
            width, height: Window size in pixels
            fullscreen: Use the whole screen instead of a window
            clock: Seconds source for flash timing (monotonic)

        Raises:
            pygame.error: If no display is available
        """
        self.logger = logger
        self.width = width
        self.height = height
        self._clock = clock

        pygame.display.init()
        pygame.font.init()
        flags = pygame.FULLSCREEN if fullscreen else 0
        self.screen = pygame.display.set_mode((width, height), flags)
        pygame.display.set_caption("Simon")

        self._font = pygame.font.Font(None, 30)
        self._big_font = pygame.font.Font(None, 56)

        self._lit_until: List[float] = [0.0] * PAD_COUNT
        self._controls_enabled: Dict[ControlAction, bool] = {action: False for action, _ in CONTROL_BUTTONS}
        self._pads_enabled = False
        self._level = 1
        self._high_score = 0
        self._waveform = Waveform.SINE
        self._status = "Connecting to game service..."
        self._failure_visible = False

        self._pad_rects = self._layout_pads()
        self._control_rects = self._layout_controls()

        self.logger.info(f"PygameBoard opened: {width}x{height}{' fullscreen' if fullscreen else ''}")

    def _layout_pads(self) -> List[pygame.Rect]:
        margin = 20
        size = (min(self.width, self.height - 220) - 3 * margin) // 2
        left = (self.width - (2 * size + margin)) // 2
        rects = []
        for index in range(PAD_COUNT):
            row, col = divmod(index, 2)
            rects.append(pygame.Rect(left + col * (size + margin), margin + row * (size + margin), size, size))
        return rects

    def _layout_controls(self) -> Dict[ControlAction, pygame.Rect]:
        top = self._pad_rects[-1].bottom + 20
        count = len(CONTROL_BUTTONS)
        gap = 10
        button_width = (self.width - 40 - gap * (count - 1)) // count
        return {
            action: pygame.Rect(20 + i * (button_width + gap), top, button_width, 44)
            for i, (action, _) in enumerate(CONTROL_BUTTONS)
        }

    # Hit testing (used by PygameInputSource)

    def pad_at(self, position: Tuple[int, int]) -> Optional[int]:
        """Pad index under a click, None if none or pads are disabled"""
        if not self._pads_enabled or self._failure_visible:
            return None
        for index, rect in enumerate(self._pad_rects):
            if rect.collidepoint(position):
                return index
        return None

    def control_at(self, position: Tuple[int, int]) -> Optional[ControlAction]:
        for action, rect in self._control_rects.items():
            if rect.collidepoint(position) and self._controls_enabled[action]:
                return action
        return None

    # Board interface

    def flash_pad(self, pad_index: int, duration_ms: int) -> None:
        self._lit_until[pad_index] = self._clock() + duration_ms / 1000.0

    def set_controls(self, start_enabled: bool, replay_enabled: bool, pads_enabled: bool) -> None:
        self._controls_enabled[ControlAction.START] = start_enabled
        self._controls_enabled[ControlAction.REPLAY] = replay_enabled
        self._controls_enabled[ControlAction.RESET] = True
        self._pads_enabled = pads_enabled

    def set_level(self, level: int) -> None:
        self._level = level

    def set_high_score(self, high_score: int) -> None:
        self._high_score = high_score

    def set_waveform(self, waveform: Waveform) -> None:
        self._waveform = waveform

    def show_failure(self) -> None:
        self._failure_visible = True

    def hide_failure(self) -> None:
        self._failure_visible = False

    def show_status(self, message: str, retry_available: bool = False) -> None:
        self._status = message
        self._controls_enabled[ControlAction.RETRY] = retry_available

    def is_failure_visible(self) -> bool:
        return self._failure_visible

    def render(self) -> None:
        now = self._clock()
        self.screen.fill(BACKGROUND.rgb)

        for index, rect in enumerate(self._pad_rects):
            base = Pixel(PAD_BINDINGS[index].display_color)
            brightness = LIT_BRIGHTNESS if now < self._lit_until[index] else IDLE_BRIGHTNESS
            pygame.draw.rect(self.screen, base.scaled(brightness).rgb, rect, border_radius=24)
            label = self._font.render(PAD_BINDINGS[index].key.upper(), True, BLACK.rgb)
            self.screen.blit(label, label.get_rect(center=rect.center))

        for action, label_text in CONTROL_BUTTONS:
            rect = self._control_rects[action]
            enabled = self._controls_enabled[action]
            pygame.draw.rect(self.screen, PANEL.rgb, rect, border_radius=8)
            label = self._font.render(label_text, True, (TEXT if enabled else TEXT_DIM).rgb)
            self.screen.blit(label, label.get_rect(center=rect.center))

        info_top = self._control_rects[ControlAction.START].bottom + 20
        info = f"Level {self._level}    High score {self._high_score}    Voice {self._waveform.value} [1-4]"
        self.screen.blit(self._font.render(info, True, TEXT.rgb), (20, info_top))
        self.screen.blit(self._font.render(self._status, True, TEXT_DIM.rgb), (20, info_top + 36))

        if self._failure_visible:
            self._render_failure()

        pygame.display.flip()

    def _render_failure(self) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        self.screen.blit(overlay, (0, 0))
        box = pygame.Rect(0, 0, self.width - 80, 180)
        box.center = (self.width // 2, self.height // 2)
        pygame.draw.rect(self.screen, FAILURE.rgb, box, border_radius=16)
        title = self._big_font.render("Wrong sequence!", True, WHITE.rgb)
        hint = self._font.render("Press R (or click Reset) to play again", True, WHITE.rgb)
        self.screen.blit(title, title.get_rect(center=(box.centerx, box.centery - 25)))
        self.screen.blit(hint, hint.get_rect(center=(box.centerx, box.centery + 35)))

    def cleanup(self) -> None:
        pygame.display.quit()
        self.logger.info("PygameBoard closed")
