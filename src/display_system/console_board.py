"""
Console Board - headless board that reports through the logger
"""

from typing import List, Optional

from audio_system.waveforms import Waveform
from pad_system.pads import PAD_BINDINGS

from .interfaces import Board


class ConsoleBoard(Board):
    """
    Board for terminal play and tests.

    Every visible change is logged once when it happens; render() draws
    nothing. Current values are kept as attributes so callers can inspect
    what a real screen would show.
    """

    def __init__(self, logger):
        self.logger = logger
        self.flashes: List[int] = []
        self.start_enabled = False
        self.replay_enabled = False
        self.pads_enabled = False
        self.level = 1
        self.high_score = 0
        self.waveform: Optional[Waveform] = None
        self.failure_visible = False
        self.status = ""
        self.retry_available = False

    def flash_pad(self, pad_index: int, duration_ms: int) -> None:
        self.flashes.append(pad_index)
        binding = PAD_BINDINGS[pad_index]
        self.logger.info(f"● {binding.color.value.upper()} ({binding.key}) {binding.note}")

    def set_controls(self, start_enabled: bool, replay_enabled: bool, pads_enabled: bool) -> None:
        self.start_enabled = start_enabled
        self.replay_enabled = replay_enabled
        self.pads_enabled = pads_enabled
        self.logger.debug(f"Controls: start={start_enabled} replay={replay_enabled} pads={pads_enabled}")

    def set_level(self, level: int) -> None:
        if level != self.level:
            self.logger.info(f"Level {level}")
        self.level = level

    def set_high_score(self, high_score: int) -> None:
        if high_score != self.high_score:
            self.logger.info(f"High score {high_score}")
        self.high_score = high_score

    def set_waveform(self, waveform: Waveform) -> None:
        self.waveform = waveform
        self.logger.info(f"Voice: {waveform.value}")

    def show_failure(self) -> None:
        self.failure_visible = True
        self.logger.warning("✖ Wrong sequence! Press r to play again")

    def hide_failure(self) -> None:
        self.failure_visible = False

    def show_status(self, message: str, retry_available: bool = False) -> None:
        if message != self.status or retry_available != self.retry_available:
            suffix = " (press t to retry)" if retry_available else ""
            self.logger.info(f"{message}{suffix}")
        self.status = message
        self.retry_available = retry_available

    def render(self) -> None:
        pass

    def cleanup(self) -> None:
        self.logger.debug("ConsoleBoard closed")
