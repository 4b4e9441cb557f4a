"""
Mock Tone Controller - No-op implementation for running without audio hardware
"""

from typing import List, Sequence

from .waveforms import Waveform


class MockToneController:
    """
    Mock implementation of ToneController that performs no audio operations.

    Records the pads it was asked to play so headless runs and tests can
    see what would have sounded.
    """

    def __init__(self, frequencies: Sequence[float], logger, waveform: Waveform = Waveform.SINE):
        self.frequencies: List[float] = list(frequencies)
        self.logger = logger
        self.waveform = waveform
        self.played: List[int] = []

        self.logger.info("🔇 MockToneController initialized (audio disabled)")

    def set_waveform(self, waveform: Waveform) -> None:
        self.waveform = waveform
        self.logger.info(f"Mock: waveform changed to {waveform.value}")

    def play_tone(self, pad_index: int) -> None:
        """Mock: record the pad, no sound"""
        if not 0 <= pad_index < len(self.frequencies):
            raise IndexError(f"No tone for pad {pad_index}")
        self.played.append(pad_index)
        self.logger.debug(
            f"Mock: tone pad={pad_index} {self.frequencies[pad_index]:.2f}Hz ({self.waveform.value})"
        )

    def cleanup(self) -> None:
        self.logger.info("Mock: tone controller cleaned up")
