"""
Tone Controller - plays the pad tones through the pygame mixer
"""

from array import array
from typing import Dict, List, Optional, Sequence

import pygame

from .waveforms import Waveform, synthesize


# An eighth note at 120 bpm
DEFAULT_TONE_DURATION_MS = 250


class ToneController:
    """
    Controls pad tone playback for the game.

    Synthesizes one pygame Sound per pad for the current waveform and plays
    it on demand. A waveform's tones are built the first time it is
    selected and reused on later switches.
    """

    def __init__(self,
                 frequencies: Sequence[float],
                 logger,
                 waveform: Waveform = Waveform.SINE,
                 volume: float = 0.6,
                 tone_duration_ms: int = DEFAULT_TONE_DURATION_MS,
                 sample_rate: int = 44100):
        """
        Initialize pygame mixer and build the pad tones.

        Args:
            frequencies: Tone frequency per pad index
            logger: ClassLogger instance for logging
            waveform: Initial oscillator shape
            volume: Playback volume (0.0 to 1.0)
            tone_duration_ms: Length of each tone

        Raises:
            pygame.error: If the audio device cannot be opened
        """
        self.frequencies: List[float] = list(frequencies)
        self.logger = logger
        self.waveform = waveform
        self.volume = volume
        self.tone_duration_ms = tone_duration_ms

        self.mixer = pygame.mixer
        if not self.mixer.get_init():
            self.mixer.init(frequency=sample_rate, size=-16, channels=1)

        # The device may not honour the requested format
        self.sample_rate, _, self.channels = self.mixer.get_init()

        self._tone_cache: Dict[Waveform, Dict[int, pygame.mixer.Sound]] = {}
        self._tones: Dict[int, pygame.mixer.Sound] = self._tones_for(self.waveform)

        self.logger.info(
            f"ToneController ready: {len(self.frequencies)} pads, {self.waveform.value} wave, "
            f"{self.sample_rate}Hz x{self.channels}"
        )

    def _to_device_format(self, samples: array) -> bytes:
        if self.channels == 1:
            return samples.tobytes()
        interleaved = array('h', bytes(2 * len(samples) * self.channels))
        for i, sample in enumerate(samples):
            base = i * self.channels
            for channel in range(self.channels):
                interleaved[base + channel] = sample
        return interleaved.tobytes()

    def _tones_for(self, waveform: Waveform) -> Dict[int, pygame.mixer.Sound]:
        tones = self._tone_cache.get(waveform)
        if tones is not None:
            return tones

        tones = {}
        for pad_index, frequency in enumerate(self.frequencies):
            samples = synthesize(frequency, waveform, self.tone_duration_ms, self.sample_rate)
            sound = pygame.mixer.Sound(buffer=self._to_device_format(samples))
            sound.set_volume(self.volume)
            tones[pad_index] = sound
        self._tone_cache[waveform] = tones
        self.logger.debug(f"Built {len(tones)} {waveform.value} tones")
        return tones

    def set_waveform(self, waveform: Waveform) -> None:
        """Switch the pad voice to a new oscillator shape"""
        if waveform is self.waveform:
            return
        self.waveform = waveform
        self._tones = self._tones_for(waveform)
        self.logger.info(f"Waveform changed to {waveform.value}")

    def play_tone(self, pad_index: int) -> Optional[pygame.mixer.Channel]:
        """
        Play the tone of one pad.

        Returns:
            Channel playing the tone, None if no channel was free
        """
        return self._tones[pad_index].play()

    def cleanup(self) -> None:
        """Stop all tones and release the audio device"""
        if self.mixer.get_init():
            self.mixer.stop()
            self.mixer.quit()
        self._tones = {}
        self._tone_cache.clear()
        self.logger.info("ToneController cleaned up")
