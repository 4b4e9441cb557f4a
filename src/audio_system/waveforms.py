"""
Waveform synthesis for pad tones
"""

import enum
import math
from array import array


class Waveform(enum.Enum):
    """Oscillator shapes the player can pick for the pad voice"""
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"

    @classmethod
    def from_name(cls, name: str) -> 'Waveform':
        try:
            return cls(name.lower())
        except ValueError:
            options = ", ".join(w.value for w in cls)
            raise ValueError(f"Unknown waveform {name!r} (choose from: {options})") from None


def sample_at(waveform: Waveform, phase: float) -> float:
    """
    Value of one oscillator period at the given phase.

    Args:
        waveform: Oscillator shape
        phase: Position in the period, 0.0 <= phase < 1.0

    Returns:
        Amplitude in -1.0..1.0
    """
    if waveform is Waveform.SINE:
        return math.sin(2.0 * math.pi * phase)
    if waveform is Waveform.SQUARE:
        return 1.0 if phase < 0.5 else -1.0
    if waveform is Waveform.TRIANGLE:
        return 4.0 * phase - 1.0 if phase < 0.5 else 3.0 - 4.0 * phase
    if waveform is Waveform.SAWTOOTH:
        return 2.0 * phase - 1.0
    raise ValueError(f"Unsupported waveform: {waveform}")


def synthesize(frequency_hz: float,
               waveform: Waveform,
               duration_ms: int,
               sample_rate: int = 44100,
               amplitude: float = 0.5,
               fade_ms: int = 10) -> array:
    """
    Render a mono tone as signed 16-bit samples.

    A linear fade in/out of fade_ms (capped at half the tone) keeps the
    start and end free of clicks.

    Args:
        frequency_hz: Tone frequency
        waveform: Oscillator shape
        duration_ms: Tone length in milliseconds
        sample_rate: Samples per second
        amplitude: Peak level 0.0..1.0

    Returns:
        array('h') with sample_rate * duration_ms / 1000 samples
    """
    if frequency_hz <= 0:
        raise ValueError(f"Frequency must be positive, got {frequency_hz}")
    if not 0.0 <= amplitude <= 1.0:
        raise ValueError(f"Amplitude must be 0.0-1.0, got {amplitude}")

    sample_count = int(sample_rate * duration_ms / 1000)
    fade_samples = min(int(sample_rate * fade_ms / 1000), sample_count // 2)
    peak = 32767 * amplitude

    samples = array('h', bytes(2 * sample_count))
    for n in range(sample_count):
        phase = (frequency_hz * n / sample_rate) % 1.0
        envelope = 1.0
        if fade_samples:
            if n < fade_samples:
                envelope = n / fade_samples
            elif n >= sample_count - fade_samples:
                envelope = (sample_count - 1 - n) / fade_samples
        samples[n] = int(peak * envelope * sample_at(waveform, phase))
    return samples
