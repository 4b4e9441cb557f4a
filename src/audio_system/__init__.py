"""
Audio System Module

Waveform synthesis and pad tone playback for the Simon game client.
"""

from .waveforms import Waveform, sample_at, synthesize
from .tone_controller import ToneController, DEFAULT_TONE_DURATION_MS
from .mock_tone_controller import MockToneController

__all__ = [
    'Waveform',
    'sample_at',
    'synthesize',
    'ToneController',
    'DEFAULT_TONE_DURATION_MS',
    'MockToneController'
]
