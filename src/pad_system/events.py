"""
Input events produced by input sources and consumed by the GameManager
"""

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Union

from audio_system.waveforms import Waveform

from .pads import key_to_index


class ControlAction(enum.Enum):
    """Non-pad controls of the game screen"""
    START = "start"
    REPLAY = "replay"
    RESET = "reset"      # also acknowledges a failed round
    RETRY = "retry"
    QUIT = "quit"


@dataclass(frozen=True)
class PadPressed:
    pad_index: int


@dataclass(frozen=True)
class ControlPressed:
    action: ControlAction


@dataclass(frozen=True)
class WaveformSelected:
    waveform: Waveform


InputEvent = Union[PadPressed, ControlPressed, WaveformSelected]


CONTROL_KEYS: Dict[str, ControlAction] = {
    "\r": ControlAction.START,
    "\n": ControlAction.START,
    " ": ControlAction.REPLAY,
    "r": ControlAction.RESET,
    "t": ControlAction.RETRY,
    "\x1b": ControlAction.QUIT,  # Esc
    "\x03": ControlAction.QUIT,  # Ctrl+C in raw terminal mode
}

WAVEFORM_KEYS: Dict[str, Waveform] = {
    "1": Waveform.SINE,
    "2": Waveform.SQUARE,
    "3": Waveform.TRIANGLE,
    "4": Waveform.SAWTOOTH,
}


def event_for_key(key: str) -> Optional[InputEvent]:
    """
    Translate a typed character into an input event.

    Pad keys win over controls; unknown keys give None.
    """
    if not key:
        return None

    pad_index = key_to_index(key)
    if pad_index is not None:
        return PadPressed(pad_index)

    action = CONTROL_KEYS.get(key.lower() if key.isalpha() else key)
    if action is not None:
        return ControlPressed(action)

    waveform = WAVEFORM_KEYS.get(key)
    if waveform is not None:
        return WaveformSelected(waveform)

    return None
