"""
Pad System Package

Pad bindings (color, key, tone per pad) and the input sources that turn
keyboard/mouse activity into game input events.
"""

from .pads import (
    PAD_BINDINGS,
    PAD_COUNT,
    PadBinding,
    PadColor,
    binding_for,
    color_to_index,
    colors_to_names,
    index_to_color,
    key_to_index,
    names_to_colors,
)
from .events import ControlAction, ControlPressed, InputEvent, PadPressed, WaveformSelected, event_for_key
from .interfaces import IInputSource

__all__ = [
    "PAD_BINDINGS",
    "PAD_COUNT",
    "PadBinding",
    "PadColor",
    "binding_for",
    "color_to_index",
    "colors_to_names",
    "index_to_color",
    "key_to_index",
    "names_to_colors",
    "ControlAction",
    "ControlPressed",
    "InputEvent",
    "PadPressed",
    "WaveformSelected",
    "event_for_key",
    "IInputSource",
]
