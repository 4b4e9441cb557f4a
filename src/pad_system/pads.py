"""
Pad bindings - one table ties each pad index to its color, key and tone
"""

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


class PadColor(enum.Enum):
    """The four pad colors; values are the names used on the wire"""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"

    @classmethod
    def from_name(cls, name: str) -> 'PadColor':
        """
        Parse a color name as sent by the game-state service.

        Raises:
            ValueError: If name is not one of the four pad colors
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown pad color: {name!r}") from None

    @property
    def index(self) -> int:
        return color_to_index(self)


@dataclass(frozen=True)
class PadBinding:
    """Everything bound to one pad position"""
    color: PadColor
    key: str
    note: str
    frequency_hz: float
    display_color: int  # 0xRRGGBB


# Position in this tuple IS the pad index. Add a pad by adding a row here.
PAD_BINDINGS: Tuple[PadBinding, ...] = (
    PadBinding(PadColor.RED,    key="q", note="C4", frequency_hz=261.63, display_color=0xD62828),
    PadBinding(PadColor.YELLOW, key="w", note="D4", frequency_hz=293.66, display_color=0xE9C21B),
    PadBinding(PadColor.GREEN,  key="a", note="E4", frequency_hz=329.63, display_color=0x2A9D3F),
    PadBinding(PadColor.BLUE,   key="s", note="F4", frequency_hz=349.23, display_color=0x1D5FD1),
)

PAD_COUNT = len(PAD_BINDINGS)

_INDEX_BY_COLOR: Dict[PadColor, int] = {b.color: i for i, b in enumerate(PAD_BINDINGS)}
_INDEX_BY_KEY: Dict[str, int] = {b.key: i for i, b in enumerate(PAD_BINDINGS)}


def color_to_index(color: PadColor) -> int:
    return _INDEX_BY_COLOR[color]


def index_to_color(index: int) -> PadColor:
    """
    Raises:
        IndexError: If index is outside 0..PAD_COUNT-1
    """
    if not 0 <= index < PAD_COUNT:
        raise IndexError(f"Pad index {index} out of range (0-{PAD_COUNT - 1})")
    return PAD_BINDINGS[index].color


def binding_for(color: PadColor) -> PadBinding:
    return PAD_BINDINGS[color_to_index(color)]


def key_to_index(key: str) -> Optional[int]:
    """Pad index bound to a keyboard key (case-insensitive), None if unbound"""
    if not key:
        return None
    return _INDEX_BY_KEY.get(key.lower())


def colors_to_names(colors: Iterable[PadColor]) -> List[str]:
    return [color.value for color in colors]


def names_to_colors(names: Iterable[str]) -> List[PadColor]:
    return [PadColor.from_name(name) for name in names]
