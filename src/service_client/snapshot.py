"""
GameStateSnapshot - parsed game state as returned by the service
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from pad_system.pads import PadColor, names_to_colors

from .errors import TransportError


@dataclass(frozen=True)
class GameStateSnapshot:
    """
    Immutable copy of the service's game state.

    Wire format:
        {"gameState": {"sequence": ["red", ...], "level": 1, "highScore": 0}}
    highScore may be absent (treated as 0).
    """
    sequence: Tuple[PadColor, ...]
    level: int
    high_score: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> 'GameStateSnapshot':
        """
        Parse a response body.

        Raises:
            TransportError: If the body does not match the wire format
        """
        if not isinstance(payload, Mapping) or not isinstance(payload.get("gameState"), Mapping):
            raise TransportError("Malformed game state: missing 'gameState' object")
        state = payload["gameState"]

        names = state.get("sequence")
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise TransportError("Malformed game state: 'sequence' must be a list of color names")
        try:
            sequence = tuple(names_to_colors(names))
        except ValueError as e:
            raise TransportError(f"Malformed game state: {e}") from e

        level = state.get("level")
        if isinstance(level, bool) or not isinstance(level, int) or level < 1:
            raise TransportError(f"Malformed game state: level must be an integer >= 1, got {level!r}")

        high_score = state.get("highScore")
        if high_score is None:
            high_score = 0
        if isinstance(high_score, bool) or not isinstance(high_score, int) or high_score < 0:
            raise TransportError(f"Malformed game state: highScore must be an integer >= 0, got {high_score!r}")

        return cls(sequence=sequence, level=level, high_score=high_score)

