"""
Round state and the round phase machine
"""

import enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from pad_system.pads import PadColor
from service_client.snapshot import GameStateSnapshot


class RoundPhase(enum.Enum):
    """
    Phases of a round.

    Transitions:
    - IDLE → AWAITING_INPUT (start)
    - AWAITING_INPUT → VALIDATING (input complete)
    - VALIDATING → ADVANCING_ROUND (accepted) | FAILED (rejected)
    - ADVANCING_ROUND → AWAITING_INPUT (after the advance delay)
    - FAILED → IDLE (acknowledged)
    - any → IDLE (explicit reset)
    """
    IDLE = "idle"
    AWAITING_INPUT = "awaiting_input"
    VALIDATING = "validating"
    ADVANCING_ROUND = "advancing_round"
    FAILED = "failed"


TRANSITIONS: Dict[RoundPhase, FrozenSet[RoundPhase]] = {
    RoundPhase.IDLE: frozenset({RoundPhase.AWAITING_INPUT}),
    RoundPhase.AWAITING_INPUT: frozenset({RoundPhase.VALIDATING, RoundPhase.IDLE}),
    RoundPhase.VALIDATING: frozenset({RoundPhase.ADVANCING_ROUND, RoundPhase.FAILED, RoundPhase.IDLE}),
    RoundPhase.ADVANCING_ROUND: frozenset({RoundPhase.AWAITING_INPUT, RoundPhase.IDLE}),
    RoundPhase.FAILED: frozenset({RoundPhase.IDLE}),
}


def can_transition(current: RoundPhase, new: RoundPhase) -> bool:
    return new in TRANSITIONS[current]


@dataclass
class RoundState:
    """Sequence, player input, level and high score of the current round"""
    sequence: List[PadColor] = field(default_factory=list)
    user_input: List[PadColor] = field(default_factory=list)
    level: int = 1
    high_score: int = 0

    @classmethod
    def from_snapshot(cls, snapshot: GameStateSnapshot) -> 'RoundState':
        """Fresh state from the service, with empty input"""
        return cls(
            sequence=list(snapshot.sequence),
            user_input=[],
            level=snapshot.level,
            high_score=snapshot.high_score,
        )

    def is_input_complete(self) -> bool:
        return len(self.user_input) == len(self.sequence)
