"""
Game System - round phase machine and frame loop for the Simon game client

The round controller owns the round state and talks to the game-state
service; the game manager runs the frame loop around it.
"""

from .errors import ConfigurationError, InvalidTransition
from .round_state import RoundPhase, RoundState, TRANSITIONS, can_transition
from .round_controller import GameRoundController, CUE_SPACING_MS, CUE_FLASH_MS, ADVANCE_DELAY_MS
from .game_manager import GameManager
from .config import GameConfig, ServiceConfig, AudioConfig, DisplayConfig

__all__ = [
    # Errors
    "ConfigurationError",
    "InvalidTransition",
    # Round state
    "RoundPhase",
    "RoundState",
    "TRANSITIONS",
    "can_transition",
    # Controllers
    "GameRoundController",
    "GameManager",
    "CUE_SPACING_MS",
    "CUE_FLASH_MS",
    "ADVANCE_DELAY_MS",
    # Configuration
    "GameConfig",
    "ServiceConfig",
    "AudioConfig",
    "DisplayConfig"
]
