"""
Service Client Package

HTTP client for the external game-state service, the snapshot it returns,
and the worker that keeps network calls off the game loop.
"""

from .errors import SequenceMismatch, StateServiceError, TransportError
from .snapshot import GameStateSnapshot
from .state_client import DEFAULT_SERVICE_URL, GameStateClient
from .worker import ServiceWorker

__all__ = [
    "SequenceMismatch",
    "StateServiceError",
    "TransportError",
    "GameStateSnapshot",
    "DEFAULT_SERVICE_URL",
    "GameStateClient",
    "ServiceWorker",
]
