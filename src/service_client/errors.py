"""
Errors raised by the game-state service client
"""


class StateServiceError(Exception):
    """Base class for game-state service failures"""


class TransportError(StateServiceError):
    """Service unreachable, timed out, failed, or answered with a malformed body"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class SequenceMismatch(StateServiceError):
    """The service rejected the submitted sequence (wrong input)"""
