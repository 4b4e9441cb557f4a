"""
Game system errors
"""


class ConfigurationError(ValueError):
    """Invalid game configuration, raised before the game starts"""


class InvalidTransition(Exception):
    """An operation was requested that the current round phase does not accept"""

    def __init__(self, operation: str, phase, reason: str = None):
        message = f"{operation} not allowed in phase {phase.name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.phase = phase
