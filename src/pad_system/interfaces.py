"""
Abstract interface for input sources
"""

from abc import ABC, abstractmethod
from typing import List

from .events import InputEvent


class IInputSource(ABC):
    """
    Abstract interface for anything that produces player input.

    Implementations: pygame window events, raw terminal keyboard, scripted
    sources in tests. Polled once per frame by the GameManager.
    """

    @abstractmethod
    def setup(self) -> None:
        """Initialize the input device/resources"""
        pass

    @abstractmethod
    def poll_events(self) -> List[InputEvent]:
        """
        Return all input events that arrived since the last poll (non-blocking).

        Returns:
            Events in arrival order, empty list if none
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release input resources (restore terminal, etc.)"""
        pass
