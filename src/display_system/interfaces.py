"""
Board Interface - abstract base class for the game screen
"""

from abc import ABC, abstractmethod

from audio_system.waveforms import Waveform


class Board(ABC):
    """Abstract interface for everything the player sees

    The round controller only talks to this interface: it flashes pads,
    toggles which controls are usable and shows round information. Rendering
    happens once per frame in render(), driven by the GameManager.
    """

    @abstractmethod
    def flash_pad(self, pad_index: int, duration_ms: int) -> None:
        """Light a pad for duration_ms (visual half of a cue)"""
        pass

    @abstractmethod
    def set_controls(self, start_enabled: bool, replay_enabled: bool, pads_enabled: bool) -> None:
        """Reflect which controls the current round phase accepts"""
        pass

    @abstractmethod
    def set_level(self, level: int) -> None:
        pass

    @abstractmethod
    def set_high_score(self, high_score: int) -> None:
        pass

    @abstractmethod
    def set_waveform(self, waveform: Waveform) -> None:
        pass

    @abstractmethod
    def show_failure(self) -> None:
        """Show the failure indicator (wrong sequence) until hide_failure()"""
        pass

    @abstractmethod
    def hide_failure(self) -> None:
        pass

    @abstractmethod
    def show_status(self, message: str, retry_available: bool = False) -> None:
        """Show a one-line status; retry_available offers the retry control"""
        pass

    @abstractmethod
    def render(self) -> None:
        """Draw the current frame"""
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass
