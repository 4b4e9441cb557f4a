"""
Terminal keyboard input source for headless play
"""

import os
import select
import sys
import termios
import tty
from typing import Iterator, List, Optional, TextIO

from .events import InputEvent, event_for_key
from .interfaces import IInputSource

ESC = "\x1b"


def split_keys(text: str) -> Iterator[str]:
    """
    Split terminal input into keys.

    ANSI escape sequences (ESC [ ... final byte, or ESC O x) come out whole,
    so arrow and function keys are not read as a bare Esc.
    """
    i = 0
    while i < len(text):
        if text[i] != ESC or i + 1 >= len(text) or text[i + 1] not in "[O":
            yield text[i]
            i += 1
            continue

        end = i + 2
        if text[i + 1] == "[":
            # Parameter and intermediate bytes, then one final byte in 0x40-0x7E
            while end < len(text) and "\x20" <= text[end] <= "\x3f":
                end += 1
        end = min(end + 1, len(text))
        yield text[i:end]
        i = end


class KeyboardInputSource(IInputSource):
    """
    Raw-mode terminal keyboard source.

    Reads single key presses from stdin without blocking (select with zero
    timeout), so it works over SSH and without a display. Keys are translated
    with event_for_key(): q/w/a/s pads, Enter start, Space replay, r reset,
    t retry, 1-4 waveform, Esc quit. Arrow and function keys are ignored.

    Example:
        source = KeyboardInputSource(logger)
        source.setup()
        for event in source.poll_events():
            ...
        source.cleanup()
    """

    def __init__(self, logger, stream: Optional[TextIO] = None):
        """
        Args:
            logger: ClassLogger instance for logging
            stream: Input stream, defaults to sys.stdin
        """
        self._logger = logger
        self._stream = stream if stream is not None else sys.stdin
        self._original_terminal_settings = None
        self._raw_mode_enabled = False

    def _check_stream_available(self) -> bool:
        if not self._stream.isatty():
            return False
        try:
            select.select([self._stream], [], [], 0)
        except (OSError, ValueError):
            return False
        return True

    def _enable_raw_mode(self) -> None:
        self._original_terminal_settings = termios.tcgetattr(self._stream)
        tty.setcbreak(self._stream.fileno())
        self._raw_mode_enabled = True

    def _disable_raw_mode(self) -> None:
        if self._raw_mode_enabled and self._original_terminal_settings:
            termios.tcsetattr(
                self._stream.fileno(),
                termios.TCSADRAIN,
                self._original_terminal_settings
            )
            self._raw_mode_enabled = False

    def setup(self) -> None:
        """
        Raises:
            RuntimeError: If stdin is not an interactive terminal
        """
        if not self._check_stream_available():
            self._logger.error("Keyboard input not available (stdin is not a TTY)")
            raise RuntimeError("Keyboard input not available")

        try:
            self._enable_raw_mode()
        except termios.error as e:
            self._logger.error("Could not enable raw terminal mode", exception=e)
            raise RuntimeError("Failed to enable raw terminal mode") from e

        self._logger.info("Keyboard input ready: pads q/w/a/s, Enter start, Space replay, "
                          "r reset, t retry, 1-4 waveform, Esc quit")

    def _read_available_keys(self) -> str:
        # Unbuffered: select() only reports what is still in the fd
        chunks = []
        fd = self._stream.fileno()
        while select.select([fd], [], [], 0)[0]:
            chunk = os.read(fd, 64)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks).decode("utf-8", errors="ignore")

    def poll_events(self) -> List[InputEvent]:
        events: List[InputEvent] = []
        for key in split_keys(self._read_available_keys()):
            if len(key) > 1:
                self._logger.debug(f"Ignoring escape sequence {key!r}")
                continue
            event = event_for_key(key)
            if event is None:
                self._logger.debug(f"Ignoring unbound key {key!r}")
                continue
            events.append(event)
        return events

    def cleanup(self) -> None:
        """Restore terminal settings"""
        try:
            self._disable_raw_mode()
        except termios.error as e:
            self._logger.warning(f"Could not restore terminal settings: {e}")
