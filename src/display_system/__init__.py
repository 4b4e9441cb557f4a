"""
Display System - what the player sees

- Pixel: packed RGB color with brightness helpers
- Board: abstract game screen used by the round controller
- PygameBoard: windowed pygame implementation
- ConsoleBoard: headless implementation that reports through the logger
"""

from .pixel import Pixel
from .interfaces import Board
from .console_board import ConsoleBoard

__all__ = ['Pixel', 'Board', 'ConsoleBoard']
