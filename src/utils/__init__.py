"""
Utilities package - logging and loop timing shared by the Simon game client
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter
from .once_in_ms import OnceInMs
from .scheduler import FrameScheduler, TimerHandle

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
    'OnceInMs',
    'FrameScheduler',
    'TimerHandle'
]
