"""
Hybrid logger - one "simon" logging tree written to the console and to a
per-session log file, with per-class loggers that filter by their own level

Line format: [time] [LEVEL] [Class] message
"""

import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, Mapping, Optional, TextIO

# ANSI colors per level name (console only)
LEVEL_COLORS = {
    'DEBUG': '\033[94m',
    'INFO': '\033[92m',
    'WARNING': '\033[93m',
    'ERROR': '\033[91m',
    'CRITICAL': '\033[95m',
}
RESET_COLOR = '\033[0m'

LINE_FORMAT = '[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s'


class ColoredFormatter(logging.Formatter):
    """Bracketed line format, optionally wrapped in the level's color"""

    def __init__(self, use_colors: bool = False):
        super().__init__(LINE_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        # Records from plain logging calls have no class column
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'
        line = super().format(record)
        color = LEVEL_COLORS.get(record.levelname) if self.use_colors else None
        return f"{color}{line}{RESET_COLOR}" if color else line


class ClassLogger:
    """
    Logger for one component (GameManager, RoundController, ...).

    Messages below the component's own level are dropped before a record is
    built; everything else goes through the shared handlers with the
    component name in the [class] column.
    """

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    def is_enabled_for(self, level: int) -> bool:
        return level >= self.level

    def _emit(self, level: int, message: str, with_traceback: bool = False) -> None:
        if not self.is_enabled_for(level):
            return
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, self.class_name, 0, message, (),
            sys.exc_info() if with_traceback else None
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._emit(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """
        Log an error; with an exception, append its type and the file/line it
        was raised from, plus the traceback when called inside an except block.
        Errors are flushed immediately.
        """
        if exception is not None:
            frames = traceback.extract_tb(exception.__traceback__)
            where = f"{frames[-1].filename}:{frames[-1].lineno}" if frames else "unknown"
            message = f"{message} | {type(exception).__name__} at {where}"
        self._emit(logging.ERROR, message, with_traceback=exception is not None and sys.exc_info()[0] is not None)
        self.flush()

    def critical(self, message: str) -> None:
        self._emit(logging.CRITICAL, message)
        self.flush()

    def create_class_logger(self, class_name: str, level: Optional[int] = None) -> 'ClassLogger':
        """
        Create a sibling logger that writes through the same handlers.

        Args:
            class_name: Name shown in the [class] column
            level: Minimum level, defaults to this logger's level

        Returns:
            ClassLogger sharing this logger's output
        """
        return ClassLogger(self.main_logger, class_name, self.level if level is None else level)

    def flush(self) -> None:
        """Flush all handlers (used before shutdown and after errors)"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()


class HybridLogger:
    """
    Owns the handlers of the game's logging tree and hands out ClassLoggers.

    Example:
        hybrid = HybridLogger("simon", log_dir="logs")
        logger = hybrid.get_class_logger("RoundController", logging.DEBUG)
        ...
        hybrid.cleanup()
    """

    def __init__(self,
                 name: str = "simon",
                 log_dir: Optional[str] = "logs",
                 console: bool = True,
                 stream: Optional[TextIO] = None,
                 level_overrides: Optional[Mapping[str, int]] = None):
        """
        Args:
            name: Logger tree name, also the log file prefix
            log_dir: Directory for the session log file, None for console only
            console: Write to the console stream
            stream: Console stream, defaults to stdout (colored only on a TTY)
            level_overrides: Per-class levels that win over get_class_logger()'s level
        """
        self.name = name
        self.log_dir = log_dir
        self.log_file: Optional[Path] = None
        self.level_overrides: Dict[str, int] = dict(level_overrides or {})
        self.class_loggers: Dict[str, ClassLogger] = {}

        self.main_logger = logging.getLogger(name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        self.main_logger.handlers.clear()

        if console:
            self.main_logger.addHandler(self._console_handler(stream or sys.stdout))
        if log_dir:
            self.main_logger.addHandler(self._file_handler(Path(log_dir)))

    @staticmethod
    def _console_handler(stream: TextIO) -> logging.Handler:
        handler = logging.StreamHandler(stream)
        is_tty = getattr(stream, "isatty", None)
        handler.setFormatter(ColoredFormatter(use_colors=bool(is_tty and is_tty())))
        return handler

    def _file_handler(self, log_dir: Path) -> logging.Handler:
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = log_dir / f"{self.name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        handler = logging.FileHandler(self.log_file, encoding="utf-8")
        handler.setFormatter(ColoredFormatter(use_colors=False))
        return handler

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get (or create) the logger for one component.

        Args:
            class_name: Name shown in the [class] column
            level: Minimum level unless level_overrides names this class

        Returns:
            ClassLogger: The same instance for repeated calls with one name
        """
        logger = self.class_loggers.get(class_name)
        if logger is None:
            logger = ClassLogger(self.main_logger, class_name, self.level_overrides.get(class_name, level))
            self.class_loggers[class_name] = logger
        return logger

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        """Logger with class_name="Main" """
        return self.get_class_logger("Main", level)

    def cleanup(self) -> None:
        """Flush and close every handler"""
        for handler in list(self.main_logger.handlers):
            with suppress(OSError, ValueError):
                handler.flush()
                handler.close()
            self.main_logger.removeHandler(handler)
