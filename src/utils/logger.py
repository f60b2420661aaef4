"""
Structured category logger

One process-wide Logger; modules bind a category once at import:

    log = get_logger().for_category(LogCategory.DOOR)
    log.info("Door opened", restore_mode="Manual")

Output:
    [14:23:45] DOOR      ✓ Door opened
               └─ restore_mode: Manual

WARN and ERROR go to stderr so they survive `> /dev/null` and show up as
errors in the systemd journal. Colours are switched off automatically when
stdout is not a terminal.
"""

import sys
from datetime import datetime
from typing import List, Optional, TextIO

from models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.HARDWARE: Colors.BRIGHT_BLUE,
    LogCategory.STATE: Colors.BRIGHT_CYAN,
    LogCategory.COLOR: Colors.BRIGHT_MAGENTA,
    LogCategory.TRANSITION: Colors.MAGENTA,
    LogCategory.DOOR: Colors.BRIGHT_YELLOW,
    LogCategory.EVENT: Colors.BRIGHT_MAGENTA,
    LogCategory.RENDER_ENGINE: Colors.MAGENTA,
    LogCategory.AUDIO: Colors.BRIGHT_GREEN,
    LogCategory.AUTOPILOT: Colors.BRIGHT_GREEN,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

# symbol, colour, priority
LEVELS = {
    LogLevel.DEBUG: ('·', Colors.DIM, 0),
    LogLevel.INFO: ('✓', Colors.GREEN, 1),
    LogLevel.WARN: ('⚠', Colors.YELLOW, 2),
    LogLevel.ERROR: ('✗', Colors.RED, 3),
}

DETAIL_INDENT = " " * 11


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Logger:
    """
    Args:
        min_level: Messages below this level are dropped
        use_colors: None = colour only when stdout is a terminal
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: Optional[bool] = None):
        self.min_level = min_level
        self.use_colors = _is_tty(sys.stdout) if use_colors is None else use_colors

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _stream(self, level: LogLevel) -> TextIO:
        return sys.stderr if LEVELS[level][2] >= LEVELS[LogLevel.WARN][2] else sys.stdout

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        exception: Optional[BaseException] = None,
        **details
    ) -> None:
        """
        Print one message plus a detail line per keyword argument.

        `exception` is summarised as a final `error:` detail.
        """
        symbol, level_color, priority = LEVELS[level]
        if priority < LEVELS[self.min_level][2]:
            return

        lines: List[str] = [
            f"{datetime.now():[%H:%M:%S]} "
            f"{self._paint(category.name.ljust(9), CATEGORY_COLORS.get(category, Colors.WHITE))} "
            f"{self._paint(symbol, level_color)} "
            f"{self._paint(message, level_color)}"
        ]

        items = [f"{k}: {v}" for k, v in details.items()]
        if exception is not None:
            items.append(f"error: {type(exception).__name__}: {exception}")
        for i, item in enumerate(items):
            branch = "└─" if i == len(items) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {item}")

        stream = self._stream(level)
        stream.write("\n".join(lines) + "\n")
        stream.flush()

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed category"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self.category = category

    def debug(self, message: str, **kw): self._base.log(self.category, message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self._base.log(self.category, message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self._base.log(self.category, message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self._base.log(self.category, message, LogLevel.ERROR, **kw)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: Optional[bool] = None) -> None:
    """
    Reconfigure the singleton in place (after config.yaml is read).

    Bound loggers created at import time keep pointing at the same instance.
    """
    _logger.min_level = min_level
    _logger.use_colors = _is_tty(sys.stdout) if use_colors is None else use_colors
