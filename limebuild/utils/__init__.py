"""
Diagnostics for build scripts

Four severity-tagged channels (info, warn, error, bug) plus a command label,
all routed through the ``limebuild`` logger. ``error`` and ``bug`` terminate
the process after emitting their line.
"""

import logging
import sys
from typing import NoReturn, Optional

from ..config import BuildOptions, get_config

LOGGER_NAME = "limebuild"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'CMD': '\033[34m',      # Blue
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'BUG': '\033[35m',      # Magenta
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def __init__(self, fmt: str, datefmt: Optional[str] = None, color: bool = True):
        super().__init__(fmt, datefmt=datefmt)
        self.color = color

    def format(self, record):
        if not (self.color and sys.stdout.isatty()):
            return super().format(record)

        # Work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']
        record.levelname = f"{color}{record.levelname}{reset}"
        return super().format(record)


class Logger:
    """Build script logger"""

    CMD = 22   # Between INFO and WARNING
    BUG = 45   # Between ERROR and CRITICAL

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None, color: bool = True):
        """
        Initialize logger

        Args:
            verbose: Enable debug output
            log_file: Optional log file path
            color: Colour level names on terminals
        """
        self.verbose = verbose

        logging.addLevelName(self.CMD, "CMD")
        logging.addLevelName(self.BUG, "BUG")

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        if verbose:
            fmt = "%(asctime)s [%(levelname)s]: %(message)s"
        else:
            fmt = "[%(levelname)s]: %(message)s"
        console_handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", color=color))
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

    @classmethod
    def from_options(cls, options: BuildOptions) -> "Logger":
        return cls(verbose=options.verbose, log_file=options.log_file, color=options.color)

    def debug(self, msg: str):
        """Log debug message"""
        self.logger.debug(msg)

    def info(self, msg: str):
        """Log info message"""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Log warning message"""
        self.logger.warning(msg)

    def error(self, msg: str):
        """Log error message"""
        self.logger.error(msg)

    def bug(self, msg: str):
        """Log a message about a broken internal invariant"""
        self.logger.log(self.BUG, msg)

    def cmd_label(self, msg: str):
        """Log the command line about to be executed"""
        self.logger.log(self.CMD, msg)

    def flush(self):
        for handler in self.logger.handlers:
            handler.flush()


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Return the diagnostics logger, configuring it from build options on first use"""
    global _logger
    if _logger is None:
        _logger = Logger.from_options(get_config().options)
    return _logger


def configure_logging(options: Optional[BuildOptions] = None) -> Logger:
    """(Re)build the diagnostics logger from explicit options or the loaded config"""
    global _logger
    if options is None:
        options = get_config().options
    _logger = Logger.from_options(options)
    return _logger


def info(message: str) -> None:
    get_logger().info(message)


def warn(message: str) -> None:
    get_logger().warning(message)


def cmd_label(message: str) -> None:
    get_logger().cmd_label(message)


def error(message: str) -> NoReturn:
    """Report a user error and terminate with a nonzero status"""
    sys.stdout.flush()
    logger = get_logger()
    logger.error(message)
    logger.flush()
    raise SystemExit(1)


def bug(message: str) -> NoReturn:
    """Report a violated internal invariant and terminate with a nonzero status"""
    sys.stdout.flush()
    logger = get_logger()
    logger.bug(message)
    logger.flush()
    raise SystemExit(1)


__all__ = [
    "ColoredFormatter", "Logger", "get_logger", "configure_logging",
    "info", "warn", "error", "bug", "cmd_label",
]
