"""
Run log written to the console and a log file.

Lines look like:
    [Info]: 1th entry added: dog, noun
"""

from enum import Enum
from pathlib import Path
from typing import Optional, TextIO

from ..config import VERBOSE_LOG


class LogType(Enum):
    """Type of message being logged."""
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    NORMAL = "Normal"


def format_line(log_type: LogType, message: str) -> str:
    """Prefix a message with its right-aligned severity."""
    prefix = f"[{log_type.value}]".rjust(10)
    return f"{prefix}: {message}"


class RunLog:
    """
    Writes log lines to stdout and, once opened, to a log file.

    Counts Error lines so the program can report them at exit.
    """

    def __init__(self, path: Optional[str] = None, verbose: bool = VERBOSE_LOG,
                 echo: bool = True):
        self.path = Path(path) if path else None
        self.verbose = verbose
        self.echo = echo
        self.error_count = 0
        self._file: Optional[TextIO] = None

    def open(self) -> 'RunLog':
        """Create (truncate) the log file."""
        if self.path and self._file is None:
            self._file = open(self.path, 'w', encoding='utf-8')
        return self

    def close(self):
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None

    def __enter__(self) -> 'RunLog':
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def log(self, log_type: LogType, message: str):
        if log_type == LogType.ERROR:
            self.error_count += 1

        if log_type == LogType.INFO and not self.verbose:
            return

        line = format_line(log_type, message)
        if self.echo:
            print(line)
        if self._file is not None:
            self._file.write(line + "\n")

    def info(self, message: str):
        self.log(LogType.INFO, message)

    def warning(self, message: str):
        self.log(LogType.WARNING, message)

    def error(self, message: str):
        self.log(LogType.ERROR, message)

    def normal(self, message: str):
        self.log(LogType.NORMAL, message)
