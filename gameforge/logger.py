"""Levelled logging to the console and an optional log file, plus assertions."""

from __future__ import annotations

import os
import sys
import traceback
from enum import IntEnum
from typing import ClassVar, TextIO

from gameforge.filesystem import File, FileMode, open_file
from gameforge.strings import format_string

LOG_FILE_PATH = "log.txt"
END_OF_LOG = "-------------------END OF LOG---------------------\n"
ASSERTION_FORMAT = "Assertion failure: %s, message: '%s', in file: %s, line: %d"


class LogLevel(IntEnum):
    """Severity of a log message; lower is more severe."""

    FATAL = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


_PREFIXES = {
    LogLevel.FATAL: "[FATAL]: ",
    LogLevel.ERROR: "[ERROR]: ",
    LogLevel.WARN: "[WARN]: ",
    LogLevel.INFO: "[INFO]: ",
    LogLevel.DEBUG: "[DEBUG]: ",
    LogLevel.TRACE: "[TRACE]: ",
}


class AssertionFailure(AssertionError):
    """Raised by :func:`ensure` when its condition does not hold."""

    def __init__(self, expression: str, message: str, file: str, line: int) -> None:
        super().__init__(format_string(ASSERTION_FORMAT, expression, message, file, line))
        self.expression = expression
        self.message = message
        self.file = file
        self.line = line


def format_log_level(text: str, level: LogLevel) -> str:
    """Prefix ``text`` with its level tag and end it with a newline."""
    return f"{_PREFIXES[LogLevel(level)]}{text}\n"


class Logger:
    """Writes levelled messages to the console and, optionally, to a file.

    FATAL and ERROR go to the error stream, the rest to the output stream.
    """

    _instance: ClassVar[Logger | None] = None

    def __init__(
        self,
        file_path: str | os.PathLike = "",
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self._file: File | None = None
        if file_path:
            self._file = open_file(file_path, FileMode.WRITE, False)

    @classmethod
    def initialize(cls, file_path: str | os.PathLike = "") -> Logger:
        """Create the shared logger if needed and return it."""
        if cls._instance is None:
            cls._instance = cls(file_path)
        return cls._instance

    @classmethod
    def shutdown(cls) -> None:
        """Close and discard the shared logger."""
        if cls._instance is not None:
            cls._instance.close()
            cls._instance = None

    @classmethod
    def get_logger(cls) -> Logger | None:
        """Return the shared logger, or None before initialization."""
        return cls._instance

    def _stream_for(self, level: LogLevel) -> TextIO:
        if level < LogLevel.WARN:
            return self._stderr if self._stderr is not None else sys.stderr
        return self._stdout if self._stdout is not None else sys.stdout

    def log(self, level: LogLevel, text: str, *args) -> str:
        """Format ``text`` with ``args``, write it at ``level`` and return the line."""
        level = LogLevel(level)
        line = format_log_level(format_string(text, *args), level)
        self._stream_for(level).write(line)
        if self._file is not None and self._file.is_ready():
            self._file.write_line(line)
        return line

    def fatal(self, text: str, *args) -> str:
        return self.log(LogLevel.FATAL, text, *args)

    def error(self, text: str, *args) -> str:
        return self.log(LogLevel.ERROR, text, *args)

    def warn(self, text: str, *args) -> str:
        return self.log(LogLevel.WARN, text, *args)

    def info(self, text: str, *args) -> str:
        return self.log(LogLevel.INFO, text, *args)

    def debug(self, text: str, *args) -> str:
        return self.log(LogLevel.DEBUG, text, *args)

    def trace(self, text: str, *args) -> str:
        return self.log(LogLevel.TRACE, text, *args)

    def close(self) -> None:
        """Mark the end of the log file and close it."""
        if self._file is not None:
            if self._file.is_ready():
                self._file.write_line(END_OF_LOG)
            self._file.close()
            self._file = None

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def report_assertion_failure(expression: str, message: str, file: str, line: int) -> str:
    """Log an assertion failure at FATAL level and return its text."""
    text = format_string(ASSERTION_FORMAT, expression, message, file, line)
    logger = Logger.get_logger()
    if logger is not None:
        logger.log(LogLevel.FATAL, ASSERTION_FORMAT, expression, message, file, line)
    else:
        sys.stderr.write(format_log_level(text, LogLevel.FATAL))
    return text


def ensure(condition, expression: str = "", message: str = "") -> None:
    """Report and raise :class:`AssertionFailure` when ``condition`` is false."""
    if condition:
        return
    caller = traceback.extract_stack(limit=2)[0]
    line = caller.lineno or 0
    report_assertion_failure(expression, message, caller.filename, line)
    raise AssertionFailure(expression, message, caller.filename, line)