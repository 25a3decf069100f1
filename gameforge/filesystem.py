"""Thin file wrapper with line and byte helpers, plus XML loading."""

from __future__ import annotations

import io
import os
import xml.etree.ElementTree as ElementTree
from enum import IntEnum
from typing import IO


class FileMode(IntEnum):
    """Direction a file is opened in."""

    READ = 0x01
    WRITE = 0x02


_OPEN_MODES = {
    (FileMode.READ, True): "rb",
    (FileMode.READ, False): "r",
    (FileMode.WRITE, True): "wb",
    (FileMode.WRITE, False): "a",
}


class File:
    """An open file in text or binary form.

    Binary files opened for writing are truncated; text files opened for
    writing are appended to. A file that cannot be opened is not ready, and
    any read or write on it raises ``ValueError``.
    """

    def __init__(self, path: str | os.PathLike, mode: FileMode, binary: bool = False) -> None:
        self.path = os.fspath(path)
        self.mode = FileMode(mode)
        self.binary = bool(binary)
        open_mode = _OPEN_MODES[(self.mode, self.binary)]
        self._handle: IO | None
        try:
            if self.binary:
                self._handle = open(self.path, open_mode)
            else:
                self._handle = open(self.path, open_mode, encoding="utf-8")
        except OSError:
            self._handle = None

    def is_ready(self) -> bool:
        """True while the file is open."""
        return self._handle is not None and not self._handle.closed

    def _checked(self, *, binary: bool | None = None, mode: FileMode | None = None) -> IO:
        if not self.is_ready():
            raise ValueError(f"file {self.path!r} is not open")
        if binary is not None and self.binary != binary:
            kind = "binary" if binary else "text"
            raise io.UnsupportedOperation(f"file {self.path!r} is not opened in {kind} form")
        if mode is not None and self.mode is not mode:
            raise io.UnsupportedOperation(f"file {self.path!r} is not opened for {mode.name.lower()}")
        return self._handle

    @staticmethod
    def _strip_newline(line: str) -> str:
        return line[:-1] if line.endswith("\n") else line

    def read_line(self) -> str | None:
        """Read the next line without its newline; None at end of file."""
        raw = self._checked(binary=False).readline()
        if raw == "":
            return None
        return self._strip_newline(raw)

    def read_all_lines(self) -> list[str]:
        """Read the remaining lines, each without its newline."""
        return [self._strip_newline(line) for line in self._checked(binary=False)]

    def read_all_bytes(self) -> bytes:
        """Read the whole binary file from its beginning."""
        handle = self._checked(binary=True, mode=FileMode.READ)
        handle.seek(0)
        return handle.read()

    def read_bytes(self, size: int) -> bytes:
        """Read up to ``size`` bytes from the current position."""
        return self._checked(binary=True, mode=FileMode.READ).read(size)

    def write_line(self, line: str) -> None:
        """Write ``line`` as given to a text file opened for writing."""
        self._checked(binary=False, mode=FileMode.WRITE).write(line)

    def write(self, data: bytes | bytearray | str) -> None:
        """Write raw data; bytes are decoded as UTF-8 for a text file."""
        handle = self._checked()
        if self.binary:
            handle.write(data.encode("utf-8") if isinstance(data, str) else bytes(data))
        else:
            handle.write(data if isinstance(data, str) else bytes(data).decode("utf-8"))

    def close(self) -> None:
        """Close the file; further reads and writes raise ``ValueError``."""
        if self._handle is not None:
            self._handle.close()

    def __enter__(self) -> File:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def file_exists(path: str | os.PathLike) -> bool:
    """True if ``path`` names an existing file or directory."""
    return os.path.exists(path)


def open_file(path: str | os.PathLike, mode: FileMode, binary: bool = False) -> File:
    """Open ``path`` and return a :class:`File`."""
    return File(path, mode, binary)


def open_xml(path: str | os.PathLike) -> ElementTree.ElementTree:
    """Parse an XML document from ``path``."""
    return ElementTree.parse(os.fspath(path))