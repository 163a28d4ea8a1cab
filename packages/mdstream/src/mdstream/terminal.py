"""
Output sinks.

Provides:
- Terminal: abstract base class (interface)
- ProcessTerminal: real terminal writing to sys.stdout
- BufferTerminal: in-memory sink
"""
from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from .config import get_write_log_path

# ─────────────────────────────────────────────────────────────────────────────
# Terminal ABC
# ─────────────────────────────────────────────────────────────────────────────

class Terminal(ABC):
    """Append-only output sink. Nothing is ever rewritten once written."""

    @abstractmethod
    def write(self, data: str) -> None:
        """Write output to the terminal."""

    @property
    @abstractmethod
    def columns(self) -> int:
        """Terminal width in columns."""

    @property
    @abstractmethod
    def is_tty(self) -> bool:
        """Whether output goes to an interactive terminal."""


# ─────────────────────────────────────────────────────────────────────────────
# ProcessTerminal
# ─────────────────────────────────────────────────────────────────────────────

class ProcessTerminal(Terminal):
    """
    Real terminal using sys.stdout (or another text stream).
    Every write is flushed so partial output shows up immediately.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._write_log_path = get_write_log_path()

    def write(self, data: str) -> None:
        self._stream.write(data)
        self._stream.flush()
        if self._write_log_path:
            with open(self._write_log_path, "a", encoding="utf-8") as f:
                f.write(data)

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stream.fileno()).columns
        except (AttributeError, OSError, ValueError):
            return int(os.environ.get("COLUMNS", "80"))

    @property
    def is_tty(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())


# ─────────────────────────────────────────────────────────────────────────────
# BufferTerminal
# ─────────────────────────────────────────────────────────────────────────────

class BufferTerminal(Terminal):
    """Collects writes in memory; each write is kept as a separate entry."""

    def __init__(self, columns: int = 80) -> None:
        self._columns = columns
        self.writes: list[str] = []

    def write(self, data: str) -> None:
        self.writes.append(data)

    def get_output(self) -> str:
        return "".join(self.writes)

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def is_tty(self) -> bool:
        return False
