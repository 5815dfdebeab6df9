"""Scoped terminal mode handling and non-blocking line input (POSIX)."""

from __future__ import annotations

import fcntl
import logging
import os
import select
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

logger = logging.getLogger(__name__)

_READ_CHUNK = 256


class TerminalSession:
    """Switch a TTY to non-canonical, non-blocking input and back.

    When the descriptor is not a TTY the session leaves it untouched.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self.interactive = os.isatty(fd)
        self._saved_attrs: Optional[list] = None
        self._saved_flags: Optional[int] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enter(self) -> None:
        if self._active:
            return
        if self.interactive:
            self._saved_attrs = termios.tcgetattr(self.fd)
            self._saved_flags = fcntl.fcntl(self.fd, fcntl.F_GETFL)
            self._apply_polling_mode()
            logger.debug("Terminal switched to non-canonical input.")
        self._active = True

    def restore(self) -> None:
        if not self._active:
            return
        self._active = False
        if self.interactive:
            self._apply_saved_mode()
            logger.debug("Terminal settings restored.")

    @contextmanager
    def blocking(self) -> Iterator[None]:
        """Temporarily return to the saved blocking, line-buffered mode."""
        if not (self._active and self.interactive):
            yield
            return
        self._apply_saved_mode()
        try:
            yield
        finally:
            self._apply_polling_mode()

    def _saved_mode(self) -> tuple[list, int]:
        if self._saved_attrs is None or self._saved_flags is None:
            raise RuntimeError("terminal session has not been entered")
        return self._saved_attrs, self._saved_flags

    def _apply_polling_mode(self) -> None:
        saved_attrs, saved_flags = self._saved_mode()
        attrs = list(saved_attrs)
        # Keep echo so typed queries stay visible.
        attrs[3] &= ~termios.ICANON
        termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        fcntl.fcntl(self.fd, fcntl.F_SETFL, saved_flags | os.O_NONBLOCK)

    def _apply_saved_mode(self) -> None:
        saved_attrs, saved_flags = self._saved_mode()
        termios.tcsetattr(self.fd, termios.TCSANOW, saved_attrs)
        fcntl.fcntl(self.fd, fcntl.F_SETFL, saved_flags)


@contextmanager
def terminal_session(fd: Optional[int] = None) -> Iterator[TerminalSession]:
    """Acquire polling mode for ``fd`` (stdin by default), restoring it on exit."""
    session = TerminalSession(sys.stdin.fileno() if fd is None else fd)
    session.enter()
    try:
        yield session
    finally:
        session.restore()


class NonBlockingLineReader:
    """Collect bytes from a descriptor without blocking and hand out whole lines."""

    def __init__(
        self, fd: int, encoding: str = "utf-8", prompt_stream: Optional[TextIO] = None
    ) -> None:
        self.fd = fd
        self.encoding = encoding
        self._prompt_stream = prompt_stream
        self._buffer = bytearray()
        self.closed = False

    def poll(self) -> Optional[str]:
        """Return one complete line (without newline) if available, else None."""
        if not self.closed:
            self._fill()
        return self._take_line()

    def read_line(self, prompt: str = "") -> str:
        """Wait for the next line, handing out buffered lines first.

        Drop-in for :func:`input` so blocking prompts and :meth:`poll` never
        split the same input between two buffers. Raises :class:`EOFError`
        once the descriptor is closed and nothing is left.
        """
        if prompt:
            stream = self._prompt_stream if self._prompt_stream is not None else sys.stdout
            stream.write(prompt)
            stream.flush()
        while True:
            line = self._take_line()
            if line is not None:
                return line
            if self.closed:
                raise EOFError
            self._fill(timeout=None)

    def _fill(self, timeout: Optional[float] = 0) -> None:
        while True:
            readable, _, _ = select.select([self.fd], [], [], timeout)
            if not readable:
                return
            try:
                chunk = os.read(self.fd, _READ_CHUNK)
            except BlockingIOError:
                return
            if not chunk:
                self.closed = True
                if self._buffer:
                    # Treat a trailing partial line as complete.
                    self._buffer.extend(b"\n")
                return
            self._buffer.extend(chunk)
            if b"\n" in chunk:
                return

    def _take_line(self) -> Optional[str]:
        newline = self._buffer.find(b"\n")
        if newline < 0:
            return None
        raw = bytes(self._buffer[:newline])
        del self._buffer[: newline + 1]
        return raw.decode(self.encoding, errors="replace").rstrip("\r")
