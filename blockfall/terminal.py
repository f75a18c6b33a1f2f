"""Terminal mode switching and single-key input with a repeating tick."""

from __future__ import annotations

import contextlib
import enum
import os
import select
import termios
import time

_IFLAG, _OFLAG, _CFLAG, _LFLAG, _ISPEED, _OSPEED, _CC = range(7)

_RAW_LFLAGS = termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG
_RAW_IFLAGS = termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
_CBREAK_LFLAGS = termios.ECHO | termios.ICANON


class TtyMode(enum.Enum):
    """The mode a terminal is put into."""

    RESET = "reset"
    RAW = "raw"
    CBREAK = "cbreak"


class TerminalModeError(OSError):
    """Raised when a terminal cannot be switched into the requested mode."""


def _cc_is(value: int | bytes, expected: int) -> bool:
    if isinstance(value, bytes):
        return len(value) == 1 and value[0] == expected
    return value == expected


def _configured(attrs: list, mode: TtyMode) -> list:
    attrs = list(attrs)
    cc = list(attrs[_CC])
    if mode is TtyMode.RAW:
        attrs[_LFLAG] &= ~_RAW_LFLAGS
        attrs[_IFLAG] &= ~_RAW_IFLAGS
        attrs[_CFLAG] &= ~(termios.CSIZE | termios.PARENB)
        attrs[_CFLAG] |= termios.CS8
        attrs[_OFLAG] &= ~termios.OPOST
    else:
        attrs[_LFLAG] &= ~_CBREAK_LFLAGS
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    attrs[_CC] = cc
    return attrs


def _took_effect(attrs: list, mode: TtyMode) -> bool:
    cc = attrs[_CC]
    if not (_cc_is(cc[termios.VMIN], 1) and _cc_is(cc[termios.VTIME], 0)):
        return False
    if mode is TtyMode.RAW:
        return not (
            attrs[_LFLAG] & _RAW_LFLAGS
            or attrs[_IFLAG] & _RAW_IFLAGS
            or (attrs[_CFLAG] & (termios.CSIZE | termios.PARENB | termios.CS8)) != termios.CS8
            or attrs[_OFLAG] & termios.OPOST
        )
    return not attrs[_LFLAG] & _CBREAK_LFLAGS


class RawTerminal:
    """Context manager that puts a terminal into raw or cbreak mode.

    The original settings are restored on exit.
    """

    def __init__(self, fd: int = 0, mode: TtyMode = TtyMode.RAW) -> None:
        if mode is TtyMode.RESET:
            raise ValueError("mode must be RAW or CBREAK")
        self.fd = fd
        self.mode = mode
        self._saved: list | None = None

    @property
    def state(self) -> TtyMode:
        return TtyMode.RESET if self._saved is None else self.mode

    def __enter__(self) -> RawTerminal:
        if self._saved is not None:
            raise TerminalModeError("terminal mode is already set")
        try:
            saved = termios.tcgetattr(self.fd)
        except termios.error as exc:
            raise TerminalModeError(f"cannot read terminal settings: {exc}") from exc
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, _configured(saved, self.mode))
            current = termios.tcgetattr(self.fd)
        except termios.error as exc:
            with contextlib.suppress(termios.error):
                termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)
            raise TerminalModeError(f"cannot change terminal settings: {exc}") from exc
        if not _took_effect(current, self.mode):
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)
            raise TerminalModeError("terminal accepted only part of the new settings")
        self._saved = saved
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)
        except termios.error as err:
            raise TerminalModeError(f"cannot restore terminal settings: {err}") from err


class KeyReader:
    """Reads single keys, yielding ``tick_key`` whenever the timer expires first."""

    def __init__(self, fd: int = 0, tick_key: str = "s") -> None:
        self.fd = fd
        self.tick_key = tick_key
        self._interval: float | None = None
        self._deadline: float | None = None

    def start_timer(self, seconds: float = 1.0) -> None:
        """Deliver ``tick_key`` every ``seconds`` when no key arrives in time."""
        if seconds <= 0:
            raise ValueError("timer interval must be positive")
        self._interval = seconds
        self._deadline = time.monotonic() + seconds

    def stop_timer(self) -> None:
        self._interval = None
        self._deadline = None

    def _mode(self):
        if os.isatty(self.fd):
            return RawTerminal(self.fd, TtyMode.RAW)
        return contextlib.nullcontext()

    def read(self) -> str:
        """Block until a key or a timer tick and return it as a one-character string."""
        timeout = None
        if self._deadline is not None:
            timeout = max(0.0, self._deadline - time.monotonic())
        data = b""
        with self._mode():
            ready, _, _ = select.select([self.fd], [], [], timeout)
            if ready:
                data = os.read(self.fd, 1)
        if not ready:
            self._deadline = time.monotonic() + self._interval
            return self.tick_key
        if not data:
            raise EOFError("input closed")
        return data.decode("latin-1")