"""Input sources a SelectionController can listen to."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import IO, Protocol, runtime_checkable

import readchar

logger = logging.getLogger("checkpick.input")

Listener = Callable[[bytes | str], None]


class InputSourceError(RuntimeError):
    """Raised when an input source cannot be acquired or released."""

    pass


@runtime_checkable
class InputSource(Protocol):
    """Protocol for byte-stream input sources."""

    def set_raw_mode(self, enabled: bool) -> None:
        """Switch the source into (or back out of) unbuffered mode."""
        ...

    def add_listener(self, listener: Listener) -> None:
        """Subscribe a listener to incoming chunks."""
        ...

    def remove_listener(self, listener: Listener) -> None:
        """Unsubscribe a listener."""
        ...


class _ExclusiveSource:
    """Listener bookkeeping shared by the concrete sources.

    A source has at most one listener. Adding the current listener again is
    a no-op; adding a different one while owned raises InputSourceError.
    """

    def __init__(self) -> None:
        self._listener: Listener | None = None

    @property
    def listeners(self) -> list[Listener]:
        return [self._listener] if self._listener is not None else []

    def add_listener(self, listener: Listener) -> None:
        if self._listener is not None:
            if self._listener == listener:
                return
            raise InputSourceError("Input source is already owned by another listener")
        self._listener = listener

    def remove_listener(self, listener: Listener) -> None:
        if self._listener == listener:
            self._listener = None

    def dispatch(self, chunk: bytes | str) -> bool:
        """Hand a chunk to the listener. Returns False if nobody listens."""
        if self._listener is None:
            logger.debug("Dropped chunk %r: no listener", chunk)
            return False
        self._listener(chunk)
        return True


class MemoryInput(_ExclusiveSource):
    """In-memory source. The host pushes chunks with feed()."""

    def __init__(self) -> None:
        super().__init__()
        self.raw_mode = False

    def set_raw_mode(self, enabled: bool) -> None:
        self.raw_mode = enabled

    def feed(self, *chunks: bytes | str) -> None:
        """Dispatch chunks one at a time, in order."""
        for chunk in chunks:
            self.dispatch(chunk)


class TerminalInput(_ExclusiveSource):
    """Raw-mode terminal source reading key presses with readchar.

    Raw mode disables line buffering, echo and CR-to-NL translation so that
    Enter arrives as CR. The previous terminal settings are restored when raw
    mode is switched off.
    """

    def __init__(self, stream: IO | None = None) -> None:
        super().__init__()
        self._stream = stream or sys.stdin
        self._saved_settings: list | None = None

    @property
    def raw_mode(self) -> bool:
        return self._saved_settings is not None

    def set_raw_mode(self, enabled: bool) -> None:
        import termios

        if enabled:
            if self._saved_settings is not None:
                return
            if not self._stream.isatty():
                raise InputSourceError("Interactive selection requires a terminal (stdin is not a tty)")
            fd = self._stream.fileno()
            try:
                saved = termios.tcgetattr(fd)
                raw = termios.tcgetattr(fd)
                raw[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
                raw[0] &= ~termios.ICRNL
                raw[6][termios.VMIN] = 1
                raw[6][termios.VTIME] = 0
                termios.tcsetattr(fd, termios.TCSADRAIN, raw)
            except termios.error as e:
                raise InputSourceError(f"Could not enable raw mode: {e}") from e
            self._saved_settings = saved
            logger.debug("Raw mode on (fd %d)", fd)
        else:
            if self._saved_settings is None:
                return
            saved, self._saved_settings = self._saved_settings, None
            try:
                termios.tcsetattr(self._stream.fileno(), termios.TCSADRAIN, saved)
            except termios.error as e:
                raise InputSourceError(f"Could not restore terminal mode: {e}") from e
            logger.debug("Raw mode off")

    def read_chunk(self) -> str | None:
        """Block for one key press. Returns None on Ctrl-C."""
        try:
            return readchar.readkey()
        except KeyboardInterrupt:
            return None

    def pump(self) -> bool:
        """Read one key press and dispatch it. Returns False on Ctrl-C."""
        chunk = self.read_chunk()
        if chunk is None:
            return False
        self.dispatch(chunk)
        return True
