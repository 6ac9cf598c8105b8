"""Terminal session and key reading.

TerminalSession acquires the terminal for curses and always gives it back:
on a normal exit, on any exception, and when SIGINT/SIGTERM arrive (the
signal handlers raise SessionTerminated, which unwinds through the
context manager).

Usage:
    with TerminalSession() as session:
        reader = KeyReader(session.window, escape_timeout_ms=25)
        code = reader.read_key()
"""

import curses
import logging
import signal
from typing import Optional

from pca9956b_cli.core import exit_code_for_signal
from pca9956b_cli.exceptions import PanelError

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# getch() result when no key is available
NO_KEY = -1

# Consecutive empty blocking reads before the input is treated as closed
MAX_EMPTY_READS = 100


class SessionTerminated(Exception):
    """A termination signal arrived while the panel was running."""

    def __init__(self, signum: int):
        self.signum = signum
        self.exit_code = exit_code_for_signal(signum)
        super().__init__(f"{signal.Signals(signum).name} caught - exiting")


class InputClosedError(PanelError):
    """The terminal keeps failing blocking reads, so no key can arrive."""

    def __init__(self, attempts: int):
        super().__init__(
            user_message="Terminal input closed",
            technical_message=f"getch() returned ERR {attempts} times in a row",
            recovery_hint="Run the panel from an interactive terminal",
        )
        self.attempts = attempts


class TerminalSession:
    """
    Scoped ownership of the curses terminal.

    Entering puts the terminal in cbreak/no-echo mode with keypad
    translation off, so cursor keys arrive as raw escape sequences.
    Exiting always restores the terminal and the previous signal handlers.
    """

    def __init__(self, signals: tuple[int, ...] = HANDLED_SIGNALS):
        """
        Initialize the session.

        Args:
            signals: Signals that end the session
        """
        self.signals = signals
        self.window: Optional["curses.window"] = None
        self._previous_handlers: dict[int, object] = {}

    def __enter__(self) -> "TerminalSession":
        self.window = curses.initscr()
        try:
            curses.noecho()
            curses.cbreak()
            self.window.keypad(False)
            self.window.timeout(-1)
            self._install_signal_handlers()
        except BaseException:
            self._release()
            raise
        logger.debug("Terminal session started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self._release()
        if isinstance(exc_val, SessionTerminated):
            logger.warning(str(exc_val))
        return False

    def _install_signal_handlers(self) -> None:
        for signum in self.signals:
            self._previous_handlers[signum] = signal.signal(signum, self._on_signal)
            logger.debug(f"Registered for {signal.Signals(signum).name}")

    def _on_signal(self, signum: int, frame) -> None:
        raise SessionTerminated(signum)

    def _release(self) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

        if self.window is not None:
            curses.nocbreak()
            curses.echo()
            curses.endwin()
            self.window = None
            logger.debug("Terminal restored")


class KeyReader:
    """
    Reads key codes from a curses window.

    read_key() blocks until a key arrives. read_key_nowait() waits at most
    escape_timeout_ms and returns None if nothing arrived; it is only used
    to finish an escape sequence.
    """

    def __init__(self, window: "curses.window", escape_timeout_ms: int):
        self.window = window
        self.escape_timeout_ms = escape_timeout_ms

    def read_key(self) -> int:
        """
        Block until a key arrives.

        Raises:
            InputClosedError: If MAX_EMPTY_READS reads in a row return nothing
        """
        self.window.timeout(-1)
        # Interrupted reads come back empty; at end of input every read does
        for _ in range(MAX_EMPTY_READS):
            code = self.window.getch()
            if code != NO_KEY:
                return code
        raise InputClosedError(MAX_EMPTY_READS)

    def read_key_nowait(self) -> Optional[int]:
        self.window.timeout(self.escape_timeout_ms)
        try:
            code = self.window.getch()
        finally:
            self.window.timeout(-1)
        return None if code == NO_KEY else code
