"""Terminal user interface: curses session, key reading and display."""

from .display import CursesDisplay
from .session import InputClosedError, KeyReader, SessionTerminated, TerminalSession

__all__ = [
    "CursesDisplay",
    "InputClosedError",
    "KeyReader",
    "SessionTerminated",
    "TerminalSession",
]
