"""Curses display for the control panel."""

import curses
import logging
from typing import TYPE_CHECKING

from .layout import (
    CURSOR_COLUMN,
    CURSOR_LINE,
    ERRORS_LINE,
    INFO_COLUMN,
    INFO_LINE,
    SELECTED_LINE,
    START_LINE,
    STATUS_LINE,
    TEMPLATE,
)

if TYPE_CHECKING:
    from pca9956b_cli.core import StatusModel

logger = logging.getLogger(__name__)

MIN_ROWS = START_LINE + len(TEMPLATE)
MIN_COLUMNS = 80


class CursesDisplay:
    """
    Draws the panel into a curses window.

    The template is written once; afterwards only the status rows, the
    selection line and the info line are rewritten. Every update ends by
    parking the cursor at (CURSOR_LINE, CURSOR_COLUMN) and refreshing.

    On a window smaller than MIN_ROWS x MIN_COLUMNS the rows that do not
    fit are clipped and the panel keeps running.
    """

    def __init__(self, window: "curses.window"):
        """
        Initialize the display.

        Args:
            window: The curses window (normally stdscr)
        """
        self.window = window

    def draw_template(self) -> None:
        """Write the static screen template."""
        rows, columns = self.window.getmaxyx()
        if rows < MIN_ROWS or columns < MIN_COLUMNS:
            logger.warning(
                f"Terminal is {columns}x{rows}, panel needs {MIN_COLUMNS}x{MIN_ROWS}; "
                "output will be clipped"
            )
        self.window.erase()
        for offset, line in enumerate(TEMPLATE):
            self._write(START_LINE + offset, 0, line)
        self._park()

    def show_status(self, status: "StatusModel") -> None:
        """Rewrite the state and error glyph rows."""
        self._write(STATUS_LINE, 0, status.status_line())
        self._write(ERRORS_LINE, 0, status.errors_line())
        self._park()

    def show_selection(self, line: str) -> None:
        """Rewrite the selection summary line."""
        self._write(SELECTED_LINE, 0, line)
        self._park()

    def show_info(self, text: str) -> None:
        """Replace the info line message, cut to the window width."""
        _, width = self.window.getmaxyx()
        text = text[: max(0, width - INFO_COLUMN - 1)]
        try:
            self.window.move(INFO_LINE, INFO_COLUMN)
            self.window.clrtoeol()
        except curses.error:
            logger.debug(f"Info line {INFO_LINE} is off screen")
        self._write(INFO_LINE, INFO_COLUMN, text)
        logger.debug(f"Info: {text}")
        self._park()

    def _write(self, y: int, x: int, text: str) -> None:
        # curses raises when the text runs past the window edge
        try:
            self.window.addstr(y, x, text)
        except curses.error:
            logger.debug(f"Clipped write at row {y}")

    def _park(self) -> None:
        try:
            self.window.move(CURSOR_LINE, CURSOR_COLUMN)
        except curses.error:
            logger.debug(f"Cursor row {CURSOR_LINE} is off screen")
        self.window.refresh()
