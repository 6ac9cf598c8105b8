"""
Key-press decoding.

Input Flow: Key Press → Command
===============================

::

    Terminal key press
          ↓
    [key codes: 27, 91, 65]   (cursor up)
          ↓
    ┌──────────────────────────────────────┐
    │      InputDecoder.decode()           │
    │                                      │
    │  code = read_key()        # blocks   │
    │  if code == ESC:                     │
    │    a = read_key_nowait()  # bounded  │
    │    b = read_key_nowait()  # bounded  │
    │  else:                               │
    │    look code up in the key tables    │
    └────────────┬─────────────────────────┘
                 ↓
    [AdjustUp()]

The Escape Ambiguity
--------------------

Esc on its own means "quit", but Esc is also the first byte of a cursor-key
sequence. After an Esc the decoder only waits a bounded time for more
bytes, so a lone Esc never blocks:

- nothing arrives in the window → ``Quit``
- ``[`` followed by ``A`` or ``B`` → ``AdjustUp`` / ``AdjustDown``
- anything else → ``Unknown`` carrying every code read

Decoding never fails; input that maps to nothing becomes ``Unknown``.
"""

import logging
from typing import Callable, Mapping, Optional

from pca9956b_cli.models import ChannelState, ValueType

from .commands import (
    Apply,
    Command,
    Quit,
    Refresh,
    SelectChannel,
    SelectValueType,
    SetMode,
    Unknown,
)
from .keymap import (
    CHANNEL_TABLE,
    ESCAPE_BRACKET,
    ESCAPE_TABLE,
    KEY_ENTER,
    KEY_ESC,
    KEY_SPACE,
    MODE_TABLE,
    VALUE_TYPE_TABLE,
)

logger = logging.getLogger(__name__)

# Blocking read of the next key code
KeySource = Callable[[], int]
# Bounded read; None when nothing arrived within the window
NoWaitKeySource = Callable[[], Optional[int]]


class InputDecoder:
    """
    Turns raw key codes into commands.

    The decoder is stateless: it never touches the selection or the
    snapshot and never draws anything.
    """

    def __init__(
        self,
        channel_table: Mapping[int, int] = CHANNEL_TABLE,
        mode_table: Mapping[int, ChannelState] = MODE_TABLE,
        value_type_table: Mapping[int, ValueType] = VALUE_TYPE_TABLE,
    ):
        """
        Initialize the decoder.

        Args:
            channel_table: Key code → channel index (or sentinel)
            mode_table: Key code → LED state
            value_type_table: Key code → value type
        """
        self.channel_table = channel_table
        self.mode_table = mode_table
        self.value_type_table = value_type_table

    def decode(self, read_key: KeySource, read_key_nowait: NoWaitKeySource) -> Command:
        """
        Read one key press and decode it.

        Args:
            read_key: Blocking read of one key code
            read_key_nowait: Bounded read of one key code, None on timeout

        Returns:
            The decoded command
        """
        code = read_key()
        if code == KEY_ESC:
            command = self._decode_escape(read_key_nowait)
        else:
            command = self.lookup(code)
        logger.debug(f"Decoded key {code} as {command}")
        return command

    def lookup(self, code: int) -> Command:
        """Map a single non-escape key code to a command."""
        if code == KEY_ENTER:
            return Refresh()
        if code == KEY_SPACE:
            return Apply()
        if code in self.mode_table:
            return SetMode(self.mode_table[code])
        if code in self.value_type_table:
            return SelectValueType(self.value_type_table[code])
        if code in self.channel_table:
            return SelectChannel(self.channel_table[code])
        return Unknown(code)

    def _decode_escape(self, read_key_nowait: NoWaitKeySource) -> Command:
        first = read_key_nowait()
        if first is None:
            return Quit()

        second = read_key_nowait()
        if first == ESCAPE_BRACKET and second in ESCAPE_TABLE:
            return ESCAPE_TABLE[second]

        follow_up = (first,) if second is None else (first, second)
        return Unknown(KEY_ESC, follow_up)
