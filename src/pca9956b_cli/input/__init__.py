"""Terminal input: key tables, commands and the key-press decoder."""

from .commands import (
    AdjustDown,
    AdjustUp,
    Apply,
    Command,
    Quit,
    Refresh,
    SelectChannel,
    SelectValueType,
    SetMode,
    Unknown,
)
from .decoder import InputDecoder, KeySource, NoWaitKeySource
from .keymap import CHANNEL_KEYS, CHANNEL_TABLE, MODE_TABLE, VALUE_TYPE_TABLE

__all__ = [
    # Commands
    "AdjustDown",
    "AdjustUp",
    "Apply",
    "Command",
    "Quit",
    "Refresh",
    "SelectChannel",
    "SelectValueType",
    "SetMode",
    "Unknown",
    # Decoding
    "InputDecoder",
    "KeySource",
    "NoWaitKeySource",
    # Tables
    "CHANNEL_KEYS",
    "CHANNEL_TABLE",
    "MODE_TABLE",
    "VALUE_TYPE_TABLE",
]
