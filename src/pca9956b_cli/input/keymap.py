"""Fixed key tables.

Tables are built once at import and exposed as read-only mappings from raw
key code to what the key selects. No code appears in more than one table.
"""

from types import MappingProxyType
from typing import Mapping

from pca9956b_cli.models import GLOBAL_CHANNEL, NO_CHANNEL, ChannelState, ValueType

from .commands import AdjustDown, AdjustUp, Command

KEY_ENTER = 10  # LF
KEY_ESC = 27
KEY_SPACE = 32

# Second and third bytes of the cursor keys: ESC [ A / ESC [ B
ESCAPE_BRACKET = ord("[")
ESCAPE_UP = ord("A")
ESCAPE_DOWN = ord("B")

# Position 0 is "no channel", positions 1-24 are channels 0-23,
# position 25 is the global pseudo-channel.
CHANNEL_KEYS: tuple[str, ...] = (
    "p",  # None
    "q", "w", "e", "r", "t", "y", "u", "i",  # LEDs 0-7
    "a", "s", "d", "f", "g", "h", "j", "k",  # LEDs 8-15
    "z", "x", "c", "v", "b", "n", "m", ",",  # LEDs 16-23
    "o",  # Global
)


def _channel_for_position(position: int) -> int:
    if position == len(CHANNEL_KEYS) - 1:
        return GLOBAL_CHANNEL
    return position - 1 if position else NO_CHANNEL


def _build_channel_table() -> Mapping[int, int]:
    table: dict[int, int] = {}
    for position, key in enumerate(CHANNEL_KEYS):
        code = ord(key)
        if code in table:
            raise ValueError(f"Duplicate channel key {key!r}")
        table[code] = _channel_for_position(position)
    return MappingProxyType(table)


CHANNEL_TABLE: Mapping[int, int] = _build_channel_table()

MODE_TABLE: Mapping[int, ChannelState] = MappingProxyType({
    ord("1"): ChannelState.OFF,
    ord("2"): ChannelState.ON,
    ord("3"): ChannelState.PWM,
    ord("4"): ChannelState.PWM_PLUS,
})

VALUE_TYPE_TABLE: Mapping[int, ValueType] = MappingProxyType({
    ord("5"): ValueType.CURRENT,
    ord("6"): ValueType.PWM,
})

# Cursor-key letter following ESC [
ESCAPE_TABLE: Mapping[int, Command] = MappingProxyType({
    ESCAPE_UP: AdjustUp(),
    ESCAPE_DOWN: AdjustDown(),
})
