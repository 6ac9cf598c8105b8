"""Data models for the PCA9956B control panel."""

from .channel import NUM_CHANNELS, ChannelStatus, DeviceSnapshot
from .config import PanelConfig
from .enums import ChannelError, ChannelState, ValueType
from .selection import GLOBAL_CHANNEL, NO_CHANNEL, SelectionModel, is_channel

__all__ = [
    # Models
    "ChannelStatus",
    "DeviceSnapshot",
    "PanelConfig",
    "SelectionModel",
    # Enums
    "ChannelError",
    "ChannelState",
    "ValueType",
    # Channel indices
    "GLOBAL_CHANNEL",
    "NO_CHANNEL",
    "NUM_CHANNELS",
    "is_channel",
]
