"""Enumerations for the PCA9956B control panel.

Member values are the strings used by the device REST service.
"""

from enum import Enum


class ChannelState(str, Enum):
    """LED output driver state."""

    OFF = "false"  # Output off
    ON = "true"  # Output fully on
    PWM = "pwm"  # Individual PWM brightness
    PWM_PLUS = "pwmplus"  # Individual PWM plus group dimming/blinking

    @property
    def label(self) -> str:
        """Human-readable name used on the panel."""
        return _STATE_LABELS[self]


class ChannelError(str, Enum):
    """Error flag reported for an LED output."""

    NONE = "none"
    OPEN = "open"  # Open circuit
    SHORT = "short"  # Short circuit
    DOES_NOT_EXIST = "dne"  # No such output


class ValueType(str, Enum):
    """Per-channel value that can be focused for display or editing."""

    CURRENT = "current"  # Output current (IREF), 0-255
    PWM = "pwm"  # PWM duty cycle, 0-255

    @property
    def label(self) -> str:
        """Human-readable name used on the panel."""
        return "Current" if self is ValueType.CURRENT else "PWM"


_STATE_LABELS = {
    ChannelState.OFF: "Off",
    ChannelState.ON: "On",
    ChannelState.PWM: "PWM",
    ChannelState.PWM_PLUS: "PWMPlus",
}
