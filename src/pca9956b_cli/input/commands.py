"""Commands decoded from key presses.

Each key press resolves to exactly one command. Commands carry no behaviour;
the ActionPlanner decides what each one does.
"""

from dataclasses import dataclass

from pca9956b_cli.models import ChannelState, ValueType


class Command:
    """Generic command (decoded from terminal input)."""

    pass


@dataclass(frozen=True)
class Refresh(Command):
    """Re-read every channel from the device."""


@dataclass(frozen=True)
class SetMode(Command):
    """Set the driver state of the selected channel(s)."""

    state: ChannelState


@dataclass(frozen=True)
class SelectChannel(Command):
    """Select a channel, the global pseudo-channel, or nothing."""

    channel: int


@dataclass(frozen=True)
class SelectValueType(Command):
    """Focus the value type shown for the selected channel."""

    value_type: ValueType


@dataclass(frozen=True)
class AdjustUp(Command):
    """Cursor up."""


@dataclass(frozen=True)
class AdjustDown(Command):
    """Cursor down."""


@dataclass(frozen=True)
class Apply(Command):
    """Apply the edited value."""


@dataclass(frozen=True)
class Quit(Command):
    """Leave the panel."""


@dataclass(frozen=True)
class Unknown(Command):
    """
    Key press that maps to nothing.

    Attributes:
        code: The primary key code
        follow_up: Codes read after an escape introducer, if any
    """

    code: int
    follow_up: tuple[int, ...] = ()

    @property
    def codes(self) -> tuple[int, ...]:
        return (self.code, *self.follow_up)
