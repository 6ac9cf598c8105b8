"""Status projection - what the panel shows for a snapshot and selection.

This module is the single source of truth for the panel's compact
encodings:

- State glyphs: Off '.', On 'o', PWM 'p', PWMPlus '+'
- Error glyphs: None '.', Open 'o', Short 's', DNE 'x'
- Selection summary: selected channel, its state, focused value type,
  current value and pending value, each with a fixed-width placeholder
  when it does not apply

Everything here is pure formatting; the display decides where lines go.
"""

from pydantic import BaseModel, ConfigDict

from pca9956b_cli.models import (
    GLOBAL_CHANNEL,
    NO_CHANNEL,
    NUM_CHANNELS,
    ChannelError,
    ChannelState,
    DeviceSnapshot,
    SelectionModel,
)

STATE_GLYPHS: dict[ChannelState, str] = {
    ChannelState.OFF: ".",
    ChannelState.ON: "o",
    ChannelState.PWM: "p",
    ChannelState.PWM_PLUS: "+",
}

ERROR_GLYPHS: dict[ChannelError, str] = {
    ChannelError.NONE: ".",
    ChannelError.OPEN: "o",
    ChannelError.SHORT: "s",
    ChannelError.DOES_NOT_EXIST: "x",
}

# Glyph for a channel the snapshot does not hold yet
MISSING_GLYPH = "."

GLYPH_GROUP_SIZE = 4

STATUS_KEY = "    Key: . Off  p PWM  + PWMPlus o On"
ERRORS_KEY = "    Key: . None o Open s Short   x DNE"

SELECTION_FORMAT = (
    " Selected: {selected:>2}  Status: {state:<7}  Val Type: {value_type:<7}"
    "  Cur Val: {value:<3}  New Val: {pending:<3}"
)


def dashes(width: int) -> str:
    """Placeholder for a field that does not apply."""
    return "-" * width


def group_glyphs(glyphs: tuple[str, ...]) -> str:
    """Join glyphs in runs of four, each run followed by a space."""
    return "".join(
        glyph + (" " if (position + 1) % GLYPH_GROUP_SIZE == 0 else "")
        for position, glyph in enumerate(glyphs)
    )


class StatusModel(BaseModel):
    """
    Per-channel glyphs derived from one snapshot.

    Equal snapshots always project to equal models.
    """

    model_config = ConfigDict(frozen=True)

    state_glyphs: tuple[str, ...]
    error_glyphs: tuple[str, ...]

    @classmethod
    def from_snapshot(cls, snapshot: DeviceSnapshot) -> "StatusModel":
        """Project a snapshot; channels it does not hold show MISSING_GLYPH."""
        states = [MISSING_GLYPH] * NUM_CHANNELS
        errors = [MISSING_GLYPH] * NUM_CHANNELS
        for status in snapshot.channels:
            states[status.index] = STATE_GLYPHS[status.state]
            errors[status.index] = ERROR_GLYPHS[status.error]
        return cls(state_glyphs=tuple(states), error_glyphs=tuple(errors))

    def glyph_pair(self, index: int) -> tuple[str, str]:
        """Get the (state, error) glyphs of one channel."""
        return self.state_glyphs[index], self.error_glyphs[index]

    def status_line(self) -> str:
        return " Status: " + group_glyphs(self.state_glyphs) + STATUS_KEY

    def errors_line(self) -> str:
        return " Errors: " + group_glyphs(self.error_glyphs) + ERRORS_KEY


def selection_line(selection: SelectionModel, snapshot: DeviceSnapshot) -> str:
    """
    Format the one-line selection summary.

    Args:
        selection: Current selection
        snapshot: Latest snapshot, used to read state and values

    Returns:
        The summary line, with placeholders for fields that do not apply
    """
    if selection.selected == GLOBAL_CHANNEL:
        selected = "**"
    elif selection.selected == NO_CHANNEL:
        selected = dashes(2)
    else:
        selected = str(selection.selected)

    status = selection.selected_status(snapshot)
    state = status.state.label if status is not None else dashes(7)

    value_type = selection.value_type.label if selection.value_type is not None else dashes(7)

    value = selection.current_value(snapshot)
    pending = selection.pending_value

    return SELECTION_FORMAT.format(
        selected=selected,
        state=state,
        value_type=value_type,
        value=str(value) if value is not None else dashes(3),
        pending=str(pending) if pending is not None else dashes(3),
    )
