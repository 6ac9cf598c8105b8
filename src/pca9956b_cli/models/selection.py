"""Channel selection and value-type focus."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .channel import NUM_CHANNELS, ChannelStatus, DeviceSnapshot
from .enums import ValueType

# Selection sentinels around the concrete channel range 0-23
NO_CHANNEL = -1
GLOBAL_CHANNEL = NUM_CHANNELS  # Write-only: "all channels"


def is_channel(index: int) -> bool:
    """Check if a selection index names one concrete channel."""
    return 0 <= index < NUM_CHANNELS


class SelectionModel(BaseModel):
    """
    What the panel is currently pointed at.

    `selected` is NO_CHANNEL, a channel 0-23, or GLOBAL_CHANNEL.
    Changing the selection or the value type always discards the
    pending edit value.
    """

    model_config = ConfigDict(validate_assignment=True)

    selected: int = Field(default=NO_CHANNEL, description="Selected channel or sentinel")
    value_type: ValueType | None = Field(default=None, description="Focused value type")
    pending_value: int | None = Field(
        default=None, ge=0, le=255, description="Edited value not yet applied"
    )

    @field_validator("selected")
    @classmethod
    def validate_selected(cls, v: int) -> int:
        """Ensure the selection is a channel or one of the sentinels."""
        if not NO_CHANNEL <= v <= GLOBAL_CHANNEL:
            raise ValueError(
                f"Selection {v} out of range (must be {NO_CHANNEL}-{GLOBAL_CHANNEL})"
            )
        return v

    def select_channel(self, index: int) -> None:
        """Replace the selection and discard any pending value."""
        self.selected = index
        self.pending_value = None

    def select_value_type(self, value_type: ValueType) -> None:
        """Replace the focused value type and discard any pending value."""
        self.value_type = value_type
        self.pending_value = None

    @property
    def is_global(self) -> bool:
        return self.selected == GLOBAL_CHANNEL

    def target_channels(self) -> list[int]:
        """
        Channels a write applies to, in ascending order.

        Returns:
            [ix] for a concrete channel, all channels for the global
            selection, and an empty list when nothing is selected
        """
        if is_channel(self.selected):
            return [self.selected]
        if self.is_global:
            return list(range(NUM_CHANNELS))
        return []

    def selected_status(self, snapshot: DeviceSnapshot) -> ChannelStatus | None:
        """Get the snapshot status of the selected channel, if it is readable."""
        if not is_channel(self.selected):
            return None
        return snapshot.get(self.selected)

    def current_value(self, snapshot: DeviceSnapshot) -> int | None:
        """
        Read the focused value of the selected channel from a snapshot.

        Global values are write-only and nothing is readable without a
        concrete channel, so those selections give None.
        """
        if self.value_type is None:
            return None
        status = self.selected_status(snapshot)
        if status is None:
            return None
        return status.value_of(self.value_type)
