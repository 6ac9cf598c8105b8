"""Channel status and device snapshot models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import ChannelError, ChannelState, ValueType

# Constants defined at module level for use in validators
NUM_CHANNELS = 24


class ChannelStatus(BaseModel):
    """Status of one LED output as reported by the device service."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, lt=NUM_CHANNELS, description="Output index (0-23)")
    state: ChannelState = Field(description="Driver state")
    error: ChannelError = Field(default=ChannelError.NONE, description="Error flag")
    current: int = Field(default=0, ge=0, le=255, description="Output current (0-255)")
    pwm: int = Field(default=0, ge=0, le=255, description="PWM duty cycle (0-255)")

    def value_of(self, value_type: ValueType) -> int:
        """Get the value of the given type."""
        if value_type is ValueType.CURRENT:
            return self.current
        return self.pwm


class DeviceSnapshot(BaseModel):
    """
    All channel statuses fetched from the device at one instant.

    A snapshot is never patched: a refresh replaces it with a new one.
    It is either empty (nothing fetched yet) or holds exactly one status
    per channel, ordered by index.
    """

    model_config = ConfigDict(frozen=True)

    channels: tuple[ChannelStatus, ...] = Field(
        default=(), description="Channel statuses ordered by index"
    )

    @field_validator("channels")
    @classmethod
    def validate_channels(cls, v: tuple[ChannelStatus, ...]) -> tuple[ChannelStatus, ...]:
        """Ensure an empty snapshot or exactly one status per channel, in order."""
        if not v:
            return v
        if len(v) != NUM_CHANNELS:
            raise ValueError(f"Snapshot must have exactly {NUM_CHANNELS} channels, got {len(v)}")
        for position, status in enumerate(v):
            if status.index != position:
                raise ValueError(
                    f"Channel at position {position} reports index {status.index}"
                )
        return v

    @classmethod
    def empty(cls) -> "DeviceSnapshot":
        """Create a snapshot holding no channels."""
        return cls()

    @classmethod
    def from_statuses(cls, statuses: list[ChannelStatus]) -> "DeviceSnapshot":
        """Create a snapshot from statuses in any order."""
        return cls(channels=tuple(sorted(statuses, key=lambda s: s.index)))

    def get(self, index: int) -> ChannelStatus | None:
        """Get the status of a channel, or None if it is not held."""
        if 0 <= index < len(self.channels):
            return self.channels[index]
        return None
