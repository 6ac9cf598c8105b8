"""Device service protocol."""

from typing import Protocol, runtime_checkable

from pca9956b_cli.models import ChannelState, ChannelStatus


@runtime_checkable
class DeviceService(Protocol):
    """
    Remote control of PCA9956B LED drivers.

    Implementations raise DeviceError (or a subclass) for any failed call.
    Callers only distinguish success from failure.
    """

    def fetch_all(self, bus: int, address: int) -> list[ChannelStatus]:
        """
        Read the status of every LED output in one call.

        Args:
            bus: I2C bus ID
            address: I2C address of the PCA9956B

        Returns:
            One status per output (0-23)
        """
        ...

    def set_channel_state(self, bus: int, address: int, channel: int, state: ChannelState) -> None:
        """
        Set the driver state of one LED output.

        Args:
            bus: I2C bus ID
            address: I2C address of the PCA9956B
            channel: Output index (0-23)
            state: New driver state
        """
        ...
