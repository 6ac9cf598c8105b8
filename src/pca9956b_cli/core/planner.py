"""Action planner - the panel's state machine.

The planner owns the selection and the latest device snapshot. For each
command it:

1. Makes any device calls the command needs, one at a time
2. Updates the selection and/or replaces the snapshot
3. Returns an Action saying which screen regions must be redrawn

Only one command is resolved at a time; the caller reads the next key
after handle() returns.

Refresh Policy:
    The snapshot is replaced only by Refresh, and every LED write is
    followed by a Refresh so the panel shows what the device really did.
    Selecting a channel or value type re-renders from the snapshot already
    held; it never refetches.

Failure Policy:
    A failed LED write is reported on the info line and the batch carries
    on. A failed Refresh raises SnapshotRefreshError: the panel cannot show
    trustworthy state, so the session ends.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from pydantic import ValidationError

from pca9956b_cli.device import DeviceService
from pca9956b_cli.exceptions import (
    DeviceError,
    DeviceResponseError,
    ErrorCollector,
    SnapshotRefreshError,
)
from pca9956b_cli.input import (
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
from pca9956b_cli.models import (
    GLOBAL_CHANNEL,
    NO_CHANNEL,
    ChannelState,
    DeviceSnapshot,
    SelectionModel,
)

from .exit_codes import EXIT_QUIT

logger = logging.getLogger(__name__)


class Region(Enum):
    """Screen regions that can be redrawn independently."""

    STATUS = "status"  # State and error glyph rows
    SELECTION = "selection"  # Selection summary line
    INFO = "info"  # Transient message line


# Redraw order when several regions change at once
REGION_ORDER = (Region.STATUS, Region.SELECTION, Region.INFO)


@dataclass
class Action:
    """
    Outcome of one command: what to redraw and whether to stop.

    Attributes:
        regions: Regions to redraw (empty means nothing changed on screen)
        info: Message for the info line
        exit_code: Set when the panel should terminate with this code
    """

    regions: frozenset[Region] = field(default_factory=frozenset)
    info: Optional[str] = None
    exit_code: Optional[int] = None

    @property
    def exit(self) -> bool:
        return self.exit_code is not None

    def ordered_regions(self) -> list[Region]:
        return [region for region in REGION_ORDER if region in self.regions]


ALL_REGIONS = frozenset(REGION_ORDER)
SELECTION_AND_INFO = frozenset({Region.SELECTION, Region.INFO})
INFO_ONLY = frozenset({Region.INFO})


class ActionPlanner:
    """
    Resolves commands against the selection, the snapshot and the device.

    Example:
        >>> planner = ActionPlanner(service, bus=0, address=32)
        >>> planner.handle(Refresh()).info
        'Refreshed LED status'
        >>> planner.handle(SelectChannel(GLOBAL_CHANNEL)).info
        'Selected Global'
    """

    def __init__(
        self,
        service: DeviceService,
        bus: int,
        address: int,
        selection: Optional[SelectionModel] = None,
        progress: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the planner.

        Args:
            service: Device service used for reads and writes
            bus: I2C bus ID of the target device
            address: I2C address of the target device
            selection: Initial selection (defaults to nothing selected)
            progress: Called with a message before each blocking device call
        """
        self.service = service
        self.bus = bus
        self.address = address
        self.selection = selection if selection is not None else SelectionModel()
        self.snapshot = DeviceSnapshot.empty()
        self._progress = progress or (lambda message: None)

    def handle(self, command: Command) -> Action:
        """
        Resolve one command, including any device calls it needs.

        Args:
            command: The decoded command

        Returns:
            What to redraw, and whether to exit

        Raises:
            SnapshotRefreshError: If a refresh could not read the device
        """
        if isinstance(command, Refresh):
            self.refresh()
            return Action(regions=ALL_REGIONS, info="Refreshed LED status")

        if isinstance(command, SetMode):
            return self._set_mode(command.state)

        if isinstance(command, SelectChannel):
            self.selection.select_channel(command.channel)
            return Action(regions=SELECTION_AND_INFO, info=_selected_message(command.channel))

        if isinstance(command, SelectValueType):
            self.selection.select_value_type(command.value_type)
            return Action(
                regions=SELECTION_AND_INFO,
                info=f"Selected {command.value_type.label} Value",
            )

        if isinstance(command, AdjustUp):
            return Action(regions=INFO_ONLY, info="Pressed Up")

        if isinstance(command, AdjustDown):
            return Action(regions=INFO_ONLY, info="Pressed Down")

        if isinstance(command, Apply):
            return Action(regions=INFO_ONLY, info="Apply not supported yet")

        if isinstance(command, Quit):
            return Action(regions=INFO_ONLY, info="User termination", exit_code=EXIT_QUIT)

        if isinstance(command, Unknown):
            # After Esc only the bytes that followed it are reported
            codes = ", ".join(str(code) for code in command.follow_up or command.codes)
            return Action(regions=INFO_ONLY, info=f"Unknown key-press {codes}")

        logger.warning(f"Unhandled command: {command!r}")
        return Action()

    def refresh(self) -> DeviceSnapshot:
        """
        Fetch every channel and replace the snapshot.

        Raises:
            SnapshotRefreshError: If the device could not be read
        """
        self._progress("Refreshing LED status ... please wait")
        try:
            statuses = self.service.fetch_all(self.bus, self.address)
            snapshot = DeviceSnapshot.from_statuses(statuses)
        except ValidationError as e:
            error = DeviceResponseError("get LED info", str(e))
            logger.error(f"Refresh failed: {error.technical_message}")
            raise SnapshotRefreshError(error) from e
        except DeviceError as e:
            logger.error(f"Refresh failed: {e.technical_message}")
            raise SnapshotRefreshError(e) from e

        self.snapshot = snapshot
        logger.debug("Snapshot replaced")
        return snapshot

    def _set_mode(self, state: ChannelState) -> Action:
        channels = self.selection.target_channels()
        if not channels:
            logger.debug(f"No LED selected, ignoring {state.label}")
            return Action()

        collector = ErrorCollector(f"set LEDs to {state.label}", catch=DeviceError)
        info = None
        for channel in channels:
            self._progress(f"Setting LED {channel} to {state.label}")
            with collector.try_operation(f"set LED {channel}"):
                self.service.set_channel_state(self.bus, self.address, channel, state)
            if collector.last_error is None:
                info = f"Set LED {channel} to {state.label}"
            else:
                logger.info(f"Failed to set LED {channel} to {state.label}: {collector.last_error}")
                info = f"Failed to set LED {channel} to {state.label}"

        if collector.has_errors:
            logger.warning(collector.get_summary())

        self.refresh()
        return Action(regions=ALL_REGIONS, info=info)


def _selected_message(channel: int) -> str:
    if channel == GLOBAL_CHANNEL:
        return "Selected Global"
    if channel == NO_CHANNEL:
        return "No LED selected"
    return f"Selected LED {channel}"
