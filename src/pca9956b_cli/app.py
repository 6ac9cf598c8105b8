"""Control loop for the PCA9956B panel.

ControlPanel ties the pieces together::

    KeyReader → InputDecoder → Command → ActionPlanner → Action → CursesDisplay
                                              ↓
                                        DeviceService

One key is fully resolved, device calls included, before the next one is
read. The loop ends when an action carries an exit code; a failed refresh
raises SnapshotRefreshError out of run().
"""

import logging
from typing import Protocol

from pca9956b_cli.core import Action, ActionPlanner, Region, StatusModel, selection_line
from pca9956b_cli.device import DeviceService, HttpDeviceService
from pca9956b_cli.exceptions import ErrorContext
from pca9956b_cli.input import InputDecoder, KeySource, NoWaitKeySource, Refresh
from pca9956b_cli.models import PanelConfig
from pca9956b_cli.ui import CursesDisplay, KeyReader, TerminalSession

logger = logging.getLogger(__name__)


class PanelDisplay(Protocol):
    """What the control loop needs from a display."""

    def draw_template(self) -> None: ...

    def show_status(self, status: StatusModel) -> None: ...

    def show_selection(self, line: str) -> None: ...

    def show_info(self, text: str) -> None: ...


class ControlPanel:
    """
    The interactive control loop.

    Example:
        >>> panel = ControlPanel(planner, decoder, display, reader.read_key, reader.read_key_nowait)
        >>> exit_code = panel.run()
    """

    def __init__(
        self,
        planner: ActionPlanner,
        decoder: InputDecoder,
        display: PanelDisplay,
        read_key: KeySource,
        read_key_nowait: NoWaitKeySource,
    ):
        """
        Initialize the control loop.

        Args:
            planner: Resolves commands (owns selection and snapshot)
            decoder: Turns key codes into commands
            display: Where actions are rendered
            read_key: Blocking key read
            read_key_nowait: Bounded key read for escape sequences
        """
        self.planner = planner
        self.decoder = decoder
        self.display = display
        self.read_key = read_key
        self.read_key_nowait = read_key_nowait

    def run(self) -> int:
        """
        Draw the panel, load the initial status and process keys until quit.

        Returns:
            The process exit code chosen by the quitting action

        Raises:
            SnapshotRefreshError: If any refresh fails (including the first)
        """
        self.display.draw_template()
        action = self.planner.handle(Refresh())
        while True:
            self.render(action)
            if action.exit:
                logger.info(f"Exiting: {action.info}")
                return action.exit_code
            command = self.decoder.decode(self.read_key, self.read_key_nowait)
            action = self.planner.handle(command)

    def render(self, action: Action) -> None:
        """Redraw the regions an action changed."""
        for region in action.ordered_regions():
            if region is Region.STATUS:
                self.display.show_status(StatusModel.from_snapshot(self.planner.snapshot))
            elif region is Region.SELECTION:
                self.display.show_selection(
                    selection_line(self.planner.selection, self.planner.snapshot)
                )
            elif region is Region.INFO and action.info is not None:
                self.display.show_info(action.info)


def launch(config: PanelConfig, service: DeviceService | None = None) -> int:
    """
    Run the panel against the configured device.

    The terminal is acquired for the duration of the call and restored on
    every exit path before this function returns or raises.

    Args:
        config: Effective configuration
        service: Device service to use (defaults to an HTTP client for config)

    Returns:
        Exit code chosen by the panel

    Raises:
        SnapshotRefreshError: If the device status could not be read
        SessionTerminated: If SIGINT/SIGTERM arrived
    """
    owned_service = None
    if service is None:
        with ErrorContext("create device client", logger_instance=logger):
            owned_service = HttpDeviceService.from_config(config)
        service = owned_service

    try:
        with TerminalSession() as session:
            display = CursesDisplay(session.window)
            reader = KeyReader(session.window, config.escape_timeout_ms)
            planner = ActionPlanner(
                service,
                bus=config.bus,
                address=config.addr,
                progress=display.show_info,
            )
            panel = ControlPanel(
                planner,
                InputDecoder(),
                display,
                reader.read_key,
                reader.read_key_nowait,
            )
            return panel.run()
    finally:
        if owned_service is not None:
            owned_service.close()
