"""Integration tests for the control loop.

These drive ControlPanel with a scripted key source, a mock display and a
mock device service: everything between key press and screen is real.
"""

from unittest.mock import Mock, call, patch

import pytest

from pca9956b_cli.app import ControlPanel, launch
from pca9956b_cli.core import ActionPlanner, StatusModel, selection_line
from pca9956b_cli.exceptions import DeviceConnectionError, SnapshotRefreshError
from pca9956b_cli.input import InputDecoder
from pca9956b_cli.models import ChannelState, PanelConfig

ESC = 27
ENTER = 10


@pytest.fixture
def display():
    return Mock(spec=["draw_template", "show_status", "show_selection", "show_info"])


def make_panel(service, display, keys):
    planner = ActionPlanner(service, bus=0, address=32, progress=display.show_info)
    panel = ControlPanel(planner, InputDecoder(), display, keys.read_key, keys.read_key_nowait)
    return panel, planner


@pytest.mark.integration
class TestControlPanel:
    """Test the full key → device → screen loop."""

    def test_draws_template_then_initial_refresh(self, device_service, display, key_script, snapshot):
        panel, _ = make_panel(device_service, display, key_script([ESC]))

        panel.run()

        assert display.mock_calls[0] == call.draw_template()
        assert display.mock_calls[1] == call.show_info("Refreshing LED status ... please wait")
        assert display.mock_calls[2] == call.show_status(StatusModel.from_snapshot(snapshot))
        assert display.mock_calls[4] == call.show_info("Refreshed LED status")

    def test_escape_quits_with_128(self, device_service, display, key_script):
        keys = key_script([ESC])
        panel, _ = make_panel(device_service, display, keys)

        assert panel.run() == 128
        display.show_info.assert_called_with("User termination")
        assert keys.blocking_reads == 1

    def test_initial_refresh_failure_reads_no_keys(self, device_service, display, key_script):
        """Test a failed first fetch ends the session before any key is read."""
        device_service.fetch_all.side_effect = DeviceConnectionError(
            "http://localhost:80", "get LED info"
        )
        keys = key_script(["q", ESC])
        panel, _ = make_panel(device_service, display, keys)

        with pytest.raises(SnapshotRefreshError):
            panel.run()

        assert keys.blocking_reads == 0
        display.show_status.assert_not_called()

    def test_select_and_set_mode(self, device_service, display, key_script):
        keys = key_script(["w", "2", ESC])
        panel, planner = make_panel(device_service, display, keys)

        assert panel.run() == 128

        device_service.set_channel_state.assert_called_once_with(0, 32, 1, ChannelState.ON)
        assert device_service.fetch_all.call_count == 2
        display.show_info.assert_any_call("Selected LED 1")
        display.show_info.assert_any_call("Setting LED 1 to On")
        display.show_info.assert_any_call("Set LED 1 to On")
        assert planner.selection.selected == 1

    def test_mode_without_selection_redraws_nothing(self, device_service, display, key_script):
        keys = key_script(["3", ESC])
        panel, _ = make_panel(device_service, display, keys)

        panel.run()

        device_service.set_channel_state.assert_not_called()
        assert display.show_status.call_count == 1

    def test_selection_line_follows_keys(self, device_service, display, key_script, snapshot):
        keys = key_script(["y", "5", ESC])
        panel, planner = make_panel(device_service, display, keys)

        panel.run()

        last_line = display.show_selection.call_args_list[-1].args[0]
        assert last_line == selection_line(planner.selection, snapshot)
        assert "Selected:  5" in last_line
        assert "Cur Val: 42 " in last_line

    def test_cursor_keys_and_unknown(self, device_service, display, key_script):
        keys = key_script([ESC, "[", "A", ESC, "[", "B", ESC, "[", "Z", "!", ESC])
        panel, _ = make_panel(device_service, display, keys)

        assert panel.run() == 128

        infos = [c.args[0] for c in display.show_info.call_args_list]
        assert infos[-5:] == [
            "Pressed Up",
            "Pressed Down",
            "Unknown key-press 91, 90",
            "Unknown key-press 33",
            "User termination",
        ]

    def test_refreshes_project_identically(self, device_service, display, key_script):
        """Test two refreshes of an unchanged device draw the same rows."""
        keys = key_script([ENTER, ESC])
        panel, _ = make_panel(device_service, display, keys)

        panel.run()

        first, second = display.show_status.call_args_list
        assert first == second
        assert device_service.fetch_all.call_count == 2

    def test_refresh_failure_mid_session(self, device_service, display, key_script, statuses):
        device_service.fetch_all.side_effect = [
            statuses,
            DeviceConnectionError("http://localhost:80", "get LED info"),
        ]
        keys = key_script([ENTER, ESC])
        panel, _ = make_panel(device_service, display, keys)

        with pytest.raises(SnapshotRefreshError):
            panel.run()

        assert list(keys.codes) == [ESC]


@pytest.mark.integration
class TestLaunch:
    """Test launch() wiring with the terminal patched out."""

    def test_launch_runs_panel_in_session(self, device_service):
        with patch("pca9956b_cli.app.TerminalSession") as session_cls, \
                patch("pca9956b_cli.app.ControlPanel") as panel_cls:
            panel_cls.return_value.run.return_value = 128

            exit_code = launch(PanelConfig(), service=device_service)

        assert exit_code == 128
        session_cls.return_value.__enter__.assert_called_once()
        session_cls.return_value.__exit__.assert_called_once()

    def test_launch_closes_owned_client(self):
        with patch("pca9956b_cli.app.HttpDeviceService") as service_cls, \
                patch("pca9956b_cli.app.TerminalSession"), \
                patch("pca9956b_cli.app.ControlPanel") as panel_cls:
            panel_cls.return_value.run.side_effect = SnapshotRefreshError(
                DeviceConnectionError("http://localhost:80", "get LED info")
            )

            with pytest.raises(SnapshotRefreshError):
                launch(PanelConfig())

        service_cls.from_config.return_value.close.assert_called_once()

    def test_launch_does_not_close_injected_service(self, device_service):
        with patch("pca9956b_cli.app.TerminalSession"), \
                patch("pca9956b_cli.app.ControlPanel") as panel_cls:
            panel_cls.return_value.run.return_value = 128
            launch(PanelConfig(), service=device_service)

        assert device_service.mock_calls == []
