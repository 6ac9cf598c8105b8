"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner for testing without actually running the curses panel.
"""

import json
import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from pca9956b_cli.cli.main import cli, resolve_log_level, resolve_log_path
from pca9956b_cli.exceptions import DeviceConnectionError, SnapshotRefreshError
from pca9956b_cli.ui import InputClosedError, SessionTerminated


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def log_args(tmp_path):
    """Send logs to a temporary file."""
    return ["--log-file", str(tmp_path / "panel.log")]


@pytest.fixture
def missing_config(tmp_path):
    """Point at a config file that does not exist so defaults apply."""
    return ["--config", str(tmp_path / "missing.json")]


@pytest.fixture(autouse=True)
def remove_file_handlers():
    """Detach handlers added by setup_logging so log files are closed."""
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    yield
    for handler in root_logger.handlers[:]:
        if handler not in before:
            root_logger.removeHandler(handler)
            handler.close()


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        """Test main CLI help displays."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'PCA9956B Controller' in result.output
        assert '--host' in result.output
        assert '--addr' in result.output
        assert '--https / --http' in result.output

    def test_version_flag(self, runner):
        """Test --version flag works."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_config_help(self, runner):
        """Test config command help."""
        result = runner.invoke(cli, ['config', '--help'])
        assert result.exit_code == 0


@pytest.mark.integration
class TestConfigCommand:
    """Test the config subcommand."""

    def test_defaults(self, runner, missing_config):
        result = runner.invoke(cli, [*missing_config, 'config'])

        assert result.exit_code == 0
        config = json.loads(result.output)
        assert config['host'] == 'localhost'
        assert config['port'] == 80
        assert config['bus'] == 0
        assert config['addr'] == 32
        assert config['https'] is False

    def test_options_override_file(self, runner, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"host": "pi.local", "bus": 1, "addr": 40}))

        result = runner.invoke(
            cli, ['--config', str(path), '--addr', '33', '--https', 'config']
        )

        assert result.exit_code == 0
        config = json.loads(result.output)
        assert config['host'] == 'pi.local'
        assert config['bus'] == 1
        assert config['addr'] == 33
        assert config['https'] is True

    def test_invalid_option_value(self, runner, missing_config):
        result = runner.invoke(cli, [*missing_config, '--addr', '300', 'config'])

        assert result.exit_code == 1
        assert "Invalid configuration value for 'addr'" in result.output

    def test_invalid_config_file(self, runner, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"host": "pi.local",}')

        result = runner.invoke(cli, ['--config', str(path), 'config'])

        assert result.exit_code == 1
        assert 'ERROR:' in result.output


@pytest.mark.integration
class TestRunPanel:
    """Test the default command with the panel patched out."""

    def test_quit_exit_code(self, runner, log_args, missing_config):
        with patch('pca9956b_cli.app.launch', return_value=128) as launch:
            result = runner.invoke(cli, [*log_args, *missing_config, '--host', 'pi.local'])

        assert result.exit_code == 128
        config = launch.call_args.args[0]
        assert config.host == 'pi.local'
        assert config.base_url == 'http://pi.local:80'

    def test_refresh_failure_exit_code(self, runner, log_args, missing_config):
        error = SnapshotRefreshError(
            DeviceConnectionError("http://localhost:80", "get LED info")
        )
        with patch('pca9956b_cli.app.launch', side_effect=error):
            result = runner.invoke(cli, [*log_args, *missing_config])

        assert result.exit_code == 129
        assert 'Failure to get PCA9956B info' in result.output

    def test_signal_exit_code(self, runner, log_args, missing_config):
        with patch('pca9956b_cli.app.launch', side_effect=SessionTerminated(15)):
            result = runner.invoke(cli, [*log_args, *missing_config])

        assert result.exit_code == 143

    def test_closed_input_exit_code(self, runner, tmp_path, log_args, missing_config):
        with patch('pca9956b_cli.app.launch', side_effect=InputClosedError(100)):
            result = runner.invoke(cli, [*log_args, *missing_config])

        assert result.exit_code == 1
        assert 'Terminal input closed' in result.output
        assert 'Stopped reading keys' in (tmp_path / "panel.log").read_text()

    def test_unexpected_error(self, runner, log_args, missing_config):
        with patch('pca9956b_cli.app.launch', side_effect=RuntimeError("boom")):
            result = runner.invoke(cli, [*log_args, *missing_config])

        assert result.exit_code == 1
        assert 'RuntimeError: boom' in result.output

    def test_bad_config_never_launches(self, runner, log_args, missing_config):
        with patch('pca9956b_cli.app.launch') as launch:
            result = runner.invoke(cli, [*log_args, *missing_config, '--port', '0'])

        assert result.exit_code == 1
        launch.assert_not_called()

    def test_log_file_written(self, runner, tmp_path, missing_config):
        log_path = tmp_path / "panel.log"
        with patch('pca9956b_cli.app.launch', return_value=128):
            runner.invoke(cli, ['--log-file', str(log_path), *missing_config])

        assert 'Starting PCA9956B control panel' in log_path.read_text()


class TestLoggingOptions:
    """Test how the logging flags pick a level and a file."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "verbose, debug, expected",
        [
            (0, False, logging.WARNING),
            (1, False, logging.INFO),
            (2, False, logging.DEBUG),
            (0, True, logging.DEBUG),
        ],
    )
    def test_level_from_flags(self, verbose, debug, expected):
        assert resolve_log_level(verbose, debug, None, 'INFO') == expected

    @pytest.mark.unit
    def test_log_file_uses_log_level(self, tmp_path):
        assert resolve_log_level(2, True, tmp_path / "x.log", 'error') == logging.ERROR

    @pytest.mark.unit
    def test_log_path(self, tmp_path):
        assert resolve_log_path(True, tmp_path / "x.log") == tmp_path / "x.log"
        assert resolve_log_path(False, None).name == "pca9956b-cli.log"
        assert resolve_log_path(True, None).name == "pca9956b-cli-debug.log"
