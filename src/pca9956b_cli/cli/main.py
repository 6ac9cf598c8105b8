"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from pca9956b_cli import __version__
from pca9956b_cli.core import EXIT_CONFIG_ERROR, EXIT_DEVICE_FAILURE, EXIT_INPUT_CLOSED
from pca9956b_cli.exceptions import (
    ConfigurationError,
    SnapshotRefreshError,
    format_error_for_display,
)
from pca9956b_cli.models import PanelConfig

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".pca9956b" / "logs"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Pick the log file for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "pca9956b-cli-debug.log"
    return DEFAULT_LOG_DIR / "pca9956b-cli.log"


def resolve_log_level(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> int:
    """An explicit --log-file uses --log-level; otherwise -v/--debug decide."""
    if log_file:
        return logging.getLevelName(log_level.upper())
    if debug or verbose >= 2:
        return logging.DEBUG
    return logging.INFO if verbose == 1 else logging.WARNING


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Send all logging to a rotating file.

    curses owns the terminal while the panel runs, so nothing is logged to
    the console.

    Args:
        verbose: -v count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: DEBUG level, logged to ./pca9956b-cli-debug.log
        log_file: Explicit log file
        log_level: Level used with an explicit log file

    Returns:
        Path of the log file
    """
    level = resolve_log_level(verbose, debug, log_file, log_level)
    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    logger.info(f"Logging to {log_path} at {logging.getLevelName(level)}")
    return log_path


def echo_error(error: Exception, log_path: Optional[Path] = None) -> None:
    """Show an error on stderr without a traceback."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path is not None:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)


def load_config(ctx: click.Context) -> PanelConfig:
    """Build the effective configuration from the config file and the options."""
    params = ctx.find_root().params
    config = PanelConfig.load_or_default(params["config_path"])
    return config.with_overrides(
        https=params["https"],
        host=params["host"],
        port=params["port"],
        bus=params["bus"],
        addr=params["addr"],
        ca_cert=params["ca_cert"],
        request_timeout=params["timeout"],
    )


def dump_config(config: PanelConfig) -> None:
    """Log the effective configuration."""
    logger.info(f"Arg https: {config.https}")
    logger.info(f"Arg host:  {config.host}")
    logger.info(f"Arg port:  {config.port}")
    logger.info(f"Arg bus:   {config.bus}")
    logger.info(f"Arg addr:  {config.addr}")


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="pca9956b-cli")
@click.option(
    '--https/--http',
    default=None,
    help='Whether to use HTTPS or not (default: HTTP)'
)
@click.option('--host', type=str, default=None, help='Hostname to contact (default: localhost)')
@click.option('--port', type=int, default=None, help='Port to contact (default: 80)')
@click.option('--bus', type=int, default=None, help='I2C Bus ID (default: 0)')
@click.option('--addr', type=int, default=None, help='PCA9956B I2C address (default: 32)')
@click.option(
    '--ca-cert',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='CA bundle for verifying the service certificate (HTTPS only)'
)
@click.option(
    '--timeout',
    type=float,
    default=None,
    help='Timeout for each device call in seconds (default: 5)'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.pca9956b/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./pca9956b-cli-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for --log-file (default: INFO)'
)
def cli(
    ctx,
    https: Optional[bool],
    host: Optional[str],
    port: Optional[int],
    bus: Optional[int],
    addr: Optional[int],
    ca_cert: Optional[Path],
    timeout: Optional[float],
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    PCA9956B Controller - terminal control panel for 24-channel LED drivers.

    Talks to a PCA9956B device-control service over HTTP(S) and shows the
    state and error flags of all 24 LEDs. Select an LED (or all of them)
    with the letter keys, then switch it Off/On/PWM/PWMPlus with 1-4.

    \b
    Exit codes:
      128        quit with Esc
      129        LED status could not be read from the device
      128+N      terminated by signal N
      1          bad configuration, or the terminal stopped sending keys

    \b
    Examples:
      # Panel for the default device (localhost:80, bus 0, address 32)
      pca9956b-cli

      # Remote service over HTTPS, device on bus 1 at address 0x21
      pca9956b-cli --https --host pi.local --port 443 --bus 1 --addr 33

      # Enable debug logging
      pca9956b-cli --debug

      # Show the effective configuration
      pca9956b-cli --host pi.local config
    """
    if ctx.invoked_subcommand is not None:
        return

    from pca9956b_cli.app import launch
    from pca9956b_cli.ui import InputClosedError, SessionTerminated

    log_path = setup_logging(verbose, debug, log_file, log_level)
    logger.info("Starting PCA9956B control panel")

    try:
        config = load_config(ctx)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.technical_message}")
        echo_error(e, log_path)
        sys.exit(EXIT_CONFIG_ERROR)

    dump_config(config)

    try:
        exit_code = launch(config)
    except SnapshotRefreshError as e:
        logger.error(f"Fatal refresh failure: {e.technical_message}")
        echo_error(e, log_path)
        sys.exit(EXIT_DEVICE_FAILURE)
    except SessionTerminated as e:
        sys.exit(e.exit_code)
    except InputClosedError as e:
        logger.error(f"Stopped reading keys: {e.technical_message}")
        echo_error(e, log_path)
        sys.exit(EXIT_INPUT_CLOSED)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running control panel")
        echo_error(e, log_path)
        sys.exit(EXIT_CONFIG_ERROR)

    logger.info(f"Control panel exited with code {exit_code}")
    sys.exit(exit_code)


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    try:
        config = load_config(ctx)
    except ConfigurationError as e:
        echo_error(e)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(config.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
