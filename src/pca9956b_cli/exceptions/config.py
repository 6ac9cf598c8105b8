"""Errors in the panel configuration.

Configuration comes from an optional JSON file (~/.pca9956b/config.json
or --config) with command-line options layered on top. Either source can
be wrong:

- ConfigFileInvalidError: the file cannot be read or is not JSON
- ConfigValidationError: a value from the file or an option is out of range
"""

from typing import Any, Optional

from .base import PanelError

# Extra help for the values users get wrong most often
FIELD_HINTS = {
    "addr": "The PCA9956B address is the 7-bit I2C address (0-127), e.g. --addr 32",
    "port": "Ports must be between 1 and 65535",
    "bus": "Use the numeric I2C bus ID, e.g. --bus 1 for /dev/i2c-1",
    "escape_timeout_ms": "Use a few tens of milliseconds; larger values make Esc feel slow",
}


class ConfigurationError(PanelError):
    """The panel cannot start with the given configuration."""


class ConfigFileInvalidError(ConfigurationError):
    """The config file is unreadable, empty or not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Args:
            file_path: Path of the config file
            parse_error: Parser or I/O error text
        """
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "Config file has a trailing comma"
            recovery = f"Remove the comma after the last entry in {file_path}"
        else:
            user_msg = f"Config file {file_path} is not a valid JSON object"
            recovery = (
                "The file must hold one JSON object, for example:\n"
                '  {"host": "pi.local", "port": 8080, "bus": 1, "addr": 32}\n'
                "Delete the file to run with the defaults."
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A configuration value is out of range or of the wrong type."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Args:
            field: Name of the offending setting
            value: The rejected value
            error_msg: Validator message
            file_path: Where the value came from ("command line" or a file path)
        """
        hints = [f"Fix the '{field}' setting"]
        if file_path:
            hints[0] += f" (from {file_path})"
        if field in FIELD_HINTS:
            hints.append(FIELD_HINTS[field])

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(hints),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
