"""
Turning low-level failures into PanelErrors, and reporting them.

Where errors come from and where they end up:

```
httpx.HTTPError ──wrap_http_error──────► DeviceError ──► planner
                                                           │ refresh failed
pydantic.ValidationError ──wrap_pydantic_error──► ConfigurationError
                                                           │
                                                           ▼
                      cli.main: format_error_for_display → stderr, log file
```

| Situation | Helper |
|-----------|--------|
| An httpx call raised | `raise wrap_http_error(e, base_url, "get LED info") from e` |
| Config file or option failed validation | `raise wrap_pydantic_error(e, str(path)) from e` |
| Writing several LEDs, keep going on failure | `ErrorCollector("set LEDs", catch=DeviceError)` |
| Start-up step that should be logged | `with ErrorContext("create device client"): ...` |
| Printing an error for the user | `message, hint = format_error_for_display(e)` |
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import httpx
from pydantic import ValidationError

from .base import PanelError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import DeviceConnectionError, DeviceError, DeviceRequestError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Log the start, end or failure of one step.

    PanelErrors are logged with their technical message; anything else is
    logged with a traceback. The exception always propagates.

    Example:
        ```python
        with ErrorContext("create device client", logger_instance=logger):
            service = HttpDeviceService.from_config(config)
        ```
    """

    def __init__(self, operation: str, logger_instance: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger_instance or logger

    def __enter__(self) -> "ErrorContext":
        self.logger.debug(f"{self.operation}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            self.logger.debug(f"{self.operation}: done")
            return False

        if isinstance(exc_val, PanelError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val!r}", exc_info=exc_val)
        return False


def _field_name(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "unknown"


def wrap_pydantic_error(error: ValidationError, file_path: str) -> PanelError:
    """
    Convert a pydantic ValidationError raised while loading configuration.

    Args:
        error: The validation error
        file_path: Config file path, or "command line" for option overrides

    Returns:
        ConfigFileInvalidError for malformed JSON, otherwise a
        ConfigValidationError naming the offending field(s)
    """
    details = error.errors()

    for detail in details:
        if detail.get("type") == "json_invalid":
            parse_error = detail.get("ctx", {}).get("error", detail.get("msg", str(error)))
            return ConfigFileInvalidError(file_path, str(parse_error))

    if len(details) == 1:
        detail = details[0]
        return ConfigValidationError(
            field=_field_name(detail),
            value=detail.get("input"),
            error_msg=detail.get("msg", "invalid value"),
            file_path=file_path,
        )

    lines = [f"  - {_field_name(detail)}: {detail.get('msg', 'invalid value')}" for detail in details]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(details)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Extract the service's OpError text from a failed response."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


def wrap_http_error(error: Exception, base_url: str, operation: str) -> DeviceError:
    """
    Convert an httpx error into a DeviceError.

    Args:
        error: Exception raised by httpx
        base_url: URL of the device service
        operation: Short description of the call (e.g. "set LED 3 to On")

    Returns:
        DeviceRequestError for an error status, DeviceConnectionError for a
        transport failure, a plain DeviceError otherwise
    """
    if isinstance(error, httpx.HTTPStatusError):
        return DeviceRequestError(
            operation=operation,
            status_code=error.response.status_code,
            detail=_error_detail(error.response),
        )

    if isinstance(error, httpx.TransportError):
        return DeviceConnectionError(base_url, operation, original_error=str(error))

    return DeviceError(
        user_message=f"Failed to {operation}: {error}",
        operation=operation,
        technical_message=f"{operation} against {base_url} failed: {error!r}",
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Get the console message and recovery hint for an exception.

    Exceptions that are not PanelErrors are shown with their type name and
    have no hint.
    """
    if isinstance(error, PanelError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None


class ErrorCollector:
    """
    Run a batch of steps, recording failures instead of stopping.

    Only exceptions of the `catch` type are recorded; any other exception
    propagates out of try_operation(). `last_error` holds the outcome of the
    most recent step (None when it succeeded).
    """

    def __init__(self, operation: str, catch: type[BaseException] = Exception):
        """
        Args:
            operation: Description of the whole batch
            catch: Exception type to record
        """
        self.operation = operation
        self.catch = catch
        self.errors: list[tuple[str, BaseException]] = []
        self.success_count = 0
        self.last_error: Optional[BaseException] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @contextmanager
    def try_operation(self, sub_operation: str) -> Iterator[None]:
        """Run one step of the batch, recording a failure of the `catch` type."""
        try:
            yield
        except self.catch as e:
            self.errors.append((sub_operation, e))
            self.last_error = e
            logger.debug(f"{self.operation}: {sub_operation} failed: {e}")
        else:
            self.success_count += 1
            self.last_error = None

    def get_summary(self) -> str:
        """One line for a clean batch, otherwise one line per failed step."""
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        total = self.error_count + self.success_count
        lines = [f"Failed {self.error_count} of {total} operations:"]
        for sub_operation, error in self.errors:
            lines.append(f"  - {sub_operation}: {error}")
        return "\n".join(lines)
