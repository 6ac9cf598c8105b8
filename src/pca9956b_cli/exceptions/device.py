"""Device-service exceptions.

This module defines exceptions for calls to the PCA9956B REST service:
- DeviceError: Base class for any failed device call
- DeviceConnectionError: The service could not be reached
- DeviceRequestError: The service answered with a failure status
- DeviceResponseError: The service answered with an unusable payload
- SnapshotRefreshError: A refresh failed, the panel cannot continue
"""

from .base import PanelError


class DeviceError(PanelError):
    """A call to the device service failed."""

    def __init__(self, user_message: str, operation: str | None = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            operation: Short description of the call (e.g. "get LED info")
        """
        super().__init__(user_message, **kwargs)
        self.operation = operation


class DeviceConnectionError(DeviceError):
    """The device service could not be reached."""

    def __init__(self, base_url: str, operation: str, original_error: str | None = None):
        """
        Initialize connection error.

        Args:
            base_url: URL of the device service
            operation: The call that was attempted
            original_error: The transport error message
        """
        user_msg = f"Cannot reach the device service at {base_url}"
        tech_msg = f"{operation} failed: could not connect to {base_url}"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            operation=operation,
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint="Check --host, --port and --https, and that the service is running.",
        )
        self.base_url = base_url


class DeviceRequestError(DeviceError):
    """The device service rejected a request."""

    def __init__(self, operation: str, status_code: int, detail: str | None = None):
        """
        Initialize request error.

        Args:
            operation: The call that was attempted
            status_code: HTTP status returned by the service
            detail: Error text reported by the service, if any
        """
        user_msg = f"Failed to {operation} (HTTP {status_code})"
        if detail:
            user_msg += f": {detail}"

        recovery = None
        if status_code == 404:
            recovery = "Check --bus and --addr match a PCA9956B on the service host."

        super().__init__(
            user_message=user_msg,
            operation=operation,
            technical_message=f"{operation} returned HTTP {status_code}: {detail or 'no detail'}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.status_code = status_code
        self.detail = detail


class DeviceResponseError(DeviceError):
    """The device service returned a payload that could not be understood."""

    def __init__(self, operation: str, reason: str):
        """
        Initialize response error.

        Args:
            operation: The call that was attempted
            reason: Why the payload was rejected
        """
        super().__init__(
            user_message=f"Unexpected response to {operation}",
            operation=operation,
            technical_message=f"Invalid payload for {operation}: {reason}",
        )
        self.reason = reason


class SnapshotRefreshError(PanelError):
    """LED status could not be refreshed; the displayed state is untrustworthy."""

    def __init__(self, cause: DeviceError):
        """
        Initialize refresh error.

        Args:
            cause: The device error that made the refresh fail
        """
        super().__init__(
            user_message=f"Failure to get PCA9956B info: {cause.user_message}",
            technical_message=cause.technical_message,
            recoverable=False,
            recovery_hint=cause.recovery_hint,
        )
        self.cause = cause
