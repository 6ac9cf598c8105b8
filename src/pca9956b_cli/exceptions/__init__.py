"""
Custom exception hierarchy for the PCA9956B control panel.

## Exception Hierarchy

```
PanelError (base)
├── DeviceError
│   ├── DeviceConnectionError
│   ├── DeviceRequestError
│   └── DeviceResponseError
├── SnapshotRefreshError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `PanelError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Device unreachable

```python
from pca9956b_cli.exceptions import DeviceConnectionError

raise DeviceConnectionError("http://localhost:80", "get LED info", original_error="Connection refused")

# User sees: "Cannot reach the device service at http://localhost:80"
# Recovery hint: "Check --host, --port and --https, and that the service is running."
```

A failed LED write is reported on the panel's info line and the panel carries
on. A failed status refresh is raised as `SnapshotRefreshError`, which ends
the session (exit code 129).
"""

from .base import PanelError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import (
    DeviceConnectionError,
    DeviceError,
    DeviceRequestError,
    DeviceResponseError,
    SnapshotRefreshError,
)
from .handlers import (
    ErrorCollector,
    ErrorContext,
    format_error_for_display,
    wrap_http_error,
    wrap_pydantic_error,
)

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceConnectionError",
    "DeviceError",
    "DeviceRequestError",
    "DeviceResponseError",
    "SnapshotRefreshError",
    # Handlers
    "ErrorCollector",
    "ErrorContext",
    "format_error_for_display",
    "wrap_http_error",
    "wrap_pydantic_error",
    # Base
    "PanelError",
]
