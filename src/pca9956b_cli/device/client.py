"""HTTP client for the PCA9956B REST service."""

import logging
import ssl
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from pca9956b_cli.exceptions import DeviceResponseError, wrap_http_error
from pca9956b_cli.models import NUM_CHANNELS, ChannelState, ChannelStatus, PanelConfig

logger = logging.getLogger(__name__)

LED_INFO_PATH = "/pca9956b/{bus}/{addr}/led/info"
LED_STATE_PATH = "/pca9956b/{bus}/{addr}/led/{led}/state/{state}"

_STATUS_LIST = TypeAdapter(list[ChannelStatus])


class HttpDeviceService:
    """
    DeviceService backed by the PCA9956B REST API.

    One httpx.Client is kept for the lifetime of the service so every call
    reuses the connection. Calls are synchronous and each one completes
    (or fails) before returning.

    Usage:
        with HttpDeviceService.from_config(config) as service:
            statuses = service.fetch_all(config.bus, config.addr)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        verify: bool | ssl.SSLContext = True,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service URL, e.g. "http://localhost:80"
            timeout: Timeout for each call (seconds)
            verify: TLS verification (True, False, or an SSL context)
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            verify=verify,
            transport=transport,
        )
        logger.debug(f"HttpDeviceService created for {base_url}")

    @classmethod
    def from_config(cls, config: PanelConfig) -> "HttpDeviceService":
        """Create a client for the service described by the config."""
        verify: bool | ssl.SSLContext = True
        if config.https and config.ca_cert is not None:
            verify = ssl.create_default_context(cafile=str(Path(config.ca_cert).expanduser()))
        return cls(config.base_url, timeout=config.request_timeout, verify=verify)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HttpDeviceService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _request(self, method: str, path: str, operation: str) -> httpx.Response:
        try:
            response = self._client.request(method, path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise wrap_http_error(e, self.base_url, operation) from e
        return response

    def fetch_all(self, bus: int, address: int) -> list[ChannelStatus]:
        """
        Read the status of every LED output.

        Raises:
            DeviceError: If the call fails or the payload is not 24 LED statuses
        """
        operation = "get LED info"
        path = LED_INFO_PATH.format(bus=bus, addr=address)
        logger.debug(f"GET {path}")
        response = self._request("GET", path, operation)

        payload = self._json(response, operation)
        try:
            statuses = _STATUS_LIST.validate_python(payload)
        except ValidationError as e:
            raise DeviceResponseError(operation, str(e)) from e

        indices = sorted(status.index for status in statuses)
        if indices != list(range(NUM_CHANNELS)):
            raise DeviceResponseError(
                operation, f"expected LEDs 0-{NUM_CHANNELS - 1}, got {indices}"
            )
        return sorted(statuses, key=lambda s: s.index)

    def set_channel_state(self, bus: int, address: int, channel: int, state: ChannelState) -> None:
        """
        Set the driver state of one LED output.

        Raises:
            DeviceError: If the service rejects the call or cannot be reached
        """
        operation = f"set LED {channel} to {state.label}"
        path = LED_STATE_PATH.format(bus=bus, addr=address, led=channel, state=state.value)
        logger.debug(f"POST {path}")
        self._request("POST", path, operation)

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DeviceResponseError(operation, f"body is not JSON: {e}") from e
