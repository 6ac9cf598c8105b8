"""Panel configuration model."""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_serializer

from pca9956b_cli.exceptions import wrap_pydantic_error
from pca9956b_cli.utils.persistence import PydanticPersistence

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".pca9956b" / "config.json"


class PanelConfig(BaseModel):
    """Where the device service lives and which PCA9956B to drive."""

    # Transport
    https: bool = Field(default=False, description="Whether to use HTTPS or not")
    host: str = Field(default="localhost", min_length=1, description="Hostname to contact")
    port: int = Field(default=80, ge=1, le=65535, description="Port to contact")
    ca_cert: Path | None = Field(
        default=None,
        description="CA bundle used to verify the service certificate (HTTPS only)",
    )
    request_timeout: float = Field(
        default=5.0, gt=0, description="Timeout for each device service call (seconds)"
    )

    # Target device
    bus: int = Field(default=0, ge=0, description="I2C Bus ID")
    addr: int = Field(default=32, ge=0, le=127, description="PCA9956B I2C address")

    # Input
    escape_timeout_ms: int = Field(
        default=25,
        ge=0,
        le=1000,
        description="How long to wait for the rest of a cursor-key sequence after Esc (ms)",
    )

    @field_serializer("ca_cert")
    def serialize_path(self, path: Path | None) -> str | None:
        """Serialize Path to string."""
        return str(path) if path is not None else None

    @property
    def base_url(self) -> str:
        """URL of the device service."""
        scheme = "https" if self.https else "http"
        return f"{scheme}://{self.host}:{self.port}"

    def with_overrides(self, **values: Any) -> "PanelConfig":
        """
        Return a validated copy with the given fields replaced.

        None values are ignored so unset command-line options keep the
        value from the config file.

        Raises:
            ConfigValidationError: If an override is invalid
        """
        updates = {key: value for key, value in values.items() if value is not None}
        if not updates:
            return self
        try:
            return self.model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise wrap_pydantic_error(e, "command line") from e

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "PanelConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.pca9956b/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        if not path.exists():
            logger.debug(f"No config file at {path}, using defaults")
            return cls()

        return PydanticPersistence.load_json(path, cls)
