"""Access to the PCA9956B device-control service."""

from .client import HttpDeviceService
from .protocols import DeviceService

__all__ = [
    "DeviceService",
    "HttpDeviceService",
]
