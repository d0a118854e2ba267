"""Devices module - printer enumeration and target selection."""

from .router import router
from .schemas import Device, DeviceListResponse
from .selector import select_target
from .service import DeviceDirectory

__all__ = ["router", "Device", "DeviceListResponse", "select_target", "DeviceDirectory"]
