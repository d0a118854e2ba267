"""Devices module schemas."""

from pydantic import BaseModel, Field


class Device(BaseModel):
    """An installed output device as reported by the OS."""

    name: str
    is_default: bool = False


class DeviceListResponse(BaseModel):
    """Response for the printer listing."""

    success: bool = True
    printers: list[Device] = Field(default_factory=list)
    count: int = 0
    error: str | None = None
