"""Devices module routes."""

from fastapi import APIRouter, Depends

from .schemas import DeviceListResponse
from .service import DeviceDirectory

router = APIRouter(tags=["printers"])


def get_directory() -> DeviceDirectory:
    """Dependency injection for directory."""
    return DeviceDirectory()


@router.get("/printers", response_model=DeviceListResponse)
async def list_printers(
    directory: DeviceDirectory = Depends(get_directory),
) -> DeviceListResponse:
    """List installed printers and which one is the system default."""
    printers = await directory.list_devices()
    return DeviceListResponse(
        success=directory.last_error is None,
        printers=printers,
        count=len(printers),
        error=directory.last_error,
    )
