"""Health module routes."""

from fastapi import APIRouter, Depends

from .schemas import StatusResponse
from .service import StatusService

router = APIRouter()


def get_status_service() -> StatusService:
    """Dependency injection for service."""
    return StatusService()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/status", response_model=StatusResponse)
async def status(service: StatusService = Depends(get_status_service)) -> StatusResponse:
    """Readiness: helper installed, printers present, PDF association sane."""
    return await service.get_status()
