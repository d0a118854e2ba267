"""Jobs module - render-then-print orchestration."""

from .router import router
from .schemas import PrintResponse
from .service import JobService, get_job_service, reset_job_service

__all__ = ["router", "PrintResponse", "JobService", "get_job_service", "reset_job_service"]
