"""Health module - liveness and readiness."""

from .router import router
from .service import StatusService

__all__ = ["router", "StatusService"]
